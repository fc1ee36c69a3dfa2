DEFAULT_ROWS = 3
DEFAULT_COLS = 3
# Attempts allowed before the board is forcibly reset.
DEFAULT_ATTEMPT_LIMIT = 12

DEFAULT_ANIMAL_IDS = (
    "Perro",
    "Gato",
    "Elefante",
    "Tigre",
    "Mono",
    "Pajaro",
    "Vaca",
    "Caballo",
    "Conejo",
)
# Label of the unpaired card on odd-sized boards when the id source runs out.
EXTRA_CARD_ID = "Extra"

# Console presentation timings (seconds). The engine itself never waits.
INITIAL_REVEAL_SECONDS = 2.0
HIDE_DELAY_SECONDS = 1.0

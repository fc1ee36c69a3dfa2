from dataclasses import dataclass

@dataclass(slots=True)
class Card:
    """A single board cell.

    ``revealed`` is the face-up state of the current turn; ``matched`` is
    terminal and survives every later flip or hide.
    """
    id: str
    revealed: bool = False
    matched: bool = False

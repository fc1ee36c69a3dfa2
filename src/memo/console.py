"""Text console front end for MemoAnimalia.

Prints the board, reads two card indices per turn and applies the classic
presentation policy: every card is shown briefly before play starts, and a
mismatched pair stays visible for a moment before it is hidden again.

Run with: ``python -m memo.console`` (or the ``memoanimalia`` script).
"""
from __future__ import annotations

import time
from typing import Callable, Optional

from memo.components.card import Card
from memo.components.turn_state import FlipResult
from memo.constants import HIDE_DELAY_SECONDS, INITIAL_REVEAL_SECONDS
from memo.events.bus import EventBus
from memo.systems.memory_game import MemoryGameSystem
from memo.utils.logging_config import get_logger, setup_logging
from memo.world import create_world

logger = get_logger(__name__)

HIDDEN_LABEL = "[ ]"


class ConsoleListener:
    """Writes one line per engine event."""

    def __init__(self, write: Callable[[str], None] = print):
        self.write = write

    def on_card_revealed(self, index: int, card: Card) -> None:
        self.write(f"Revealed {index} -> {card.id}")

    def on_cards_hidden(self, index1: int, index2: int) -> None:
        self.write(f"No pair: {index1}, {index2}")

    def on_cards_matched(self, index1: int, index2: int) -> None:
        self.write(f"Pair! {index1}, {index2}")

    def on_attempt_changed(self, attempts: int) -> None:
        self.write(f"Attempts: {attempts}")

    def on_match_count_changed(self, matches_found: int) -> None:
        self.write(f"Matches: {matches_found}")

    def on_game_won(self, attempts: int) -> None:
        self.write(f"You won in {attempts} attempts.")

    def on_game_over_attempt_limit(self, attempt_limit: int) -> None:
        self.write(f"Attempt limit of {attempt_limit} reached. Restarting...")

    def on_game_reset(self) -> None:
        self.write("Board reset and shuffled.")


def render_board(game: MemoryGameSystem, *, reveal_all: bool = False) -> str:
    cells = []
    lines = []
    for index, card in enumerate(game.board_snapshot()):
        visible = reveal_all or card.revealed or card.matched
        cells.append(f"{index:2d}:{(card.id if visible else HIDDEN_LABEL):<10}")
        if (index + 1) % game.cols == 0:
            lines.append("".join(cells).rstrip())
            cells = []
    if cells:
        lines.append("".join(cells).rstrip())
    return "\n".join(lines)


def _read_index(prompt: str, read_line: Callable[[str], str], write: Callable[[str], None]) -> int:
    """Prompt until an integer is entered. EOFError propagates to end the session."""
    while True:
        raw = read_line(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            write(f"'{raw}' is not a card number.")


def run_console(
    game: MemoryGameSystem,
    *,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    sleep: Callable[[float], None] = time.sleep,
    max_turns: Optional[int] = None,
) -> int:
    """Play ``game`` interactively and return the number of completed turns."""
    write(f"Showing all cards for {INITIAL_REVEAL_SECONDS:g} seconds...")
    write(render_board(game, reveal_all=True))
    sleep(INITIAL_REVEAL_SECONDS)
    write("Enter two card numbers per turn.")

    turns = 0
    while max_turns is None or turns < max_turns:
        write(render_board(game))
        try:
            first = _read_index("First card: ", read_line, write)
            first_result = game.flip_card(first)
            if first_result in (FlipResult.INVALID_INDEX, FlipResult.ALREADY_REVEALED):
                write(f"Card {first} cannot be flipped ({first_result.name}).")
                continue
            second = _read_index("Second card: ", read_line, write)
        except EOFError:
            logger.info("Input closed after %d turns", turns)
            break
        result = game.flip_card(second)
        if result in (FlipResult.INVALID_INDEX, FlipResult.ALREADY_REVEALED):
            # Abandon the turn: the first card goes face down again.
            write(f"Card {second} cannot be flipped ({result.name}).")
            game.hide_cards(first, first)
            continue
        turns += 1
        if result == FlipResult.NO_MATCH:
            sleep(HIDE_DELAY_SECONDS)
            game.hide_cards(first, second)
        if game.is_game_won():
            write(f"Congratulations! You won with {game.attempts} attempts.")
            break
    return turns


def main() -> None:
    setup_logging("WARNING")
    bus = EventBus()
    game = MemoryGameSystem(create_world(), bus)
    game.set_listener(ConsoleListener())
    run_console(game)


if __name__ == "__main__":
    main()

from __future__ import annotations

import random
from typing import Iterable, Sequence

from memo.events.bus import (
    EventBus,
    EVENT_ATTEMPT_CHANGED,
    EVENT_CARD_REVEALED,
    EVENT_CARDS_HIDDEN,
    EVENT_CARDS_MATCHED,
    EVENT_GAME_OVER_ATTEMPT_LIMIT,
    EVENT_GAME_RESET,
    EVENT_GAME_WON,
    EVENT_MATCH_COUNT_CHANGED,
)
from memo.systems.memory_game import MemoryGameSystem
from memo.world import create_world

ALL_EVENTS = (
    EVENT_CARD_REVEALED,
    EVENT_CARDS_HIDDEN,
    EVENT_CARDS_MATCHED,
    EVENT_ATTEMPT_CHANGED,
    EVENT_MATCH_COUNT_CHANGED,
    EVENT_GAME_WON,
    EVENT_GAME_OVER_ATTEMPT_LIMIT,
    EVENT_GAME_RESET,
)


def record_events(bus: EventBus, names: Iterable[str] = ALL_EVENTS) -> list[tuple[str, dict]]:
    """Subscribe to ``names`` and collect ``(name, payload)`` tuples in emission order."""
    log: list[tuple[str, dict]] = []
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **payload: log.append((_name, payload)))
    return log


def make_game(
    rows: int = 3,
    cols: int = 3,
    ids: Sequence[str] | None = ("A", "B", "C", "D", "E"),
    attempt_limit: int = 20,
    seed: int = 7,
) -> tuple[MemoryGameSystem, EventBus]:
    bus = EventBus()
    game = MemoryGameSystem(create_world(), bus, rows, cols, ids, attempt_limit, rng=random.Random(seed))
    return game, bus


def find_pairs(game: MemoryGameSystem) -> list[tuple[int, int]]:
    """Index pairs sharing an id, in board order of their first card."""
    first_seen: dict[str, int] = {}
    pairs: list[tuple[int, int]] = []
    for index, card in enumerate(game.board_snapshot()):
        if card.id in first_seen:
            pairs.append((first_seen.pop(card.id), index))
        else:
            first_seen[card.id] = index
    return pairs


def find_mismatched_pair(game: MemoryGameSystem) -> tuple[int, int]:
    snapshot = game.board_snapshot()
    for i, card in enumerate(snapshot):
        for j in range(i + 1, len(snapshot)):
            if snapshot[j].id != card.id:
                return i, j
    raise AssertionError("board has no two cards with different ids")

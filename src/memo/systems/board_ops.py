"""Helpers for dealing and inspecting the card board.

Functions touching entities operate on the current esper world; callers are
expected to wrap them in ``memo.world.use_world``.
"""
from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence

import esper

from memo.components.board import Board
from memo.components.board_position import BoardPosition
from memo.components.card import Card
from memo.constants import EXTRA_CARD_ID


def build_deck(animal_ids: Iterable[str], size: int, extra_id: str = EXTRA_CARD_ID) -> List[str]:
    """Return the unshuffled card ids for a board of ``size`` cells.

    Ids are taken in order, two cards each, repeating the source as often as
    needed. An odd ``size`` gets one unpaired card.
    """
    ids = list(animal_ids)
    if not ids:
        raise ValueError("animal_ids must contain at least one id")
    pairs = size // 2
    while len(ids) < pairs:
        ids.extend(list(ids))
    deck: List[str] = []
    for card_id in ids[:pairs]:
        deck.extend((card_id, card_id))
    if size % 2 == 1:
        deck.append(ids[pairs] if len(ids) > pairs else extra_id)
    return deck


def deal_cards(board: Board, deck: Sequence[str], rng: random.Random) -> List[int]:
    """Shuffle ``deck`` and spawn one card entity per cell, row-major.

    Returns the card entities ordered by board index.
    """
    if len(deck) != board.size:
        raise ValueError("deck length must equal rows*cols")
    shuffled = list(deck)
    rng.shuffle(shuffled)
    entities: List[int] = []
    for index, card_id in enumerate(shuffled):
        row, col = divmod(index, board.cols)
        ent = esper.create_entity(Card(id=card_id), BoardPosition(index=index, row=row, col=col))
        entities.append(ent)
    return entities


def clear_cards() -> None:
    for ent, _ in list(esper.get_component(Card)):
        esper.delete_entity(ent, immediate=True)


def card_at(index: int) -> Optional[Card]:
    for _, (pos, card) in esper.get_components(BoardPosition, Card):
        if pos.index == index:
            return card
    return None


def ordered_cards() -> List[Card]:
    """All cards of the current world sorted by board index."""
    placed = [(pos.index, card) for _, (pos, card) in esper.get_components(BoardPosition, Card)]
    placed.sort(key=lambda item: item[0])
    return [card for _, card in placed]

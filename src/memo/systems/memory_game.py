from __future__ import annotations

import random
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterable, Iterator, Optional, Tuple

import esper

from memo.components.board import Board
from memo.components.card import Card
from memo.components.score import Score
from memo.components.turn_state import FlipResult, TurnState
from memo.constants import DEFAULT_ANIMAL_IDS, DEFAULT_ATTEMPT_LIMIT, DEFAULT_COLS, DEFAULT_ROWS
from memo.events.bus import (
    EventBus,
    EVENT_ATTEMPT_CHANGED,
    EVENT_CARD_CLICK,
    EVENT_CARD_REVEALED,
    EVENT_CARDS_HIDDEN,
    EVENT_CARDS_MATCHED,
    EVENT_GAME_OVER_ATTEMPT_LIMIT,
    EVENT_GAME_RESET,
    EVENT_GAME_WON,
    EVENT_MATCH_COUNT_CHANGED,
)
from memo.events.listener import GameListener, ListenerBinding
from memo.systems.board_ops import build_deck, card_at, clear_cards, deal_cards, ordered_cards
from memo.utils.logging_config import get_logger
from memo.world import delete_world, use_world

logger = get_logger(__name__)


class MemoryGameSystem:
    """Memory-matching game engine.

    Owns the card board of one esper world and runs the two-flip turn
    protocol. Every public operation resolves synchronously and emits its
    events inline on ``event_bus``; timing (how long a mismatched pair stays
    visible) is left to the presentation layer, which calls ``hide_cards``
    after it receives ``cards_hidden``.

    Public operations run inside the engine world context, whose re-entrant
    lock serializes them and lets listeners call back into the engine. A
    listener that re-deals the board mid-turn ends that turn: no further
    events of the old deal are emitted.

    Each engine expects its own bus for ``card_click`` input; call ``close``
    to detach it from the bus and drop its world.
    """

    def __init__(
        self,
        world: str,
        event_bus: EventBus,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        animal_ids: Iterable[str] | None = None,
        attempt_limit: int = DEFAULT_ATTEMPT_LIMIT,
        *,
        rng: random.Random | None = None,
    ) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError("rows/cols must be positive")
        if attempt_limit <= 0:
            raise ValueError("attempt_limit must be positive")
        ids = tuple(animal_ids) if animal_ids is not None else DEFAULT_ANIMAL_IDS
        if not ids:
            raise ValueError("animal_ids must contain at least one id")

        self.world = world
        self.event_bus = event_bus
        self.random = rng or random.Random()
        self.board = Board(rows=rows, cols=cols, attempt_limit=attempt_limit)
        self._animal_ids = ids
        self._deal = 0
        self._listener_binding: Optional[ListenerBinding] = None

        with self._guarded():
            self.board_entity = esper.create_entity(self.board, TurnState(), Score())
        self.event_bus.subscribe(EVENT_CARD_CLICK, self.on_card_click)
        self._init_board()

    # ------------------------------------------------------------------
    # Configuration & read-only state
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def cols(self) -> int:
        return self.board.cols

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def attempt_limit(self) -> int:
        return self.board.attempt_limit

    @property
    def attempts(self) -> int:
        with self._guarded():
            return self._score().attempts

    @property
    def matches_found(self) -> int:
        with self._guarded():
            return self._score().matches_found

    @property
    def first_selected_index(self) -> Optional[int]:
        with self._guarded():
            return self._turn_state().first_selected_index

    def get_card(self, index: int) -> Card:
        """Return a copy of the card at ``index``.

        ``index`` must lie in ``[0, size)``; anything else raises ``IndexError``.
        """
        with self._guarded():
            if not self._is_valid_index(index):
                raise IndexError(f"card index {index!r} out of range 0..{self.size - 1}")
            return replace(self._card(index))

    def board_snapshot(self) -> Tuple[Card, ...]:
        """Copies of every card in board order; mutating them has no effect on the game."""
        with self._guarded():
            return tuple(replace(card) for card in ordered_cards())

    def is_game_won(self) -> bool:
        with self._guarded():
            return self._score().matches_found >= self.board.pairs

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def set_listener(self, listener: GameListener | None) -> None:
        """Bind ``listener`` to the engine events, replacing the previous one."""
        with self._guarded():
            if self._listener_binding is not None:
                self._listener_binding.unbind()
                self._listener_binding = None
            if listener is not None:
                self._listener_binding = ListenerBinding(self.event_bus, listener)

    def flip_card(self, index: int) -> FlipResult:
        with self._guarded():
            if not self._is_valid_index(index):
                return FlipResult.INVALID_INDEX
            card = self._card(index)
            if card.matched or card.revealed:
                return FlipResult.ALREADY_REVEALED

            deal = self._deal
            card.revealed = True
            logger.debug("Card %d revealed (%s)", index, card.id)
            if not self._emit_in_deal(deal, EVENT_CARD_REVEALED, index=index, card=replace(card)):
                return FlipResult.OK_REVEALED

            turn = self._turn_state()
            if turn.first_selected_index is None:
                turn.first_selected_index = index
                return FlipResult.OK_REVEALED

            first_index = turn.first_selected_index
            turn.first_selected_index = None
            first = self._card(first_index)
            result = FlipResult.MATCH if first.id == card.id else FlipResult.NO_MATCH
            score = self._score()
            score.attempts += 1
            if not self._emit_in_deal(deal, EVENT_ATTEMPT_CHANGED, attempts=score.attempts):
                return result

            if result == FlipResult.MATCH:
                first.matched = True
                card.matched = True
                score.matches_found += 1
                logger.debug("Pair %s matched at %d/%d", card.id, first_index, index)
                if not self._emit_in_deal(deal, EVENT_CARDS_MATCHED, index1=first_index, index2=index):
                    return result
                if not self._emit_in_deal(deal, EVENT_MATCH_COUNT_CHANGED, matches_found=score.matches_found):
                    return result
                if score.matches_found >= self.board.pairs:
                    logger.info("Game won after %d attempts", score.attempts)
                    if not self._emit_in_deal(deal, EVENT_GAME_WON, attempts=score.attempts):
                        return result
            elif not self._emit_in_deal(deal, EVENT_CARDS_HIDDEN, index1=first_index, index2=index):
                return result

            # The limit applies even on a winning turn; the win is reported first.
            if score.attempts >= self.board.attempt_limit:
                logger.info("Attempt limit %d reached, resetting board", self.board.attempt_limit)
                if self._emit_in_deal(deal, EVENT_GAME_OVER_ATTEMPT_LIMIT, attempt_limit=self.board.attempt_limit):
                    self._init_board()
            return result

    def hide_cards(self, index1: int, index2: int) -> None:
        """Turn two unmatched cards face down again. Invalid indices are ignored."""
        with self._guarded():
            turn = self._turn_state()
            for index in (index1, index2):
                if not self._is_valid_index(index):
                    continue
                card = self._card(index)
                if card.matched:
                    continue
                card.revealed = False
                if turn.first_selected_index == index:
                    turn.first_selected_index = None

    def reset_for_new_game(self) -> None:
        self._init_board()

    def close(self) -> None:
        """Detach from the bus and drop the engine world. The engine is unusable afterwards."""
        self.event_bus.unsubscribe(EVENT_CARD_CLICK, self.on_card_click)
        self.set_listener(None)
        delete_world(self.world)

    def on_card_click(self, sender, **kwargs):
        index = kwargs.get('index')
        if index is None:
            return
        self.flip_card(index)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    @contextmanager
    def _guarded(self) -> Iterator[None]:
        with use_world(self.world):
            yield

    def _init_board(self) -> None:
        with self._guarded():
            clear_cards()
            deck = build_deck(self._animal_ids, self.board.size)
            deal_cards(self.board, deck, self.random)
            self._deal += 1
            score = self._score()
            score.attempts = 0
            score.matches_found = 0
            self._turn_state().first_selected_index = None
            logger.info(
                "Dealt %dx%d board (%d pairs, attempt limit %d)",
                self.board.rows,
                self.board.cols,
                self.board.pairs,
                self.board.attempt_limit,
            )
            self.event_bus.emit(EVENT_GAME_RESET)

    def _emit_in_deal(self, deal: int, name: str, **payload) -> bool:
        """Emit ``name``; False when a handler re-dealt the board meanwhile."""
        self.event_bus.emit(name, **payload)
        return self._deal == deal

    def _is_valid_index(self, index) -> bool:
        return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < self.board.size

    def _card(self, index: int) -> Card:
        card = card_at(index)
        if card is None:
            raise IndexError(f"no card at index {index}")
        return card

    def _score(self) -> Score:
        return esper.component_for_entity(self.board_entity, Score)

    def _turn_state(self) -> TurnState:
        return esper.component_for_entity(self.board_entity, TurnState)

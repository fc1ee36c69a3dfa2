"""Single-listener notification contract for presentation layers.

A ``GameListener`` receives every engine event as a plain method call. It is
bound onto the ``EventBus`` through ``ListenerBinding`` so that it coexists
with any other bus subscribers.
"""
from __future__ import annotations

from typing import Protocol

from memo.components.card import Card
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


class GameListener(Protocol):
    def on_card_revealed(self, index: int, card: Card) -> None: ...

    def on_cards_hidden(self, index1: int, index2: int) -> None: ...

    def on_cards_matched(self, index1: int, index2: int) -> None: ...

    def on_attempt_changed(self, attempts: int) -> None: ...

    def on_match_count_changed(self, matches_found: int) -> None: ...

    def on_game_won(self, attempts: int) -> None: ...

    def on_game_over_attempt_limit(self, attempt_limit: int) -> None: ...

    def on_game_reset(self) -> None: ...


class ListenerBinding:
    """Forwards bus events to one ``GameListener`` until ``unbind`` is called."""

    def __init__(self, event_bus: EventBus, listener: GameListener):
        self.event_bus = event_bus
        self.listener = listener
        self._handlers = {
            EVENT_CARD_REVEALED: self._on_card_revealed,
            EVENT_CARDS_HIDDEN: self._on_cards_hidden,
            EVENT_CARDS_MATCHED: self._on_cards_matched,
            EVENT_ATTEMPT_CHANGED: self._on_attempt_changed,
            EVENT_MATCH_COUNT_CHANGED: self._on_match_count_changed,
            EVENT_GAME_WON: self._on_game_won,
            EVENT_GAME_OVER_ATTEMPT_LIMIT: self._on_game_over_attempt_limit,
            EVENT_GAME_RESET: self._on_game_reset,
        }
        for name, handler in self._handlers.items():
            self.event_bus.subscribe(name, handler)

    def unbind(self) -> None:
        for name, handler in self._handlers.items():
            self.event_bus.unsubscribe(name, handler)
        self._handlers = {}

    def _on_card_revealed(self, sender, **payload):
        self.listener.on_card_revealed(payload["index"], payload["card"])

    def _on_cards_hidden(self, sender, **payload):
        self.listener.on_cards_hidden(payload["index1"], payload["index2"])

    def _on_cards_matched(self, sender, **payload):
        self.listener.on_cards_matched(payload["index1"], payload["index2"])

    def _on_attempt_changed(self, sender, **payload):
        self.listener.on_attempt_changed(payload["attempts"])

    def _on_match_count_changed(self, sender, **payload):
        self.listener.on_match_count_changed(payload["matches_found"])

    def _on_game_won(self, sender, **payload):
        self.listener.on_game_won(payload["attempts"])

    def _on_game_over_attempt_limit(self, sender, **payload):
        self.listener.on_game_over_attempt_limit(payload["attempt_limit"])

    def _on_game_reset(self, sender, **payload):
        self.listener.on_game_reset()

from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of short-lived listener adapters alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT
# ============================================================================
EVENT_CARD_CLICK = "card_click"                          # payload: index=int


# ============================================================================
# CARDS & TURNS
# ============================================================================
EVENT_CARD_REVEALED = "card_revealed"                    # payload: index=int, card=Card
EVENT_CARDS_HIDDEN = "cards_hidden"                      # payload: index1=int, index2=int
EVENT_CARDS_MATCHED = "cards_matched"                    # payload: index1=int, index2=int


# ============================================================================
# COUNTERS
# ============================================================================
EVENT_ATTEMPT_CHANGED = "attempt_changed"                # payload: attempts=int
EVENT_MATCH_COUNT_CHANGED = "match_count_changed"        # payload: matches_found=int


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_GAME_WON = "game_won"                              # payload: attempts=int
EVENT_GAME_OVER_ATTEMPT_LIMIT = "game_over_attempt_limit"  # payload: attempt_limit=int
EVENT_GAME_RESET = "game_reset"                          # payload: None

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class FlipResult(Enum):
    """Outcome of a single ``flip_card`` call."""
    OK_REVEALED = auto()
    MATCH = auto()
    NO_MATCH = auto()
    ALREADY_REVEALED = auto()
    INVALID_INDEX = auto()


@dataclass(slots=True)
class TurnState:
    """Tracks the card revealed first in the current turn, if any."""

    first_selected_index: Optional[int] = None

from dataclasses import dataclass


@dataclass(slots=True)
class Score:
    """Attempt and match counters for the current deal."""

    attempts: int = 0
    matches_found: int = 0

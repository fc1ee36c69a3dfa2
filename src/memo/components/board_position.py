from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    index: int
    row: int
    col: int

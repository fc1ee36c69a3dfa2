from dataclasses import dataclass

@dataclass(slots=True, frozen=True)
class Board:
    rows: int
    cols: int
    attempt_limit: int

    @property
    def size(self) -> int:
        return self.rows * self.cols

    @property
    def pairs(self) -> int:
        return self.size // 2

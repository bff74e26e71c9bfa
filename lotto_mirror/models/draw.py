"""One mirrored lotto draw."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Draw:
    """One draw with 6 winning numbers + bonus.

    Numbers keep the order the upstream reported them in.
    """

    draw_no: int
    draw_date: str
    numbers: tuple[int, int, int, int, int, int]
    bonus: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "draw_no": self.draw_no,
            "draw_date": self.draw_date,
            "numbers": list(self.numbers),
            "bonus": self.bonus,
        }

"""
Score type shared by the evaluators and the search.

Four cases: the two saturating bounds used to open a search window, a running
heuristic estimate, and an exact final disk differential. A proven win or loss
outranks any running estimate; a proven draw sits where a running 0.0 would.
"""

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Union


class ScoreKind(Enum):
    NEG_INFINITY = "neg_infinity"
    INFINITY = "infinity"
    RUNNING = "running"
    ENDED = "ended"


def _sign(v: Union[int, float]) -> int:
    return (v > 0) - (v < 0)


@total_ordering
@dataclass(frozen=True, eq=False)
class Score:
    kind: ScoreKind
    value: Union[int, float] = 0

    @classmethod
    def running(cls, value: float) -> "Score":
        return cls(ScoreKind.RUNNING, float(value))

    @classmethod
    def ended(cls, value: int) -> "Score":
        return cls(ScoreKind.ENDED, int(value))

    def compare(self, other: "Score") -> int:
        """Return -1, 0 or 1 as ``self`` is below, equal to or above ``other``."""
        a, b = self.kind, other.kind

        if a is b and a in (ScoreKind.NEG_INFINITY, ScoreKind.INFINITY):
            return 0
        if a is ScoreKind.NEG_INFINITY or b is ScoreKind.INFINITY:
            return -1
        if b is ScoreKind.NEG_INFINITY or a is ScoreKind.INFINITY:
            return 1

        if a is b:
            return _sign(self.value - other.value)

        if a is ScoreKind.RUNNING:
            # other is ENDED
            if other.value != 0:
                return -_sign(other.value)
            return _sign(self.value)

        # self is ENDED, other is RUNNING
        if self.value != 0:
            return _sign(self.value)
        return -_sign(other.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Score):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: "Score") -> bool:
        if not isinstance(other, Score):
            return NotImplemented
        return self.compare(other) < 0

    __hash__ = None

    def __mul__(self, coef: int) -> "Score":
        if self.kind is ScoreKind.RUNNING:
            return Score.running(coef * self.value)
        if self.kind is ScoreKind.ENDED:
            return Score.ended(coef * self.value)
        return self

    def is_final(self) -> bool:
        return self.kind is ScoreKind.ENDED

    def __repr__(self) -> str:
        if self.kind is ScoreKind.RUNNING:
            return f"Score.running({self.value!r})"
        if self.kind is ScoreKind.ENDED:
            return f"Score.ended({self.value!r})"
        return f"Score({self.kind.name})"

    def __str__(self) -> str:
        if self.kind is ScoreKind.RUNNING:
            return f"running {self.value:+.3f}"
        if self.kind is ScoreKind.ENDED:
            return f"ended {self.value:+d}"
        return "-inf" if self.kind is ScoreKind.NEG_INFINITY else "+inf"


MIN_SCORE = Score(ScoreKind.NEG_INFINITY)
MAX_SCORE = Score(ScoreKind.INFINITY)

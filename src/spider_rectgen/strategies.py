"""spider_rectgen.strategies

Candidate point strategies driven by :class:`spider_rectgen.core.PointGenerator`.

A strategy answers one question: given the previously *accepted* point and
the number of points accepted so far, where is the next candidate? Candidates
may fall outside the unit square; the generator rejects those and asks again.

Strategies hold only their (immutable) distribution parameters. Anything that
changes between calls, such as the chaos-game position of
:class:`SierpinskiStrategy`, is passed in explicitly by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Optional, Protocol, Tuple

from .sampling import RandomEngine

Point = Tuple[float, float]

SQRT2 = math.sqrt(2.0)

TRIANGLE: Tuple[Point, Point, Point] = (
    (0.0, 0.0),
    (1.0, 0.0),
    (0.5, math.sqrt(3.0) / 2.0),
)


class PointStrategy(Protocol):
    def next_point(self, engine: RandomEngine, previous: Optional[Point], index: int) -> Point:
        ...


@dataclass(frozen=True)
class UniformStrategy:
    """Independent U(0, 1) per axis."""

    def next_point(self, engine: RandomEngine, previous: Optional[Point], index: int) -> Point:
        return engine.rnd(), engine.rnd()


@dataclass(frozen=True)
class DiagonalStrategy:
    """Points on, or scattered around, the diagonal y = x.

    Attributes
    ----------
    percentage:
        Probability that a point lies exactly on the diagonal.
    buffer:
        Scale of the perpendicular deviation for the remaining points. The
        deviation is N(0, buffer / 5), rotated onto the axis perpendicular to
        the diagonal.
    """

    percentage: float
    buffer: float

    def next_point(self, engine: RandomEngine, previous: Optional[Point], index: int) -> Point:
        if engine.bernoulli(self.percentage) == 1:
            x = y = engine.uniform(0.0, 1.0)
            return x, y

        c = engine.uniform(0.0, 1.0)
        d = engine.normal(0.0, self.buffer / 5)
        return c + d / SQRT2, c - d / SQRT2


@dataclass(frozen=True)
class GaussianStrategy:
    """N(0.5, 0.1) per axis."""

    mu: float = 0.5
    sigma: float = 0.1

    def next_point(self, engine: RandomEngine, previous: Optional[Point], index: int) -> Point:
        x = engine.normal(self.mu, self.sigma)
        y = engine.normal(self.mu, self.sigma)
        return x, y


def middle_point(p: Point, q: Point) -> Point:
    return (p[0] + q[0]) / 2.0, (p[1] + q[1]) / 2.0


@dataclass(frozen=True)
class SierpinskiStrategy:
    """Chaos game over an equilateral triangle.

    The first three points are the triangle vertices. Every later point is
    the midpoint between the previous accepted point and a vertex picked with
    weights 2/5, 2/5, 1/5 (a roll of a five-sided die).
    """

    def next_point(self, engine: RandomEngine, previous: Optional[Point], index: int) -> Point:
        if index < len(TRIANGLE):
            return TRIANGLE[index]
        if previous is None:
            raise ValueError("chaos game step needs the previously accepted point")

        roll = engine.dice(5)
        if roll <= 2:
            anchor = TRIANGLE[0]
        elif roll <= 4:
            anchor = TRIANGLE[1]
        else:
            anchor = TRIANGLE[2]
        return middle_point(previous, anchor)


@dataclass(frozen=True)
class BitStrategy:
    """Biased binary fractions per axis.

    Each coordinate is sum_{i=1..digits} b_i / 2^i with b_i ~ Bernoulli(bias),
    i.e. a dyadic rational in [0, 1 - 2^-digits].
    """

    bias: float
    digits: int

    def next_point(self, engine: RandomEngine, previous: Optional[Point], index: int) -> Point:
        return self.fraction(engine), self.fraction(engine)

    def fraction(self, engine: RandomEngine) -> float:
        n = 0.0
        for i in range(1, int(self.digits) + 1):
            c = engine.bernoulli(self.bias)
            n += c * 1.0 / (1 << i)
        return n

"""spider_rectgen.core

Synthetic rectangle generation for spatial-data benchmarks.

Two generator families are provided.

Point-based generators
----------------------
A :class:`PointGenerator` draws candidate center points from a
:mod:`~spider_rectgen.strategies` strategy, keeps only those inside the
closed unit square (rejection sampling, no retry cap), and grows a rectangle
around each accepted point:

    w ~ U(0, max_width),  h ~ U(0, max_height)
    rect = (x - w/2, y - h/2, w, h)

Parcel generator
----------------
A :class:`ParcelGenerator` does not sample points. It splits the unit square
breadth-first, always cutting the longer side of the oldest box at a random
fraction in [r, 1 - r], until there are exactly ``cardinality`` boxes. Each
box is then shrunk by an independent factor in (1 - alpha, 1] per axis.

Coordinate convention
---------------------
Rectangles are stored as ``(x, y, width, height)`` with ``(x, y)`` the
lower-left corner.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import logging
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .sampling import RandomEngine, UniformSource
from .strategies import Point, PointStrategy

logger = logging.getLogger(__name__)

Box = Tuple[float, float, float, float]

UNIT_SQUARE: Box = (0.0, 0.0, 1.0, 1.0)


# ---------------------------------------------------------------------------
# Public data containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle with lower-left corner (x, y)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y2(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return self.x + self.width / 2, self.y + self.height / 2


@dataclass(frozen=True)
class RectangleSet:
    """An ordered set of n rectangles.

    Attributes
    ----------
    rects:
        Float64 array of shape (n, 4) holding ``x, y, width, height`` per row,
        in generation order.
    """

    rects: np.ndarray  # (n, 4)

    @classmethod
    def from_boxes(cls, boxes: List[Box]) -> "RectangleSet":
        arr = np.asarray(boxes, dtype=np.float64).reshape(len(boxes), 4)
        return cls(rects=arr)

    @property
    def n(self) -> int:
        return int(self.rects.shape[0])

    def __len__(self) -> int:
        return self.n

    def __iter__(self) -> Iterator[Rectangle]:
        for x, y, w, h in self.rects.tolist():
            yield Rectangle(x, y, w, h)

    def __getitem__(self, i: int) -> Rectangle:
        x, y, w, h = self.rects[i].tolist()
        return Rectangle(x, y, w, h)

    @property
    def lower(self) -> np.ndarray:
        """(n, 2) lower-left corners."""
        return self.rects[:, :2]

    @property
    def upper(self) -> np.ndarray:
        """(n, 2) upper-right corners."""
        return self.rects[:, :2] + self.rects[:, 2:]

    @property
    def centers(self) -> np.ndarray:
        return self.rects[:, :2] + self.rects[:, 2:] / 2

    def as_array(self) -> np.ndarray:
        """Return a (n, 4) array: [x1, y1, x2, y2]."""
        return np.hstack([self.lower, self.upper])


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------

class Generator:
    """Common state of every generator: cardinality, dimensions and an owned engine."""

    def __init__(
        self,
        cardinality: float,
        dimensions: int = 2,
        *,
        seed: Optional[int] = None,
        source: Optional[UniformSource] = None,
    ) -> None:
        self.cardinality = cardinality
        self.dimensions = int(dimensions)
        self.engine = RandomEngine(source=source, seed=seed)

    def generate(self) -> RectangleSet:
        raise NotImplementedError


def in_unit_square(x: float, y: float) -> bool:
    return 0.0 <= x <= 1.0 and 0.0 <= y <= 1.0


class PointGenerator(Generator):
    """Rejection-sampling driver around a point strategy.

    Parameters
    ----------
    strategy:
        Produces candidate points; see :mod:`spider_rectgen.strategies`.
    cardinality:
        Number of rectangles to produce. A fractional count is rounded up.
    dimensions:
        Only 2 is meaningful; stored, not used.
    max_width, max_height:
        Upper bounds of the uniform width/height distributions.
    rejection_warning:
        Log a warning once when rejections exceed this multiple of the
        cardinality. Has no effect on output.
    """

    def __init__(
        self,
        strategy: PointStrategy,
        cardinality: float,
        dimensions: int,
        max_width: float,
        max_height: float,
        *,
        seed: Optional[int] = None,
        source: Optional[UniformSource] = None,
        rejection_warning: float = 100.0,
    ) -> None:
        super().__init__(cardinality, dimensions, seed=seed, source=source)
        self.strategy = strategy
        self.max_width = max_width
        self.max_height = max_height
        self.rejection_warning = rejection_warning
        self.trials = 0
        self.rejections = 0

    def generate(self) -> RectangleSet:
        boxes: List[Box] = []
        previous: Optional[Point] = None
        warn_at = max(1, int(self.rejection_warning * max(self.cardinality, 1)))
        warned = False
        self.trials = 0
        self.rejections = 0

        while len(boxes) < self.cardinality:
            x, y = self.strategy.next_point(self.engine, previous, len(boxes))
            self.trials += 1
            if not in_unit_square(x, y):
                self.rejections += 1
                if not warned and self.rejections >= warn_at:
                    logger.warning(
                        "%s: %d candidates rejected for %d accepted points; "
                        "most of the distribution lies outside the unit square",
                        type(self.strategy).__name__, self.rejections, len(boxes),
                    )
                    warned = True
                continue

            previous = (x, y)
            w = self.engine.uniform(0, self.max_width)
            h = self.engine.uniform(0, self.max_height)
            boxes.append((x - w / 2, y - h / 2, w, h))

        logger.debug(
            "%s: accepted %d of %d candidates (%d rejected)",
            type(self.strategy).__name__, len(boxes), self.trials, self.rejections,
        )
        return RectangleSet.from_boxes(boxes)


class ParcelGenerator(Generator):
    """Recursive partition of the unit square with dithering.

    Parameters
    ----------
    cardinality:
        Number of boxes; exactly ``cardinality - 1`` splits are made. A
        fractional count is rounded up.
    dimensions:
        Only 2 is meaningful; stored, not used.
    split_range:
        ``r`` in (0, 0.5). Each split falls at a fraction U(r, 1 - r) of the
        longer side.
    dither:
        ``alpha`` in [0, 1]. Each side is scaled by 1 - U(0, alpha).
    """

    def __init__(
        self,
        cardinality: float,
        dimensions: int,
        split_range: float,
        dither: float,
        *,
        seed: Optional[int] = None,
        source: Optional[UniformSource] = None,
    ) -> None:
        super().__init__(cardinality, dimensions, seed=seed, source=source)
        self.split_range = split_range
        self.dither = dither

    def split(self, box: Box) -> Tuple[Box, Box]:
        x, y, w, h = box
        r = self.split_range
        if w > h:
            size = w * self.engine.uniform(r, 1 - r)
            return (x, y, size, h), (x + size, y, w - size, h)
        size = h * self.engine.uniform(r, 1 - r)
        return (x, y, w, size), (x, y + size, w, h - size)

    def partition(self) -> List[Box]:
        """Split breadth-first until there are ``cardinality`` boxes."""
        queue = deque([UNIT_SQUARE])
        while len(queue) < self.cardinality:
            first, second = self.split(queue.popleft())
            queue.append(first)
            queue.append(second)
        return list(queue)

    def generate(self) -> RectangleSet:
        boxes = self.partition()
        alpha = self.dither
        dithered = [
            (x, y, w * (1 - self.engine.uniform(0, alpha)), h * (1 - self.engine.uniform(0, alpha)))
            for x, y, w, h in boxes
        ]
        logger.debug("parcel: %d boxes, split range %s, dither %s", len(dithered), self.split_range, alpha)
        return RectangleSet.from_boxes(dithered)

"""spider_rectgen.wkt

Well-known-text output for generated rectangles.
"""

from __future__ import annotations

from typing import Iterable, List, TextIO, Tuple

from .core import Rectangle

POLYGON_FORMAT = "POLYGON ((%f %f, %f %f, %f %f, %f %f, %f %f))"


def ring(rect: Rectangle) -> List[Tuple[float, float]]:
    """Closed counter-clockwise ring of five corners, starting at the lower-left."""
    x1, y1, x2, y2 = rect.x, rect.y, rect.x2, rect.y2
    return [(x1, y1), (x2, y1), (x2, y2), (x1, y2), (x1, y1)]


def to_polygon(rect: Rectangle) -> str:
    coords = [c for corner in ring(rect) for c in corner]
    return POLYGON_FORMAT % tuple(coords)


def write_polygons(rects: Iterable[Rectangle], stream: TextIO) -> int:
    """Write one POLYGON line per rectangle; return the number written."""
    count = 0
    for rect in rects:
        stream.write(to_polygon(rect))
        stream.write("\n")
        count += 1
    return count

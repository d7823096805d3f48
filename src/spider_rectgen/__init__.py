"""spider_rectgen

Install
-------
    pip install spider-rectgen

Quickstart
----------
See `examples/quickstart.py`, or from the shell:

    spider-rectgen diagonal 1000 2 0.01 0.01 0.5 0.1

The primary public API is:
    - generate_rectangles
    - RectangleSet
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import Optional

from .config import (
    ConfigurationError,
    GeneratorConfig,
    list_distributions,
    make_generator,
    validate_config,
)
from .core import ParcelGenerator, PointGenerator, Rectangle, RectangleSet
from .sampling import RandomEngine, UniformSource
from .strategies import (
    BitStrategy,
    DiagonalStrategy,
    GaussianStrategy,
    SierpinskiStrategy,
    UniformStrategy,
)
from .wkt import to_polygon, write_polygons

try:
    __version__ = version("spider-rectgen")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"


def generate_rectangles(
    distribution: str,
    cardinality: float,
    *params: float,
    dimensions: int = 2,
    seed: Optional[int] = None,
    strict: bool = False,
    source: Optional[UniformSource] = None,
) -> RectangleSet:
    """Generate ``cardinality`` rectangles from a named distribution.

    ``params`` are the distribution-specific values in command-line order, e.g.
    ``generate_rectangles("diagonal", 1000, 0.01, 0.01, 0.5, 0.1)``.
    """
    config = GeneratorConfig(
        distribution=distribution,
        cardinality=cardinality,
        dimensions=dimensions,
        params=tuple(float(p) for p in params),
        seed=seed,
        strict=strict,
    )
    return make_generator(config, source=source).generate()


__all__ = [
    "__version__",
    "generate_rectangles",
    "Rectangle",
    "RectangleSet",
    "GeneratorConfig",
    "ConfigurationError",
    "make_generator",
    "validate_config",
    "list_distributions",
    "PointGenerator",
    "ParcelGenerator",
    "RandomEngine",
    "UniformStrategy",
    "DiagonalStrategy",
    "GaussianStrategy",
    "SierpinskiStrategy",
    "BitStrategy",
    "to_polygon",
    "write_polygons",
]

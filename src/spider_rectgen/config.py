"""spider_rectgen.config

Generator configuration and the distribution registry.

A :class:`GeneratorConfig` is the immutable parameter record for one run.
:func:`make_generator` turns it into a ready-to-use generator by looking the
distribution up in :data:`DISTRIBUTIONS`.

Validation is opt-in. By default parameters are passed through unchecked and
out-of-range values show up as degenerate output (NaN coordinates, negative
extents, ...). With ``strict=True`` they raise :class:`ConfigurationError`
instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .core import Generator, ParcelGenerator, PointGenerator
from .sampling import UniformSource
from .strategies import (
    BitStrategy,
    DiagonalStrategy,
    GaussianStrategy,
    PointStrategy,
    SierpinskiStrategy,
    UniformStrategy,
)

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised for unknown distributions and, in strict mode, invalid parameters."""


@dataclass(frozen=True)
class GeneratorConfig:
    """Parameters fixed at construction.

    Attributes
    ----------
    distribution:
        Registered distribution name (see :func:`list_distributions`).
    cardinality:
        Number of rectangles to generate. A fractional count is rounded up.
    dimensions:
        Dimensionality; only 2 is supported.
    params:
        Distribution-specific parameters in positional order, e.g.
        ``(max_width, max_height, percentage, buffer)`` for ``diagonal`` or
        ``(r, alpha)`` for ``parcel``.
    seed:
        Seed for the default random source.
    strict:
        Validate parameters before building the generator.
    """

    distribution: str
    cardinality: float
    dimensions: int = 2
    params: Tuple[float, ...] = field(default_factory=tuple)
    seed: Optional[int] = None
    strict: bool = False


@dataclass(frozen=True)
class DistributionSpec:
    """Registry entry: parameter names and a builder."""

    name: str
    param_names: Tuple[str, ...]
    build: Callable[..., Generator]
    validate: Optional[Callable[[Dict[str, float]], None]] = None

    @property
    def arity(self) -> int:
        """Positional values after the distribution name (cardinality and dimensions included)."""
        return 2 + len(self.param_names)


DISTRIBUTIONS: Dict[str, DistributionSpec] = {}
_ALIASES: Dict[str, str] = {}


def register_distribution(spec: DistributionSpec, aliases: Sequence[str] = ()) -> DistributionSpec:
    if spec.name in DISTRIBUTIONS:
        raise ValueError(f"distribution {spec.name!r} is already registered")
    DISTRIBUTIONS[spec.name] = spec
    for alias in aliases:
        _ALIASES[alias] = spec.name
    return spec


def get_distribution(name: str) -> DistributionSpec:
    key = str(name).strip().lower()
    key = _ALIASES.get(key, key)
    if key not in DISTRIBUTIONS:
        raise ConfigurationError(
            f"unknown distribution {name!r}; available: {{{', '.join(list_distributions())}}}"
        )
    return DISTRIBUTIONS[key]


def list_distributions() -> List[str]:
    return list(DISTRIBUTIONS)


# ---------------------------------------------------------------------------
# Validation (strict mode only)
# ---------------------------------------------------------------------------

def _check(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigurationError(msg)


def _check_extents(p: Dict[str, float]) -> None:
    _check(p["max_width"] >= 0, f"max_width must be >= 0; got {p['max_width']}")
    _check(p["max_height"] >= 0, f"max_height must be >= 0; got {p['max_height']}")


def _check_diagonal(p: Dict[str, float]) -> None:
    _check_extents(p)
    _check(0.0 <= p["percentage"] <= 1.0, f"percentage must be in [0, 1]; got {p['percentage']}")
    _check(p["buffer"] >= 0, f"buffer must be >= 0; got {p['buffer']}")


def _check_bit(p: Dict[str, float]) -> None:
    _check_extents(p)
    _check(0.0 <= p["bias"] <= 1.0, f"bias must be in [0, 1]; got {p['bias']}")
    _check(int(p["digits"]) >= 1, f"digits must be >= 1; got {p['digits']}")


def _check_parcel(p: Dict[str, float]) -> None:
    _check(0.0 < p["split_range"] < 0.5, f"split_range must be in (0, 0.5); got {p['split_range']}")
    _check(0.0 <= p["dither"] <= 1.0, f"dither must be in [0, 1]; got {p['dither']}")


def validate_config(config: GeneratorConfig) -> None:
    """Raise :class:`ConfigurationError` if ``config`` is out of range."""
    spec = get_distribution(config.distribution)
    _check(int(config.dimensions) == 2, f"only 2 dimensions are supported; got {config.dimensions}")
    _check(
        float(config.cardinality) == int(config.cardinality) and int(config.cardinality) >= 1,
        f"cardinality must be a positive integer; got {config.cardinality}",
    )
    params = bind_params(spec, config.params)
    if spec.validate is not None:
        spec.validate(params)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def bind_params(spec: DistributionSpec, values: Sequence[float]) -> Dict[str, float]:
    if len(values) < len(spec.param_names):
        raise ConfigurationError(
            f"{spec.name} needs {len(spec.param_names)} parameters "
            f"({', '.join(spec.param_names)}); got {len(values)}"
        )
    return dict(zip(spec.param_names, values))


def make_generator(config: GeneratorConfig, *, source: Optional[UniformSource] = None) -> Generator:
    """Build the generator described by ``config``.

    Parameters beyond the distribution's own are ignored.
    """
    spec = get_distribution(config.distribution)
    if config.strict:
        validate_config(config)
    params = bind_params(spec, config.params)
    logger.debug("building %s generator: cardinality=%s params=%s", spec.name, config.cardinality, params)
    return spec.build(
        config.cardinality, int(config.dimensions), seed=config.seed, source=source, **params
    )


def _point_builder(make_strategy: Callable[..., PointStrategy]) -> Callable[..., Generator]:
    def build(cardinality, dimensions, *, seed, source, max_width, max_height, **extra):
        return PointGenerator(
            make_strategy(**extra),
            cardinality,
            dimensions,
            max_width,
            max_height,
            seed=seed,
            source=source,
        )

    return build


def _build_parcel(cardinality, dimensions, *, seed, source, split_range, dither):
    return ParcelGenerator(cardinality, dimensions, split_range, dither, seed=seed, source=source)


_EXTENTS = ("max_width", "max_height")

register_distribution(DistributionSpec(
    "uniform", _EXTENTS, _point_builder(UniformStrategy), _check_extents,
))
register_distribution(DistributionSpec(
    "diagonal", _EXTENTS + ("percentage", "buffer"),
    _point_builder(lambda percentage, buffer: DiagonalStrategy(percentage, buffer)),
    _check_diagonal,
))
register_distribution(DistributionSpec(
    "gaussian", _EXTENTS, _point_builder(GaussianStrategy), _check_extents,
))
register_distribution(
    DistributionSpec("sierpinsky", _EXTENTS, _point_builder(SierpinskiStrategy), _check_extents),
    aliases=("sierpinski",),
)
register_distribution(DistributionSpec(
    "bit", _EXTENTS + ("bias", "digits"),
    _point_builder(lambda bias, digits: BitStrategy(bias, int(digits))),
    _check_bit,
))
register_distribution(DistributionSpec(
    "parcel", ("split_range", "dither"), _build_parcel, _check_parcel,
))

# Parcel consumes six positional values on the command line like diagonal and
# bit, but only cardinality, dimensions, r and alpha are used.
CLI_ARITY: Dict[str, int] = {name: spec.arity for name, spec in DISTRIBUTIONS.items()}
CLI_ARITY["parcel"] = 6

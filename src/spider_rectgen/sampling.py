"""spider_rectgen.sampling

Scalar random variates shared by every generator.

Each generator owns exactly one :class:`RandomEngine`. The engine wraps a
single uniform [0, 1) source and derives everything else from it, so a test
can replace the source with a fixed sequence and get fully deterministic
output.

Normal variates
---------------
``normal`` uses the sine branch of the Box–Muller transform only:

    mu + sigma * sqrt(-2 ln u1) * sin(2 pi u2)

The cosine branch (a second independent normal) is discarded on every call.
Two uniform draws are consumed per normal variate.
"""

from __future__ import annotations

import math
from typing import Callable, Optional

import numpy as np

UniformSource = Callable[[], float]


class RandomEngine:
    """Bernoulli / uniform / normal variates over one uniform [0, 1) source.

    Parameters
    ----------
    source:
        Zero-argument callable returning floats in [0, 1). If None, a NumPy
        ``default_rng(seed)`` is used.
    seed:
        Seed for the default NumPy source (ignored when ``source`` is given).
    """

    def __init__(self, source: Optional[UniformSource] = None, seed: Optional[int] = None) -> None:
        if source is None:
            rng = np.random.default_rng(seed)
            source = rng.random
        self._source = source
        self.draws = 0

    def rnd(self) -> float:
        """Uniform value in [0, 1)."""
        self.draws += 1
        return float(self._source())

    def bernoulli(self, p: float) -> int:
        return 1 if self.rnd() <= p else 0

    def uniform(self, a: float, b: float) -> float:
        return (b - a) * self.rnd() + a

    def normal(self, mu: float, sigma: float) -> float:
        u1 = self.rnd()
        u2 = self.rnd()
        # ln(0) gives -inf and propagates as inf/nan rather than raising.
        with np.errstate(divide="ignore", invalid="ignore"):
            radius = np.sqrt(-2.0 * np.log(np.float64(u1)))
            return float(mu + sigma * radius * np.sin(2.0 * np.pi * u2))

    def dice(self, n: int) -> int:
        """Integer in [1, n]."""
        return int(math.floor(self.rnd() * n)) + 1

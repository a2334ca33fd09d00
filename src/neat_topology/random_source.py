from __future__ import annotations

import numpy as np


class RandomSource:
    """Primitive draws used by every stochastic operator.

    Wraps a ``numpy.random.Generator`` so a run is reproducible from a seed.
    """

    def __init__(self, seed: int | None = None, generator: np.random.Generator | None = None):
        self.generator = generator if generator is not None else np.random.default_rng(seed)

    def uniform(self, high: float = 1.0) -> float:
        return float(self.generator.random() * high)

    def uniform_int(self, high: int) -> int:
        return int(self.generator.integers(high))

    def bool(self, p: float = 0.5) -> bool:
        return bool(self.generator.random() < p)

    def normal(self, sd: float = 1.0) -> float:
        return float(self.generator.normal(0.0, sd))

from __future__ import annotations

from dataclasses import dataclass, replace

from .config import MutationConfig
from .random_source import RandomSource


@dataclass(frozen=True)
class Gene:
    innovation: int
    src: int
    dst: int
    weight: float
    enabled: bool = True

    def disable(self) -> "Gene":
        return replace(self, enabled=False)

    def mutate(self, rng: RandomSource, cfg: MutationConfig) -> "Gene":
        # Either reset or shift the weight.
        if rng.bool(cfg.reset_weight):
            weight = rng.normal()
        else:
            weight = self.weight + rng.normal(cfg.weight_shift)
        return replace(self, weight=weight)

    def crossover(self, other: "Gene", rng: RandomSource, cfg: MutationConfig) -> "Gene":
        weight = self.weight if rng.bool() else other.weight
        enabled = (self.enabled and other.enabled) or rng.bool(cfg.enable_gene)
        return replace(self, weight=weight, enabled=enabled)

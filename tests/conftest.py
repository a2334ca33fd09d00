"""
Pytest fixtures for the NEAT engine tests.

Provides fixtures for:
- Seeded and scripted random sources
- Innovation trackers and configs
- Small hand-built genomes
"""
from __future__ import annotations

from collections import deque

import pytest

from neat_topology.config import EvolutionConfig, MutationConfig
from neat_topology.genes import Gene
from neat_topology.genome import Genome
from neat_topology.innovation import InnovationTracker
from neat_topology.random_source import RandomSource


class ScriptedRandom(RandomSource):
    """Random source that replays queued draws, falling back to a seeded generator."""

    def __init__(self, uniforms=(), ints=(), bools=(), normals=(), seed: int = 0):
        super().__init__(seed)
        self.uniforms = deque(uniforms)
        self.ints = deque(ints)
        self.bools = deque(bools)
        self.normals = deque(normals)

    def uniform(self, high: float = 1.0) -> float:
        return self.uniforms.popleft() if self.uniforms else super().uniform(high)

    def uniform_int(self, high: int) -> int:
        return self.ints.popleft() if self.ints else super().uniform_int(high)

    def bool(self, p: float = 0.5) -> bool:
        return self.bools.popleft() if self.bools else super().bool(p)

    def normal(self, sd: float = 1.0) -> float:
        return self.normals.popleft() if self.normals else super().normal(sd)


@pytest.fixture
def rng() -> RandomSource:
    """Seeded random source."""
    return RandomSource(seed=1234)


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def tracker() -> InnovationTracker:
    return InnovationTracker()


@pytest.fixture
def mutation_cfg() -> MutationConfig:
    return MutationConfig()


@pytest.fixture
def cfg() -> EvolutionConfig:
    return EvolutionConfig(seed=7)


def make_genome(genes, inputs: int = 1, outputs: int = 1, nodes: int | None = None, fitness: float = 0.0) -> Genome:
    """Build a genome from ``(innovation, src, dst, weight[, enabled])`` tuples."""
    built = tuple(Gene(*g) for g in genes)
    if nodes is None:
        nodes = inputs + outputs + 1
    return Genome(genes=built, inputs=inputs, outputs=outputs, nodes=nodes, fitness=fitness)


@pytest.fixture
def genome_factory():
    return make_genome

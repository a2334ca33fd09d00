"""NEAT-style evolution of feed-forward network topologies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import EvolutionConfig, MutationConfig, ReproductionConfig, SpeciesConfig
from .evolution import NEAT
from .genes import Gene
from .genome import Genome, create_initial_genome
from .innovation import InnovationTracker
from .random_source import RandomSource
from .species import Species

if TYPE_CHECKING:
    from .network import Network

__all__ = [
    "EvolutionConfig",
    "Gene",
    "Genome",
    "InnovationTracker",
    "MutationConfig",
    "NEAT",
    "Network",
    "RandomSource",
    "ReproductionConfig",
    "Species",
    "SpeciesConfig",
    "create_initial_genome",
]


def __getattr__(name: str):
    if name == "Network":
        from .network import Network as _Network

        return _Network
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class MutationConfig:
    mutate_weight: float = 0.8
    add_connection: float = 0.05
    add_node: float = 0.03
    reset_weight: float = 0.1
    weight_shift: float = 0.05
    enable_gene: float = 0.25


@dataclass
class ReproductionConfig:
    # A species needs strictly more members than this for its champion to be copied.
    min_copy_best: int = 5
    no_crossover: float = 0.25


@dataclass
class SpeciesConfig:
    difference_threshold: float = 4.0
    disjoint_coeff: float = 1.0
    weight_coeff: float = 3.0
    min_normal: int = 20


@dataclass
class EvolutionConfig:
    pop_size: int = 150
    generations: int = 100
    input_size: int = 2
    output_size: int = 1
    seed: int = 0
    hidden_activation: str = "relu"
    output_activation: str = "identity"
    mutation: MutationConfig = field(default_factory=MutationConfig)
    reproduction: ReproductionConfig = field(default_factory=ReproductionConfig)
    species: SpeciesConfig = field(default_factory=SpeciesConfig)

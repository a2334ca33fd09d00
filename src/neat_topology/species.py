from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .config import SpeciesConfig
from .errors import EmptyCollectionError
from .genome import Genome
from .random_source import RandomSource

logger = logging.getLogger(__name__)


def fittest(genomes: list[Genome]) -> Genome:
    if not genomes:
        raise EmptyCollectionError("Cannot pick the best genome of an empty collection")
    return max(genomes, key=lambda g: g.fitness)


@dataclass
class Species:
    species_id: int
    representative: Genome
    genomes: list[Genome] = field(default_factory=list)

    @property
    def best(self) -> Genome:
        return fittest(self.genomes)

    @property
    def mean_fitness(self) -> float:
        if not self.genomes:
            raise EmptyCollectionError(f"Species {self.species_id} has no members")
        return sum(g.fitness for g in self.genomes) / len(self.genomes)

    def distance(self, genome: Genome, cfg: SpeciesConfig) -> float:
        length = max(len(self.representative.genes), len(genome.genes))
        normalizer = max(length - cfg.min_normal, 1)

        disjoint = self.disjoint(genome)
        weights = self.weight_difference(genome)

        return cfg.disjoint_coeff * disjoint / normalizer + cfg.weight_coeff * weights

    def disjoint(self, genome: Genome) -> int:
        """Number of genes present in exactly one of the two genomes."""
        other = {g.innovation for g in genome.genes}
        matching = sum(1 for g in self.representative.genes if g.innovation in other)

        total = len(self.representative.genes) + len(genome.genes)
        return total - 2 * matching

    def weight_difference(self, genome: Genome) -> float:
        other = {g.innovation: g for g in genome.genes}

        difference = 0.0
        total = 0
        for gene in self.representative.genes:
            match = other.get(gene.innovation)
            if match is None:
                continue
            difference += abs(gene.weight - match.weight)
            total += 1

        # No shared history at all puts the genome in another species.
        if total == 0:
            return float("inf")
        return difference / total


class SpeciesManager:
    def __init__(self, cfg: SpeciesConfig):
        self.cfg = cfg
        self.next_species_id = 0
        self.species: list[Species] = []

    def speciate(self, population: list[Genome], rng: RandomSource) -> list[Species]:
        # Fresh representative from the previous members, then reassign everyone.
        refreshed: list[Species] = []
        for sp in self.species:
            representative = sp.genomes[rng.uniform_int(len(sp.genomes))] if sp.genomes else sp.representative
            refreshed.append(Species(species_id=sp.species_id, representative=representative))
        self.species = refreshed

        for genome in population:
            compatible = None
            for sp in self.species:
                if sp.distance(genome, self.cfg) < self.cfg.difference_threshold:
                    compatible = sp
                    break

            if compatible is None:
                compatible = Species(species_id=self.next_species_id, representative=genome)
                self.next_species_id += 1
                self.species.append(compatible)
                logger.debug("New species %d founded", compatible.species_id)
            compatible.genomes.append(genome)

        dropped = [sp.species_id for sp in self.species if not sp.genomes]
        if dropped:
            logger.debug("Dropping extinct species %s", dropped)
        self.species = [sp for sp in self.species if sp.genomes]
        return self.species

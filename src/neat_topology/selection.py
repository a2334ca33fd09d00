from __future__ import annotations

from itertools import accumulate
from operator import attrgetter
from typing import Callable, Generic, Sequence, TypeVar

from .config import EvolutionConfig
from .errors import EmptyCollectionError, SelectionError
from .genome import Genome
from .innovation import InnovationTracker
from .random_source import RandomSource
from .species import Species

T = TypeVar("T")


class Selector(Generic[T]):
    """Fitness-proportionate sampler over a fixed list of items."""

    def __init__(
        self,
        items: Sequence[T],
        rng: RandomSource,
        fitness: Callable[[T], float] = attrgetter("fitness"),
    ):
        if not items:
            raise EmptyCollectionError("Cannot select from an empty collection")

        self.items = list(items)
        self.rng = rng
        self.weights = [float(fitness(item)) for item in self.items]
        if any(w < 0 for w in self.weights):
            raise SelectionError(f"Selection weights must be non-negative, got {min(self.weights)}")
        # Same left-to-right order as the running sum in next().
        self.total = list(accumulate(self.weights))[-1]

    def next(self) -> T:
        if self.total == 0:
            return self.items[self.rng.uniform_int(len(self.items))]

        r = self.rng.uniform(self.total)
        acc = 0.0
        for item, weight in zip(self.items, self.weights):
            acc += weight
            if acc > r:
                return item

        raise SelectionError(f"Cumulative fitness {acc} never exceeded draw {r}")


def breed_child(
    selector: Selector[Genome],
    rng: RandomSource,
    cfg: EvolutionConfig,
    tracker: InnovationTracker,
) -> Genome:
    """Sample parents from ``selector`` and return a mutated child."""
    if rng.bool(cfg.reproduction.no_crossover):
        child = selector.next()
    else:
        a = selector.next()
        b = selector.next()
        child = a.crossover(b, rng, cfg.mutation) if a.fitness > b.fitness else b.crossover(a, rng, cfg.mutation)

    return child.mutate(rng, cfg.mutation, tracker)


class SpeciesSelector:
    """Picks a species by mean member fitness, then breeds a child inside it."""

    def __init__(
        self,
        species: Sequence[Species],
        rng: RandomSource,
        cfg: EvolutionConfig,
        tracker: InnovationTracker,
    ):
        self.rng = rng
        self.cfg = cfg
        self.tracker = tracker
        self.genome_selectors = {sp.species_id: Selector(sp.genomes, rng) for sp in species}
        self.species_selector: Selector[Species] = Selector(species, rng, fitness=attrgetter("mean_fitness"))

    def next(self) -> Genome:
        species = self.species_selector.next()
        return breed_child(self.genome_selectors[species.species_id], self.rng, self.cfg, self.tracker)

"""Tests for fitness-proportionate selection and breeding."""
from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from itertools import accumulate

import pytest

from neat_topology.config import EvolutionConfig, MutationConfig, ReproductionConfig
from neat_topology.errors import EmptyCollectionError, SelectionError
from neat_topology.innovation import InnovationTracker
from neat_topology.selection import Selector, SpeciesSelector, breed_child
from neat_topology.species import Species


@dataclass
class Item:
    name: str
    fitness: float


class TestSelector:
    """Tests for the generic weighted sampler."""

    def test_strictly_greater_tie_break(self, scripted):
        items = [Item("a", 1), Item("b", 1), Item("c", 2)]

        assert Selector(items, scripted(uniforms=[1.5])).next().name == "b"
        # Landing exactly on a cumulative sum moves on to the next item.
        assert Selector(items, scripted(uniforms=[2.0])).next().name == "c"
        assert Selector(items, scripted(uniforms=[0.0])).next().name == "a"

    def test_zero_weight_never_picked(self, scripted):
        items = [Item("zero", 0), Item("one", 1)]
        assert Selector(items, scripted(uniforms=[0.0])).next().name == "one"

    def test_frequencies_follow_fitness(self, rng):
        items = [Item("a", 1), Item("b", 3), Item("c", 6)]
        selector = Selector(items, rng)

        counts = Counter(selector.next().name for _ in range(20000))

        assert counts["a"] / 20000 == pytest.approx(0.1, abs=0.02)
        assert counts["b"] / 20000 == pytest.approx(0.3, abs=0.02)
        assert counts["c"] / 20000 == pytest.approx(0.6, abs=0.02)

    def test_all_zero_is_uniform(self, rng):
        items = [Item("a", 0), Item("b", 0), Item("c", 0), Item("d", 0)]
        selector = Selector(items, rng)

        counts = Counter(selector.next().name for _ in range(20000))

        for name in "abcd":
            assert counts[name] / 20000 == pytest.approx(0.25, abs=0.02)

    def test_custom_fitness_key(self, scripted):
        items = ["short", "much longer"]
        selector = Selector(items, scripted(uniforms=[6.0]), fitness=len)
        assert selector.next() == "much longer"

    def test_negative_fitness_rejected(self, rng):
        with pytest.raises(SelectionError):
            Selector([Item("a", 1), Item("b", -2)], rng)

    def test_overshooting_draw_fails(self, scripted):
        selector = Selector([Item("a", 1), Item("b", 1)], scripted(uniforms=[5.0]))
        with pytest.raises(SelectionError):
            selector.next()

    def test_total_matches_running_sum(self, scripted):
        # Ten weights of 0.1 add up to just under 1.0 when summed in order.
        items = [Item(str(i), 0.1) for i in range(10)]
        selector = Selector(items, scripted())
        assert selector.total == list(accumulate(w.fitness for w in items))[-1]

        selector.rng = scripted(uniforms=[math.nextafter(selector.total, 0.0)])
        assert selector.next().name == "9"

    def test_empty_rejected(self, rng):
        with pytest.raises(EmptyCollectionError):
            Selector([], rng)


class TestBreeding:
    """Tests for breed_child and SpeciesSelector."""

    @pytest.fixture
    def frozen_cfg(self) -> EvolutionConfig:
        # Mutation disabled so the child reflects selection and crossover only.
        return EvolutionConfig(
            mutation=MutationConfig(mutate_weight=0.0, add_connection=0.0, add_node=0.0),
            reproduction=ReproductionConfig(no_crossover=0.25),
        )

    def test_no_crossover_copies_one_parent(self, scripted, genome_factory, frozen_cfg):
        a = genome_factory([(0, 0, 2, 1.0), (1, 1, 2, 1.0)], fitness=1.0)
        b = genome_factory([(0, 0, 2, 5.0)], fitness=1.0)
        rng = scripted(bools=[True], uniforms=[1.5])

        child = breed_child(Selector([a, b], rng), rng, frozen_cfg, InnovationTracker())

        assert child is not b
        assert child.genes == b.genes

    def test_fitter_parent_gives_structure(self, scripted, genome_factory, frozen_cfg):
        weak = genome_factory([(0, 0, 2, 1.0)], fitness=1.0)
        strong = genome_factory([(0, 0, 2, 5.0), (1, 1, 2, 2.0)], fitness=3.0)
        # No skip, pick weak then strong, then the gene crossover weight/enable draws.
        rng = scripted(bools=[False, False], uniforms=[0.5, 3.5])

        child = breed_child(Selector([weak, strong], rng), rng, frozen_cfg, InnovationTracker())

        assert [g.innovation for g in child.genes] == [0, 1]
        assert child.genes[0].weight == 1.0
        assert child.genes[1] == strong.genes[1]

    def test_species_selector_weights_by_mean_fitness(self, scripted, genome_factory, frozen_cfg):
        poor = genome_factory([(0, 0, 2, 1.0)], fitness=0.0)
        good = genome_factory([(1, 1, 2, 1.0)], fitness=4.0)
        species = [
            Species(species_id=0, representative=poor, genomes=[poor, poor]),
            Species(species_id=1, representative=good, genomes=[good]),
        ]
        selector = SpeciesSelector(species, scripted(), frozen_cfg, InnovationTracker())

        for _ in range(20):
            assert selector.next().genes == good.genes

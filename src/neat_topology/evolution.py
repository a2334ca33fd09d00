from __future__ import annotations

import csv
import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable

import numpy as np

from .config import EvolutionConfig
from .genome import Genome, create_initial_genome
from .innovation import InnovationTracker
from .random_source import RandomSource
from .selection import SpeciesSelector
from .species import Species, SpeciesManager, fittest

logger = logging.getLogger(__name__)

HISTORY_FIELDS = [
    "generation",
    "best_fitness",
    "mean_fitness",
    "species_count",
    "mean_hidden_nodes",
    "mean_enabled_connections",
    "champ_hidden_nodes",
    "champ_enabled_connections",
    "innovations",
]


class NEAT:
    """Generation state machine.

    The host sets ``fitness`` on every genome of ``population`` and then calls
    ``next`` to move to the following generation.
    """

    def __init__(
        self,
        input_size: int,
        output_size: int,
        pop_size: int,
        cfg: EvolutionConfig | None = None,
        rng: RandomSource | None = None,
    ):
        if input_size < 1 or output_size < 1:
            raise ValueError(f"Need at least one input and one output, got {input_size}x{output_size}")
        if pop_size < 1:
            raise ValueError(f"Population size must be positive, got {pop_size}")

        self.cfg = replace(
            cfg if cfg is not None else EvolutionConfig(),
            input_size=input_size,
            output_size=output_size,
            pop_size=pop_size,
        )

        self.rng = rng if rng is not None else RandomSource(self.cfg.seed)
        self.tracker = InnovationTracker()
        self.species_mgr = SpeciesManager(self.cfg.species)
        self.generation = 0

        self.population: list[Genome] = [
            create_initial_genome(input_size, output_size, self.tracker, self.rng)
            for _ in range(pop_size)
        ]
        self.species_mgr.speciate(self.population, self.rng)

        self.history: list[dict[str, float]] = []
        self.species_sizes: list[dict[int, int]] = []
        self.champion_snapshots: list[tuple[int, Genome]] = []

    @property
    def species(self) -> list[Species]:
        return list(self.species_mgr.species)

    @property
    def best(self) -> Genome:
        return fittest(self.population)

    def next(self) -> None:
        self.population = self._reproduce()
        self.species_mgr.speciate(self.population, self.rng)

        # Innovation ids are only shared within one generation.
        self.tracker.reset()
        self.generation += 1

    def _reproduce(self) -> list[Genome]:
        new_population: list[Genome] = []

        # Copy champions of large enough species unchanged.
        for sp in self.species_mgr.species:
            if len(sp.genomes) > self.cfg.reproduction.min_copy_best:
                new_population.append(sp.best.clone())

        selector = SpeciesSelector(self.species_mgr.species, self.rng, self.cfg, self.tracker)
        while len(new_population) < self.cfg.pop_size:
            new_population.append(selector.next())

        return new_population

    def run(
        self,
        fitness_fn: Callable[[Genome], float],
        generations: int | None = None,
        target_fitness: float | None = None,
    ) -> Genome:
        generations = self.cfg.generations if generations is None else generations

        for gen in range(generations):
            for genome in self.population:
                genome.fitness = float(fitness_fn(genome))
            self.record_generation()

            if target_fitness is not None and self.best.fitness >= target_fitness:
                logger.info("Target fitness %.3f reached at generation %d", target_fitness, self.generation)
                break
            if gen < generations - 1:
                self.next()

        return self.best.clone()

    def record_generation(self) -> dict[str, float]:
        fitness = np.array([g.fitness for g in self.population], dtype=float)
        best = self.best
        mean_hidden = float(np.mean([g.complexity()[0] for g in self.population]))
        mean_conn = float(np.mean([g.complexity()[1] for g in self.population]))
        best_hidden, best_conn = best.complexity()

        record = {
            "generation": float(self.generation),
            "best_fitness": float(np.max(fitness)),
            "mean_fitness": float(np.mean(fitness)),
            "species_count": float(len(self.species_mgr.species)),
            "mean_hidden_nodes": mean_hidden,
            "mean_enabled_connections": mean_conn,
            "champ_hidden_nodes": float(best_hidden),
            "champ_enabled_connections": float(best_conn),
            "innovations": float(self.tracker.next_innovation),
        }
        self.history.append(record)
        self.champion_snapshots.append((self.generation, best.clone()))
        self.species_sizes.append({sp.species_id: len(sp.genomes) for sp in self.species_mgr.species})

        logger.info(
            "[gen %03d] best=%.3f mean=%.3f species=%d champ_hidden=%d champ_conn=%d",
            self.generation,
            record["best_fitness"],
            record["mean_fitness"],
            int(record["species_count"]),
            best_hidden,
            best_conn,
        )
        return record

    def write_history_csv(self, path: Path) -> None:
        """One row per recorded generation, columns as produced by ``record_generation``."""
        if not self.history:
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=HISTORY_FIELDS)
            writer.writeheader()
            writer.writerows(self.history)

    def write_species_csv(self, path: Path) -> None:
        """Member count of every species id ever seen, one row per recorded generation."""
        ids = sorted({sid for sizes in self.species_sizes for sid in sizes})
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["generation"] + [f"species_{sid}" for sid in ids])
            for (gen, _), sizes in zip(self.champion_snapshots, self.species_sizes):
                writer.writerow([gen] + [sizes.get(sid, 0) for sid in ids])

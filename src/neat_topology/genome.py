from __future__ import annotations

from dataclasses import dataclass

from .config import MutationConfig
from .errors import GenomeSaturatedError
from .genes import Gene
from .innovation import InnovationTracker
from .random_source import RandomSource


@dataclass
class Genome:
    """Ordered connection genes plus node bookkeeping.

    Node indices follow a fixed layout: ``[0, inputs)`` are inputs, ``inputs`` is
    the bias node, the next ``outputs`` indices are outputs and everything up to
    ``nodes`` is a hidden node created by a split, in creation order.
    """

    genes: tuple[Gene, ...]
    inputs: int
    outputs: int
    nodes: int
    fitness: float = 0.0

    def clone(self) -> "Genome":
        return Genome(
            genes=self.genes,
            inputs=self.inputs,
            outputs=self.outputs,
            nodes=self.nodes,
            fitness=self.fitness,
        )

    def _copy(self, genes: list[Gene], nodes: int) -> "Genome":
        return Genome(genes=tuple(genes), inputs=self.inputs, outputs=self.outputs, nodes=nodes)

    @property
    def bias_index(self) -> int:
        return self.inputs

    @property
    def output_indices(self) -> list[int]:
        start = self.inputs + 1
        return list(range(start, start + self.outputs))

    @property
    def hidden_indices(self) -> list[int]:
        return list(range(self.inputs + self.outputs + 1, self.nodes))

    @property
    def enabled_genes(self) -> list[Gene]:
        return [g for g in self.genes if g.enabled]

    @property
    def max_connections(self) -> int:
        # Any node may feed any non-input, non-bias node.
        return self.nodes * (self.nodes - self.inputs - 1)

    def complexity(self) -> tuple[int, int]:
        return len(self.hidden_indices), len(self.enabled_genes)

    def has_connection(self, src: int, dst: int) -> bool:
        return any(g.src == src and g.dst == dst for g in self.genes)

    def random_connection(self, rng: RandomSource, tracker: InnovationTracker) -> Gene:
        if len(self.genes) >= self.max_connections:
            raise GenomeSaturatedError(
                f"Genome with {self.nodes} nodes already holds all {self.max_connections} connections"
            )

        while True:
            src = rng.uniform_int(self.nodes)
            dst = rng.uniform_int(self.nodes)

            # Connections cannot lead into an input or the bias, nor duplicate one.
            if dst <= self.inputs or self.has_connection(src, dst):
                continue

            innov = tracker.get_connection_innovation(src, dst)
            return Gene(innovation=innov, src=src, dst=dst, weight=rng.normal(1.0))

    def mutate(
        self,
        rng: RandomSource,
        cfg: MutationConfig,
        tracker: InnovationTracker,
    ) -> "Genome":
        genes = [gene.mutate(rng, cfg) if rng.bool(cfg.mutate_weight) else gene for gene in self.genes]
        nodes = self.nodes

        if rng.bool(cfg.add_connection) and len(genes) < self.max_connections:
            genes.append(self.random_connection(rng, tracker))

        if rng.bool(cfg.add_node) and genes:
            genes, nodes = self._split(genes, nodes, rng, tracker)

        return self._copy(genes, nodes)

    def _split(
        self,
        genes: list[Gene],
        nodes: int,
        rng: RandomSource,
        tracker: InnovationTracker,
    ) -> tuple[list[Gene], int]:
        i = rng.uniform_int(len(genes))
        gene = genes[i]
        new_node = nodes

        # The new node keeps the original signal path: identity weight in,
        # original weight out.
        genes[i] = gene.disable()
        genes.append(
            Gene(
                innovation=tracker.get_connection_innovation(gene.src, new_node),
                src=gene.src,
                dst=new_node,
                weight=1.0,
            )
        )
        genes.append(
            Gene(
                innovation=tracker.get_connection_innovation(new_node, gene.dst),
                src=new_node,
                dst=gene.dst,
                weight=gene.weight,
            )
        )
        return genes, nodes + 1

    def crossover(self, other: "Genome", rng: RandomSource, cfg: MutationConfig) -> "Genome":
        """Cross with ``other``, inheriting structure from ``self``.

        Matching genes are combined pairwise; disjoint and excess genes come from
        ``self`` only, so callers pass the fitter parent as ``self``.
        """
        other_by_innov = {g.innovation: g for g in other.genes}

        genes: list[Gene] = []
        for gene in self.genes:
            match = other_by_innov.get(gene.innovation)
            genes.append(gene if match is None else gene.crossover(match, rng, cfg))

        return self._copy(genes, self.nodes)


def create_initial_genome(
    input_size: int,
    output_size: int,
    tracker: InnovationTracker,
    rng: RandomSource,
) -> Genome:
    nodes = input_size + output_size + 1  # extra node is the bias
    genome = Genome(genes=(), inputs=input_size, outputs=output_size, nodes=nodes)
    return genome._copy([genome.random_connection(rng, tracker)], nodes)

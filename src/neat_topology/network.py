from __future__ import annotations

from typing import Sequence

import jax.numpy as jnp
import numpy as np

from .activations import apply_activation, check_activation
from .errors import InputSizeError
from .genes import Gene
from .genome import Genome


class Network:
    """Evaluable phenotype of a genome.

    The evaluation order is fixed at construction by a depth-first walk from the
    output nodes along incoming edges, so each ``predict`` call only needs a
    fresh value table. A node reached again while it is still being expanded
    (a cycle) reads as 0.0 in that call.
    """

    def __init__(
        self,
        genome: Genome,
        hidden_activation: str = "relu",
        output_activation: str = "identity",
    ):
        self.genome = genome
        self.hidden_activation = check_activation(hidden_activation, hidden=True)
        self.output_activation = check_activation(output_activation)

        self._input_ids = list(range(genome.inputs))
        self._bias_id = genome.bias_index
        self._output_ids = genome.output_indices
        self._hidden_ids = set(genome.hidden_indices)

        incoming: dict[int, list[Gene]] = {nid: [] for nid in range(genome.nodes)}
        for gene in genome.enabled_genes:
            incoming[gene.dst].append(gene)
        self._incoming = incoming

        self._compute_order = self._build_order()

    def _build_order(self) -> list[int]:
        sources = set(self._input_ids) | {self._bias_id}
        order: list[int] = []
        visited: set[int] = set(sources)

        def visit(nid: int) -> None:
            visited.add(nid)
            for gene in self._incoming[nid]:
                if gene.src not in visited:
                    visit(gene.src)
            order.append(nid)

        for nid in self._output_ids:
            if nid not in visited:
                visit(nid)
        return order

    @property
    def compute_order(self) -> list[int]:
        return list(self._compute_order)

    def predict(self, inputs: Sequence[float]) -> np.ndarray:
        values = np.asarray(inputs, dtype=np.float32).reshape(-1)
        if values.shape[0] != len(self._input_ids):
            raise InputSizeError(
                f"Expected {len(self._input_ids)} inputs, got {values.shape[0]}"
            )

        acts: dict[int, jnp.ndarray] = {nid: jnp.float32(values[i]) for i, nid in enumerate(self._input_ids)}
        acts[self._bias_id] = jnp.float32(1.0)

        for nid in self._compute_order:
            total = jnp.float32(0.0)
            for gene in self._incoming[nid]:
                total = total + acts.get(gene.src, jnp.float32(0.0)) * jnp.float32(gene.weight)
            if nid in self._hidden_ids:
                total = apply_activation(self.hidden_activation, total)
            acts[nid] = total

        out = jnp.stack([acts.get(nid, jnp.float32(0.0)) for nid in self._output_ids])
        return np.asarray(apply_activation(self.output_activation, out))

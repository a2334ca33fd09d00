from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from .genome import Genome

MARGIN = 0.1

# (ylabel, [(history key, legend label, line style)]) per panel of the history plot.
HISTORY_PANELS = [
    ("fitness", [("best_fitness", "best", "-"), ("mean_fitness", "mean", "--")]),
    (
        "hidden nodes",
        [("champ_hidden_nodes", "champion", "-"), ("mean_hidden_nodes", "population mean", "--")],
    ),
    (
        "enabled connections",
        [("champ_enabled_connections", "champion", "-"), ("mean_enabled_connections", "population mean", "--")],
    ),
    ("structures", [("innovations", "innovation ids issued", "-"), ("species_count", "species", ":")]),
]


def _column(history: list[dict[str, float]], key: str) -> np.ndarray:
    return np.array([row[key] for row in history], dtype=float)


def plot_history(history: list[dict[str, float]], path: Path) -> None:
    """Plot fitness, champion vs population complexity and structural counters per generation."""
    if not history:
        return

    gens = _column(history, "generation")
    fig, axes = plt.subplots(len(HISTORY_PANELS), 1, figsize=(10, 3 * len(HISTORY_PANELS)), sharex=True)

    for ax, (ylabel, series) in zip(axes, HISTORY_PANELS):
        for key, label, style in series:
            ax.plot(gens, _column(history, key), style, label=label, linewidth=1.8)
        ax.set_ylabel(ylabel)
        ax.grid(True, alpha=0.3)
        ax.legend(loc="best", fontsize=8)
    axes[-1].set_xlabel("generation")

    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)


def species_matrix(species_sizes: list[dict[int, int]]) -> tuple[list[int], np.ndarray]:
    """Species ids seen over the run and a ``(species, generation)`` member count matrix."""
    ids = sorted({sid for sizes in species_sizes for sid in sizes})
    counts = np.array([[sizes.get(sid, 0) for sizes in species_sizes] for sid in ids], dtype=int)
    return ids, counts.reshape(len(ids), len(species_sizes))


def plot_species_sizes(species_sizes: list[dict[int, int]], path: Path) -> None:
    if not species_sizes:
        return

    ids, counts = species_matrix(species_sizes)
    fig, ax = plt.subplots(figsize=(10, 4.5))
    ax.stackplot(np.arange(counts.shape[1]), counts, labels=[f"species {sid}" for sid in ids], alpha=0.6)
    ax.set_xlabel("generation")
    ax.set_ylabel("members")
    ax.set_title("Species Composition")
    if len(ids) <= 12:
        ax.legend(loc="upper right", fontsize=8)

    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)


def hidden_layers(genome: Genome) -> list[list[int]]:
    """Greedily pack hidden nodes into columns.

    A node joins the first column that holds neither a source nor a target of
    one of its enabled connections.
    """
    enabled = genome.enabled_genes
    layers: list[list[int]] = []

    for nid in genome.hidden_indices:
        linked = {g.src for g in enabled if g.dst == nid} | {g.dst for g in enabled if g.src == nid}
        for layer in layers:
            if not linked.intersection(layer):
                layer.append(nid)
                break
        else:
            layers.append([nid])
    return layers


def layout_genome(genome: Genome) -> dict[int, tuple[float, float]]:
    pos: dict[int, tuple[float, float]] = {}

    # Inputs and bias on the left, outputs on the right.
    for i in range(genome.inputs + 1):
        pos[i] = (MARGIN, (i + 1) / (genome.inputs + 2))
    for i, nid in enumerate(genome.output_indices):
        pos[nid] = (1 - MARGIN, (i + 1) / (genome.outputs + 1))

    layers = hidden_layers(genome)
    for i, layer in enumerate(layers):
        x = MARGIN + ((i + 1) / (len(layers) + 1)) * (1 - 2 * MARGIN)
        for j, nid in enumerate(layer):
            pos[nid] = (x, (j + 1) / (len(layer) + 1))
    return pos


def plot_genome(genome: Genome, path: Path, title: str = "Genome Topology") -> None:
    pos = layout_genome(genome)

    fig, ax = plt.subplots(figsize=(11, 6))

    # Draw connections.
    for gene in genome.genes:
        x1, y1 = pos[gene.src]
        x2, y2 = pos[gene.dst]
        color = "#d62728" if gene.weight > 0 else "#1f77b4"
        alpha = 0.2 + 0.6 * min(abs(gene.weight), 1.0) if gene.enabled else 0.15
        lw = 0.7 + min(2.5, abs(gene.weight))
        ls = "-" if gene.enabled else "--"
        if gene.src == gene.dst:
            ax.add_patch(plt.Circle((x1, y1 + 0.03), 0.03, fill=False, color=color, alpha=alpha, linestyle=ls))
        else:
            ax.plot([x1, x2], [y1, y2], color=color, alpha=alpha, linewidth=lw, linestyle=ls)

    # Draw nodes.
    bias = genome.bias_index
    outputs = set(genome.output_indices)
    for nid, (x, y) in sorted(pos.items()):
        if nid < bias:
            color, label = "#2ca02c", f"in {nid}"
        elif nid == bias:
            color, label = "#7f7f7f", "bias"
        elif nid in outputs:
            color, label = "#ff7f0e", f"out {nid}"
        else:
            color, label = "#9467bd", str(nid)
        ax.scatter([x], [y], s=160, color=color, edgecolors="black", zorder=3)
        ax.text(x, y + 0.03, label, ha="center", va="bottom", fontsize=8)

    ax.set_title(title)
    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, 1.0)
    ax.set_xticks([])
    ax.set_yticks([])

    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=180)
    plt.close(fig)

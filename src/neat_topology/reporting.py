from __future__ import annotations

from pathlib import Path

from .genome import Genome

# History columns compared between the first and last recorded generation.
TRACKED = [
    ("best_fitness", "Best fitness"),
    ("mean_fitness", "Mean fitness"),
    ("mean_hidden_nodes", "Mean hidden nodes"),
    ("mean_enabled_connections", "Mean enabled connections"),
    ("champ_hidden_nodes", "Champion hidden nodes"),
    ("champ_enabled_connections", "Champion enabled connections"),
    ("innovations", "Innovation ids issued"),
    ("species_count", "Species"),
]


def describe_champion(champion: Genome) -> str:
    hidden, enabled = champion.complexity()
    disabled = len(champion.genes) - enabled
    if not hidden:
        return f"Champion kept the minimal topology: {enabled} enabled and {disabled} disabled connection(s)."
    return f"Champion grew {hidden} hidden node(s), {enabled} enabled and {disabled} disabled connection(s)."


def build_complexification_commentary(history: list[dict[str, float]], champion: Genome) -> str:
    """Markdown table of how the tracked columns moved over the run, plus a champion summary."""
    if not history:
        return "No generation history was recorded."

    first, last = history[0], history[-1]
    rows = ["### Complexification", "", "| Metric | First | Last | Change |", "|---|---|---|---|"]
    for key, label in TRACKED:
        if key not in first or key not in last:
            continue
        rows.append(f"| {label} | {first[key]:.2f} | {last[key]:.2f} | {last[key] - first[key]:+.2f} |")

    rows.extend(["", describe_champion(champion)])
    return "\n".join(rows)


def write_markdown_report(
    path: Path,
    task: str,
    history: list[dict[str, float]],
    champion: Genome,
    champion_accuracy: float,
    artifacts: dict[str, Path],
) -> None:
    summary = [
        "# NEAT Topology Evolution Report",
        "",
        f"## Task: `{task}`",
        "",
        f"- Generations run: {len(history)}",
        f"- Champion fitness: {champion.fitness:.4f}",
        f"- Champion accuracy: {champion_accuracy:.4f}",
        f"- Champion size: {champion.nodes} node(s), {len(champion.genes)} gene(s)",
        "",
    ]
    files = ["## Artifacts", ""] + [f"- {name}: `{p}`" for name, p in sorted(artifacts.items())]

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        "\n".join(summary + [build_complexification_commentary(history, champion), ""] + files + [""]),
        encoding="utf-8",
    )

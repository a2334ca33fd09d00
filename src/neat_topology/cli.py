from __future__ import annotations

import argparse
import datetime as dt
import logging
from functools import partial
from pathlib import Path

from .activations import ACTIVATIONS, VECTOR_ACTIVATIONS
from .config import EvolutionConfig
from .evolution import NEAT
from .random_source import RandomSource
from .reporting import write_markdown_report
from .tasks import TASKS, accuracy, fitness, make_task
from .visualization import plot_genome, plot_history, plot_species_sizes

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Evolve network topologies with NEAT")
    p.add_argument("--task", choices=TASKS, default="xor")
    p.add_argument("--pop-size", type=int, default=150)
    p.add_argument("--generations", type=int, default=100)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument(
        "--hidden-activation",
        choices=[a for a in ACTIVATIONS if a not in VECTOR_ACTIVATIONS],
        default="relu",
    )
    p.add_argument("--output-activation", choices=ACTIVATIONS, default="sigmoid")
    p.add_argument("--target-fitness", type=float, default=None)
    p.add_argument("--out-root", type=str, default="artifacts")
    p.add_argument("--log-level", type=str, default="INFO")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> Path:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    task = make_task(args.task, seed=args.seed)
    cfg = EvolutionConfig(
        pop_size=args.pop_size,
        generations=args.generations,
        seed=args.seed,
        hidden_activation=args.hidden_activation,
        output_activation=args.output_activation,
    )

    ts = dt.datetime.now().strftime("%Y%m%d_%H%M%S")
    out_dir = Path(args.out_root).resolve() / f"{args.task}_{ts}"

    neat = NEAT(task.input_size, task.output_size, cfg.pop_size, cfg=cfg, rng=RandomSource(cfg.seed))
    champion = neat.run(
        partial(
            fitness,
            task=task,
            hidden_activation=cfg.hidden_activation,
            output_activation=cfg.output_activation,
        ),
        generations=cfg.generations,
        target_fitness=args.target_fitness,
    )
    champion_acc = accuracy(
        champion,
        task,
        hidden_activation=cfg.hidden_activation,
        output_activation=cfg.output_activation,
    )
    logger.info("Champion fitness=%.4f accuracy=%.4f", champion.fitness, champion_acc)

    artifacts = {
        "history_csv": out_dir / "history.csv",
        "species_csv": out_dir / "species_sizes.csv",
    }
    neat.write_history_csv(artifacts["history_csv"])
    neat.write_species_csv(artifacts["species_csv"])

    plots_dir = out_dir / "plots"
    plot_history(neat.history, plots_dir / "fitness_complexity.png")
    plot_species_sizes(neat.species_sizes, plots_dir / "species_sizes.png")
    plot_genome(champion, plots_dir / "champion_network.png", title="Champion Topology")

    if neat.champion_snapshots:
        key_gens = sorted(
            {
                neat.champion_snapshots[0][0],
                neat.champion_snapshots[len(neat.champion_snapshots) // 2][0],
                neat.champion_snapshots[-1][0],
            }
        )
        snap_by_gen = {g: genome for g, genome in neat.champion_snapshots}
        for g in key_gens:
            plot_genome(
                snap_by_gen[g],
                plots_dir / f"champion_network_gen_{g}.png",
                title=f"Champion Topology (Generation {g})",
            )

    report_path = out_dir / "report.md"
    write_markdown_report(
        path=report_path,
        task=args.task,
        history=neat.history,
        champion=champion,
        champion_accuracy=champion_acc,
        artifacts={**artifacts, "plots_dir": plots_dir},
    )

    print(f"Run complete: {out_dir}")
    for name, p in sorted({**artifacts, "report": report_path}.items()):
        print(f"{name}: {p}")
    return out_dir


if __name__ == "__main__":
    main()

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .genome import Genome
from .network import Network

TASKS = ("xor", "and", "or", "circle")


@dataclass
class Task:
    name: str
    inputs: np.ndarray
    targets: np.ndarray

    @property
    def input_size(self) -> int:
        return int(self.inputs.shape[1])

    @property
    def output_size(self) -> int:
        return int(self.targets.shape[1])

    @property
    def max_fitness(self) -> float:
        return float(self.targets.size)


def _truth_table(fn) -> tuple[np.ndarray, np.ndarray]:
    x = np.array([[0, 0], [0, 1], [1, 0], [1, 1]], dtype=np.float32)
    y = np.array([[fn(int(a), int(b))] for a, b in x], dtype=np.float32)
    return x, y


def _generate_circle(n: int, noise: float, rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
    radius = 1.0
    x = rng.uniform(-radius, radius, size=(n, 2)) + rng.normal(0.0, noise, size=(n, 2))
    y = ((x[:, 0] ** 2 + x[:, 1] ** 2) < (radius * 0.6) ** 2).reshape(-1, 1)
    return x.astype(np.float32), y.astype(np.float32)


def make_task(name: str, size: int = 64, noise: float = 0.05, seed: int = 0) -> Task:
    if name == "xor":
        x, y = _truth_table(lambda a, b: a ^ b)
    elif name == "and":
        x, y = _truth_table(lambda a, b: a & b)
    elif name == "or":
        x, y = _truth_table(lambda a, b: a | b)
    elif name == "circle":
        x, y = _generate_circle(size, noise, np.random.default_rng(seed))
    else:
        raise ValueError(f"Unknown task: {name}")
    return Task(name=name, inputs=x, targets=y)


def predict_all(network: Network, task: Task) -> np.ndarray:
    return np.stack([network.predict(x) for x in task.inputs])


def fitness(
    genome: Genome,
    task: Task,
    hidden_activation: str = "relu",
    output_activation: str = "sigmoid",
) -> float:
    """Non-negative score: number of targets minus the summed squared error.

    With the default sigmoid output each error term stays within [0, 1].
    """
    network = Network(genome, hidden_activation=hidden_activation, output_activation=output_activation)
    error = float(np.sum((predict_all(network, task) - task.targets) ** 2))
    return max(task.max_fitness - error, 0.0)


def accuracy(
    genome: Genome,
    task: Task,
    hidden_activation: str = "relu",
    output_activation: str = "sigmoid",
) -> float:
    network = Network(genome, hidden_activation=hidden_activation, output_activation=output_activation)
    preds = (predict_all(network, task) >= 0.5).astype(np.float32)
    return float(np.mean(preds == task.targets))

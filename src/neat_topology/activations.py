from __future__ import annotations

import jax
import jax.numpy as jnp

from .errors import ActivationError

# Activations that only make sense over a whole output vector.
VECTOR_ACTIVATIONS = ("softmax",)

ACTIVATIONS = (
    "identity",
    "linear",
    "relu",
    "tanh",
    "sigmoid",
    "sin",
    "gauss",
    "softmax",
)


def apply_activation(name: str, x: jnp.ndarray) -> jnp.ndarray:
    if name == "relu":
        return jnp.maximum(0.0, x)
    if name == "tanh":
        return jnp.tanh(x)
    if name == "sigmoid":
        return jax_sigmoid(x)
    if name == "sin":
        return jnp.sin(jnp.pi * x)
    if name == "gauss":
        return jnp.exp(-(x * x) / 2.0)
    if name == "softmax":
        return jax.nn.softmax(x)
    return x


def jax_sigmoid(x: jnp.ndarray) -> jnp.ndarray:
    return 1.0 / (1.0 + jnp.exp(-x))


def check_activation(name: str, hidden: bool = False) -> str:
    if name not in ACTIVATIONS:
        raise ActivationError(f"Unknown activation: {name}")
    if hidden and name in VECTOR_ACTIVATIONS:
        raise ActivationError(f"{name} needs the full output vector and cannot be used on hidden nodes")
    return name

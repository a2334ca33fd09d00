from __future__ import annotations


class NeatError(Exception):
    """Base class for errors raised by the evolution engine."""


class InputSizeError(NeatError, ValueError):
    pass


class ActivationError(NeatError, ValueError):
    pass


class SelectionError(NeatError, RuntimeError):
    """Cumulative fitness never reached the sampled threshold.

    This points at a fitness accounting bug (negative or non-finite scores)
    rather than at a condition the caller can recover from.
    """


class EmptyCollectionError(NeatError, ValueError):
    pass


class GenomeSaturatedError(NeatError, RuntimeError):
    pass

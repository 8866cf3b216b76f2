"""
errors.py — Engine Error Kinds
===============================
Every error the engine reports to its caller.  The web layer catches
SortVisualizerError and turns it into a JSON error payload, so nothing
here is ever allowed to escape across the rendering boundary.

    InvalidInputError      – bad custom array, bad size, counting/radix precondition
    UnknownAlgorithmError  – algorithm key not in the registry
    InvalidOperationError  – lifecycle call that makes no sense right now
"""


class SortVisualizerError(Exception):
    """Base class for every error raised by the engine."""


class InvalidInputError(SortVisualizerError, ValueError):
    """Malformed or out-of-contract input.  The working sequence is left untouched."""


class UnknownAlgorithmError(SortVisualizerError, LookupError):
    def __init__(self, key: str):
        super().__init__(f"Unknown algorithm: {key}")
        self.key = key


class InvalidOperationError(SortVisualizerError, RuntimeError):
    """E.g. start() while a sort is already running."""


__all__ = [
    "SortVisualizerError",
    "InvalidInputError",
    "UnknownAlgorithmError",
    "InvalidOperationError",
]

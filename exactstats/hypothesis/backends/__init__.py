"""Compute backends for hypothesis tests."""

from exactstats.hypothesis.backends.cpu import CPUHypothesisBackend

__all__ = [
    "CPUHypothesisBackend",
]

"""
Input generation for runs and benchmarks.

Re-export the generator so callers can write:
    from sortscope.datasets import make_dataset, SUPPORTED_DISTS
"""

from .generators import SUPPORTED_DISTS, make_dataset

__all__ = ["make_dataset", "SUPPORTED_DISTS"]

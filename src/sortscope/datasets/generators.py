"""
Seeded integer inputs for sorting runs.

Distributions:
- "random":        uniform over params["range"] = [min, max] (inclusive, required)
- "nearly_sorted": [0..n-1] degraded by ceil(swap_frac * n) random swaps
- "few_uniques":   at most k distinct values drawn from an optional inclusive range
- "small_range":   uniform over [min_val, max_val], default [0, 255] (display-sized values)
- "reversed":      [n-1, ..., 0]; ignores params and rng

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- The caller owns the RNG, so one seed reproduces a whole experiment.
- Output is a plain `list[int]`; algorithms never see NumPy scalars.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

import numpy as np

__all__ = ["SUPPORTED_DISTS", "make_dataset"]

Params = Dict[str, Any]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate `n` integers according to `spec` using `rng`.

    Parameters
    ----------
    n : int
        Number of elements, >= 0.
    spec : dict
        {"dist": <name>, "params": {...}}; see the module docstring.
    rng : numpy.random.Generator
        Seeded upstream by the caller.

    Raises
    ------
    ValueError
        On a bad `n`, an unsupported dist or invalid params.
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 0:
        raise ValueError(f"n must be a nonnegative int; got {n!r}")
    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")
    dist = spec.get("dist")
    if dist not in _GENERATORS:
        raise ValueError(f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}")
    params = spec.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError(f"{dist}.params must be a dict")
    return _GENERATORS[dist](int(n), params, rng)


# ------------------------- generators ------------------------- #


def _uniform(n: int, params: Params, rng: np.random.Generator) -> List[int]:
    if "range" not in params:
        raise ValueError("random.params.range must be provided as [min, max] (inclusive)")
    lo, hi = _inclusive_range(params["range"], "random.params.range")
    if n == 0:
        return []
    # integers() is half-open
    return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()


def _nearly_sorted(n: int, params: Params, rng: np.random.Generator) -> List[int]:
    raw = params.get("swap_frac", 0.05)
    try:
        swap_frac = float(raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"nearly_sorted.params.swap_frac must be a float; got {raw!r}") from e
    if not 0.0 <= swap_frac <= 1.0:
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {swap_frac}")
    arr = list(range(n))
    swaps = int(np.ceil(swap_frac * n))
    if n == 0 or swaps == 0:
        return arr
    idxs = rng.integers(0, n, size=(swaps, 2))
    for i, j in idxs.tolist():
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def _few_uniques(n: int, params: Params, rng: np.random.Generator) -> List[int]:
    k = params.get("k")
    if isinstance(k, bool) or not isinstance(k, int) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    lo, hi = _inclusive_range(params.get("range", (0, 255)), "few_uniques.params.range")
    if n == 0:
        return []
    actual_k = min(k, n, hi - lo + 1)
    # choice() without replacement over the span keeps determinism tied to rng
    values = rng.choice(hi - lo + 1, size=actual_k, replace=False) + lo
    return values[rng.integers(0, actual_k, size=n)].tolist()


def _small_range(n: int, params: Params, rng: np.random.Generator) -> List[int]:
    if "range" in params:
        lo, hi = _inclusive_range(params["range"], "small_range.params.range")
    else:
        lo, hi = _inclusive_range(
            (params.get("min_val", 0), params.get("max_val", 255)), "small_range.params.min_val/max_val"
        )
    if n == 0:
        return []
    return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()


def _reversed(n: int, params: Params, rng: np.random.Generator) -> List[int]:
    return list(range(n - 1, -1, -1))


_GENERATORS: Dict[str, Callable[[int, Params, np.random.Generator], List[int]]] = {
    "random": _uniform,
    "nearly_sorted": _nearly_sorted,
    "few_uniques": _few_uniques,
    "small_range": _small_range,
    "reversed": _reversed,
}
SUPPORTED_DISTS = frozenset(_GENERATORS)


# ------------------------- helpers ------------------------- #


def _inclusive_range(raw: Any, where: str) -> Tuple[int, int]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError(f"{where} must be a 2-element list/tuple [min, max]")
    if not all(_is_int_like(x) for x in raw):
        raise ValueError(f"{where} values must be integers")
    lo, hi = int(raw[0]), int(raw[1])
    if lo > hi:
        raise ValueError(f"{where} invalid: min > max ({lo} > {hi})")
    return lo, hi


def _is_int_like(x: Any) -> bool:
    # Python ints and NumPy integer types, but not bools
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)

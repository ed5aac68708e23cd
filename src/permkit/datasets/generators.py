"""
Input generators for permutation benchmarks and tests.

Key vectors (make_keys):
- dist == "random":
    Integers drawn uniformly from an inclusive range (params["range"], required).

- dist == "few_uniques":
    At most k distinct integers (optional inclusive params["range"], default
    [0, 4294967295]), each position sampled from that pool. Lots of ties, which
    is what exercises stability.

- dist == "nearly_sorted":
    [0, 1, ..., n-1] with ceil(swap_frac * n) random pair swaps.

- dist == "sorted" / "reversed":
    Deterministic; RNG unused.

Permutations (make_permutation):
- "random":       uniform over all n! permutations (rng.permutation).
- "identity":     p[i] = i; n one-element cycles.
- "reversed":     p[i] = n-1-i; floor(n/2) two-element cycles.
- "single_cycle": one n-cycle (Sattolo's algorithm), the longest walk for
                  cycle-following reorders.

Public API (stable):
    make_keys(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]
    make_permutation(n: int, kind: str, rng: numpy.random.Generator) -> list[int]

Conventions:
- Both return plain Python lists; the permutation engine stays NumPy-agnostic.
- The caller supplies the RNG (seeded upstream) for reproducibility.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

SUPPORTED_DISTS = {
    "random",
    "few_uniques",
    "nearly_sorted",
    "sorted",
    "reversed",
}
SUPPORTED_PERMUTATIONS = {
    "random",
    "identity",
    "reversed",
    "single_cycle",
}
__all__ = ["SUPPORTED_DISTS", "SUPPORTED_PERMUTATIONS", "make_keys", "make_permutation"]


def make_keys(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer key vector according to `spec`.

    Parameters
    ----------
    n : int
        Number of keys. Must be >= 0.
    spec : dict
        {"dist": <name>, "params": {...}}, e.g.

            {"dist": "random", "params": {"range": [0, 1000]}}        # inclusive
            {"dist": "few_uniques", "params": {"k": 8}}
            {"dist": "nearly_sorted", "params": {"swap_frac": 0.05}}
            {"dist": "reversed"}

    rng : numpy.random.Generator
        Caller-owned generator. Unused by "sorted" and "reversed".

    Returns
    -------
    list[int]

    Raises
    ------
    ValueError
        If `n` or `spec` is invalid.
    """
    _validate_n(n)
    if not isinstance(spec, dict):
        raise ValueError("keys spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported key dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )
    params = spec.get("params") or {}

    if dist == "random":
        if "range" not in params:
            raise ValueError("random.params.range must be provided as [min, max] (inclusive)")
        lo, hi = _parse_range(params["range"])
        # integers() is half-open; +1 makes hi inclusive
        return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()

    if dist == "few_uniques":
        k = params.get("k")
        if not isinstance(k, int) or isinstance(k, bool) or k < 1:
            raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
        lo, hi = _parse_range(params.get("range", (0, 4294967295)))
        if n == 0:
            return []
        pool_size = int(min(k, n, hi - lo + 1))
        # choice without replacement over a large span would allocate the span;
        # draw until the pool is full instead (pool_size is small by intent).
        pool: Dict[int, None] = {}
        while len(pool) < pool_size:
            for x in rng.integers(lo, hi + 1, size=2 * (pool_size - len(pool))).tolist():
                pool.setdefault(x)
                if len(pool) == pool_size:
                    break
        values = list(pool)
        return [values[t] for t in rng.integers(0, pool_size, size=n).tolist()]

    if dist == "nearly_sorted":
        swap_frac = params.get("swap_frac", 0.05)
        if isinstance(swap_frac, bool) or not isinstance(swap_frac, (int, float)):
            raise ValueError(f"nearly_sorted.params.swap_frac must be a number; got {swap_frac!r}")
        if not (0.0 <= swap_frac <= 1.0):
            raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {swap_frac}")
        keys = list(range(n))
        num_swaps = int(np.ceil(swap_frac * n))
        if n == 0 or num_swaps == 0:
            return keys
        pairs = rng.integers(0, n, size=(num_swaps, 2)).tolist()
        for i, j in pairs:
            keys[i], keys[j] = keys[j], keys[i]
        return keys

    if dist == "sorted":
        return list(range(n))

    # "reversed"
    return list(range(n - 1, -1, -1))


def make_permutation(n: int, kind: str, rng: np.random.Generator) -> List[int]:
    """
    Generate a permutation of range(n) of the given `kind`.

    Raises
    ------
    ValueError
        If `n` is invalid or `kind` is unsupported.
    """
    _validate_n(n)
    if kind not in SUPPORTED_PERMUTATIONS:
        raise ValueError(
            f"Unsupported permutation kind: {kind!r}. "
            f"Supported: {sorted(SUPPORTED_PERMUTATIONS)}"
        )

    if kind == "random":
        return rng.permutation(n).tolist()
    if kind == "identity":
        return list(range(n))
    if kind == "reversed":
        return list(range(n - 1, -1, -1))

    # Sattolo: like Fisher-Yates but j < i strictly, which yields one n-cycle.
    p = list(range(n))
    for i in range(n - 1, 0, -1):
        j = int(rng.integers(0, i))
        p[i], p[j] = p[j], p[i]
    return p


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, int) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_range(spec: Any) -> Tuple[int, int]:
    """
    Validate an inclusive [min, max] integer range.

    Returns
    -------
    (lo, hi) : tuple[int, int]
    """
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not isinstance(lo_raw, (int, np.integer)) or not isinstance(hi_raw, (int, np.integer)):
        raise ValueError("params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"params.range invalid: min > max ({lo} > {hi})")
    return lo, hi

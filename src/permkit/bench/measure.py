"""
Timing harness for permkit operations.

We measure exactly one call to an operation per sample, using a monotonic
high-resolution clock. Argument preparation (fresh copies of the values and,
for the destructive reorder, of the permutation it consumes), GC and warmup
all happen outside the timed block.

Public API (stable):
    time_operation_call(... ) -> dict

Returned dict schema:
    {
        "op": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each successful sample
        "status": "ok" | "timeout" | "error",
        "error": str | None,                # populated if status == "error"
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
        "validated": bool | None,           # None when no check was requested
    }
"""

from __future__ import annotations

import gc
import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

__all__ = ["time_operation_call"]

logger = logging.getLogger(__name__)


def time_operation_call(
    *,
    op_name: str,
    run: Callable[..., Any],
    prepare: Callable[[], Tuple[Any, ...]],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
    check: Optional[Callable[[Tuple[Any, ...], Any], bool]] = None,
) -> Dict[str, Any]:
    """
    Time repeated calls to `run(*prepare(), **config)`.

    Parameters
    ----------
    op_name : str
        Logical name of the operation (for logs/records).
    run : Callable
        The operation under test.
    prepare : Callable[[], tuple]
        Returns fresh positional arguments for one call. Called before every
        sample, outside the timed block.
    config : dict | None
        Keyword arguments passed through unchanged.
    repeats : int
        Number of timed samples to collect.
    warmup : bool
        If True, make one untimed call first.
    disable_gc : bool
        If True, collect and disable Python GC during the timed loop; restore afterward.
    timeout_seconds : float
        Per-sample threshold. A sample above it sets status="timeout" and stops sampling.
    check : Callable[[args, out], bool] | None
        Called once on the first timed sample's arguments and return value
        (after the clock stops). False sets status="error".

    Returns
    -------
    dict
        See module docstring for exact schema.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    kwargs = dict(config or {})
    result: Dict[str, Any] = {
        "op": op_name,
        "repeats": repeats,
        "samples_ns": [],
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
        "validated": None,
    }

    if warmup and repeats > 0:
        try:
            run(*prepare(), **kwargs)
        except Exception as e:
            logger.debug("warmup of %s failed", op_name, exc_info=True)
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            try:
                args = prepare()

                t0 = time.perf_counter_ns()
                out = run(*args, **kwargs)
                t1 = time.perf_counter_ns()
            except Exception as e:
                logger.debug("%s failed at repeat %d", op_name, r, exc_info=True)
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            elapsed = t1 - t0
            result["samples_ns"].append(int(elapsed))

            if r == 0 and check is not None:
                ok = bool(check(args, out))
                result["validated"] = ok
                if not ok:
                    result["status"] = "error"
                    result["error"] = "output does not match oracle"
                    break

            if elapsed > threshold_ns:
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break

    finally:
        # Leave GC disabled if the caller had it disabled.
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result

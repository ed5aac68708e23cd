"""
Registry of benchmarkable operations.

Each Operation knows how to build fresh arguments from a Workload (outside the
timed block), how to run itself, and what its output should be according to
the oracles in permkit.validate.

Registered names:
    sort_indices, reorder, reorder_destructive, sort_then_reorder,
    remove_duplicates, remove_intersection

Per-operation config (from the experiment YAML) is passed as keyword
arguments to the call; only the keys listed in `options` are accepted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Tuple

from permkit.filters import remove_duplicates, remove_intersection
from permkit.permute import reorder, reorder_destructive, sort_indices
from permkit.validate import (
    oracle_remove_duplicates,
    oracle_remove_intersection,
    oracle_reorder,
    oracle_sort_indices,
)

__all__ = ["Workload", "Operation", "OPERATIONS", "get_operation"]


@dataclass(frozen=True)
class Workload:
    """One generated input set, shared by every operation at a given size."""

    keys: List[int]
    order: List[int]
    values: List[str]

    @property
    def n(self) -> int:
        return len(self.keys)


@dataclass(frozen=True)
class Operation:
    name: str
    prepare: Callable[[Workload], Tuple[Any, ...]]
    run: Callable[..., Any]
    # Picks the buffer to compare from (args, return value)
    observe: Callable[[Tuple[Any, ...], Any], Any]
    expected: Callable[[Workload], Any]
    options: FrozenSet[str] = field(default_factory=frozenset)

    def check_config(self, config: Dict[str, Any]) -> None:
        unknown = sorted(set(config) - self.options)
        if unknown:
            raise ValueError(
                f"Operation '{self.name}' does not accept config keys {unknown}; "
                f"allowed: {sorted(self.options)}"
            )


def _sort_then_reorder(keys: List[int], v: List[str], **kwargs: Any) -> None:
    reorder(v, sort_indices(keys), **kwargs)


_VALIDATE = frozenset({"validate"})

OPERATIONS: Dict[str, Operation] = {
    op.name: op
    for op in (
        Operation(
            name="sort_indices",
            prepare=lambda w: (w.keys,),
            run=sort_indices,
            observe=lambda args, out: out,
            expected=lambda w: oracle_sort_indices(w.keys),
        ),
        Operation(
            name="reorder",
            prepare=lambda w: (list(w.values), w.order),
            run=reorder,
            observe=lambda args, out: args[0],
            expected=lambda w: oracle_reorder(w.values, w.order),
            options=_VALIDATE,
        ),
        Operation(
            name="reorder_destructive",
            prepare=lambda w: (list(w.order), list(w.values)),
            run=reorder_destructive,
            observe=lambda args, out: args[1],
            expected=lambda w: oracle_reorder(w.values, w.order),
            options=_VALIDATE,
        ),
        Operation(
            name="sort_then_reorder",
            prepare=lambda w: (w.keys, list(w.values)),
            run=_sort_then_reorder,
            observe=lambda args, out: args[1],
            expected=lambda w: oracle_reorder(w.values, oracle_sort_indices(w.keys)),
            options=_VALIDATE,
        ),
        Operation(
            name="remove_duplicates",
            prepare=lambda w: (list(w.keys),),
            run=remove_duplicates,
            observe=lambda args, out: args[0],
            expected=lambda w: oracle_remove_duplicates(w.keys),
        ),
        Operation(
            name="remove_intersection",
            prepare=lambda w: (list(w.keys), w.order),
            run=remove_intersection,
            observe=lambda args, out: args[0],
            expected=lambda w: oracle_remove_intersection(w.keys, w.order),
        ),
    )
}


def get_operation(name: str) -> Operation:
    try:
        return OPERATIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown operation {name!r}. Supported: {sorted(OPERATIONS)}"
        ) from None

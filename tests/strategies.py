"""Hypothesis strategies shared by the test modules."""

from __future__ import annotations

from hypothesis import strategies as st

# Few distinct values so ties (and therefore stability) actually get exercised.
tie_heavy_ints = st.integers(min_value=-5, max_value=5)


@st.composite
def values_with_permutation(draw, elements=st.text(max_size=3), max_size=60):
    """Draw (values, order) where order is a permutation of range(len(values))."""
    values = draw(st.lists(elements, min_size=0, max_size=max_size))
    order = draw(st.permutations(list(range(len(values)))))
    return values, list(order)


@st.composite
def keys_with_values(draw, keys=tie_heavy_ints, max_size=60):
    """Draw (keys, values) of equal length; values are distinct tags."""
    ks = draw(st.lists(keys, min_size=0, max_size=max_size))
    return ks, [f"v{i}" for i in range(len(ks))]

# tests/property/engine/test_resolver_properties.py
"""Property-based tests for symbolic resolution.

Properties:
- Resolving with each variable bound to itself returns an equal value
- Resolved values contain no symbolic variables
- Any unbound variable raises UnresolvedReferenceError
"""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from statecheck.contracts import SETUP_VAR, SymbolicVar, UnresolvedReferenceError
from statecheck.engine.resolver import resolve, symbolic_vars
from tests.property.settings import THOROUGH_SETTINGS

# =============================================================================
# Strategies
# =============================================================================

symbolic_values = st.builds(SymbolicVar, st.integers(min_value=0, max_value=20)) | st.just(SETUP_VAR)

hashable_leaves = st.none() | st.booleans() | st.integers() | st.text(max_size=5) | symbolic_values

nested_values = st.recursive(
    hashable_leaves,
    lambda children: (
        st.lists(children, max_size=4)
        | st.lists(children, max_size=4).map(tuple)
        | st.dictionaries(hashable_leaves, children, max_size=4)
        | st.frozensets(hashable_leaves, max_size=4)
    ),
    max_leaves=20,
)


class TestResolveProperties:
    """Invariants of resolve() over arbitrary nested values."""

    @given(value=nested_values)
    @THOROUGH_SETTINGS
    def test_identity_binding_preserves_value(self, value: Any) -> None:
        """Property: binding every variable to itself is a no-op."""
        results = {var: var for var in symbolic_vars(value)}

        resolved = resolve(value, results)

        assert resolved == value
        assert type(resolved) is type(value)

    @given(value=nested_values)
    @THOROUGH_SETTINGS
    def test_resolved_value_has_no_variables(self, value: Any) -> None:
        """Property: after resolution no placeholder remains."""
        results = {var: ("result", var.position) for var in symbolic_vars(value)}

        assert symbolic_vars(resolve(value, results)) == set()

    @given(value=nested_values, data=st.data())
    @THOROUGH_SETTINGS
    def test_unbound_variable_raises(self, value: Any, data: st.DataObject) -> None:
        """Property: a missing binding is always reported, never skipped."""
        found = symbolic_vars(value)
        assume(found)
        missing = data.draw(st.sampled_from(sorted(found, key=lambda var: var.position)))
        results = {var: var.position for var in found if var != missing}

        with pytest.raises(UnresolvedReferenceError) as exc_info:
            resolve(value, results)

        assert exc_info.value.var == missing

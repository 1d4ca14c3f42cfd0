# src/statecheck/engine/resolver.py
"""Symbolic value resolution.

Arguments generated for a command may contain SymbolicVar placeholders for
results of earlier commands. resolve() rebuilds the argument structure with
every placeholder replaced by its recorded result; symbolic_vars() lists the
placeholders a structure refers to.

Both walk lists, tuples (named tuples included), dicts (keys and values),
sets and frozensets. Anything else is a leaf and is returned untouched, so
recursion depth follows argument nesting, not sequence length.
"""

from typing import Any

from statecheck.contracts.errors import UnresolvedReferenceError
from statecheck.contracts.symbolic import ResultMap, SymbolicVar


def resolve(value: Any, results: ResultMap) -> Any:
    """Replace every SymbolicVar in value with its result.

    Args:
        value: Argument value, possibly nested
        results: Results of the commands executed so far

    Returns:
        Structurally identical value with placeholders substituted

    Raises:
        UnresolvedReferenceError: If a placeholder has no recorded result
    """
    match value:
        case SymbolicVar():
            if value not in results:
                raise UnresolvedReferenceError(value)
            return results[value]
        case tuple() if hasattr(value, "_fields"):
            return type(value)(*(resolve(item, results) for item in value))
        case tuple():
            return tuple(resolve(item, results) for item in value)
        case list():
            return [resolve(item, results) for item in value]
        case dict():
            return {resolve(key, results): resolve(item, results) for key, item in value.items()}
        case set() | frozenset():
            return type(value)(resolve(item, results) for item in value)
        case _:
            return value


def symbolic_vars(value: Any) -> set[SymbolicVar]:
    """Collect every SymbolicVar referenced anywhere inside value."""
    match value:
        case SymbolicVar():
            return {value}
        case tuple() | list() | set() | frozenset():
            found: set[SymbolicVar] = set()
            for item in value:
                found |= symbolic_vars(item)
            return found
        case dict():
            found = set()
            for key, item in value.items():
                found |= symbolic_vars(key) | symbolic_vars(item)
            return found
        case _:
            return set()

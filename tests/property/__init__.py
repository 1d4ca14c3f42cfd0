# tests/property/__init__.py
"""Property-based tests for statecheck.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- engine/: resolution, generation validity, shrink monotonicity, runner
  totality and validator agreement
"""

# src/statecheck/engine/shrink.py
"""Shrink trees and the structural shrink search.

A ShrinkTree pairs a value with lazily produced smaller candidates. For a
command sequence the candidates remove one command, then two adjacent
commands, recursively at every level:

    [a, b, c]
    ├── [b, c]   ├── [a, c]   ├── [a, b]      (single removals)
    └── [c]      └── [a]                      (adjacent pairs)

Removing a command can orphan a symbolic reference in a later command.
Such candidates stay in the tree; the search drops them through its
validity predicate.

Hypothesis already shrinks arguments and sequence length by replaying the
generator. This search runs afterwards on the concrete minimal failure and
removes commands while keeping every other command's arguments fixed,
which Hypothesis's replaying shrinker cannot always do.
"""

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class ShrinkTree(Generic[T]):
    """A root value and a thunk producing its child trees.

    Children are recomputed on every call to children(); siblings share no
    mutable state.
    """

    root: T
    _children: Callable[[], Iterable["ShrinkTree[T]"]]

    def children(self) -> Iterator["ShrinkTree[T]"]:
        return iter(self._children())

    @classmethod
    def unfold(cls, root: T, shrink: Callable[[T], Iterable[T]]) -> "ShrinkTree[T]":
        """Build a tree by applying shrink to every node, lazily."""
        return cls(root, lambda: (cls.unfold(child, shrink) for child in shrink(root)))


def removal_candidates(items: Sequence[T]) -> Iterator[tuple[T, ...]]:
    """Every single removal, then every adjacent-pair removal."""
    values = tuple(items)
    for index in range(len(values)):
        yield values[:index] + values[index + 1 :]
    for index in range(len(values) - 1):
        yield values[:index] + values[index + 2 :]


def sequence_shrink_tree(items: Sequence[T]) -> ShrinkTree[tuple[T, ...]]:
    """Shrink tree of a sequence under command removal."""
    return ShrinkTree.unfold(tuple(items), removal_candidates)


@dataclass(frozen=True)
class ShrinkOutcome(Generic[T, R]):
    """Smallest failing value found and what its failing check returned.

    failure is None when the root never failed (nothing to shrink).
    """

    value: T
    failure: R | None
    nodes_visited: int


def shrink_search(
    tree: ShrinkTree[T],
    check: Callable[[T], R | None],
    *,
    is_valid: Callable[[T], bool] = lambda _: True,
    initial_failure: R | None = None,
) -> ShrinkOutcome[T, R]:
    """Greedy depth-first search for a smaller failing value.

    Visits the children of the current node in order. The first valid child
    whose check returns a failure becomes the new current node; the search
    ends when no child of the current node fails.

    Args:
        tree: Tree whose root is a known failing value
        check: Returns a failure description, or None when the value passes
        is_valid: Candidates failing this predicate are skipped unchecked
        initial_failure: Failure already observed for tree.root
    """
    current = tree
    failure = initial_failure
    visited = 0
    progressed = True
    while progressed:
        progressed = False
        for child in current.children():
            visited += 1
            if not is_valid(child.root):
                continue
            child_failure = check(child.root)
            if child_failure is not None:
                current, failure = child, child_failure
                progressed = True
                break
    logger.debug("Shrink search finished", nodes_visited=visited)
    return ShrinkOutcome(value=current.root, failure=failure, nodes_visited=visited)

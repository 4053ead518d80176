# src/condcollapse/processing/tree.py

"""
Domain-tree alternative to the rule catalog.

Instead of rules, the whole configuration space is laid out as a trie:

- :class:`Branch`: one axis (``os``, ``version``, ``e10s``, …) with an
  ordered list of mutually exclusive, labelled children
  (``(os == "win")``, ``(os == "mac")``, …);
- :class:`Leaf`: one concrete configuration, carrying a boolean mark.

Each clause of a group is *applied* by walking the tree and marking every
leaf it selects. The marked tree is then read back post-order: a fully
marked subtree collapses to its parent's label, an unmarked subtree
disappears, and a branch with a single child contributes no label (the
value is forced by the path).

Use this variant when the configuration space is small and fixed. The rule
catalog is easier to extend when new axes appear often.

Examples
--------
>>> from condcollapse.relations.space import ConfigSpace
>>> from condcollapse.forms.clauses import Clause
>>> from condcollapse.processing.tree import DomainTree
>>> sp = ConfigSpace.from_axes(os=["win", "mac"], e10s=[True, False])
>>> t = DomainTree.from_space(sp)
>>> t.apply(Clause.of('(os == "win")', "e10s"))
1
>>> t.apply(Clause.of('(os == "win")', "not e10s"))
1
>>> t.minimize()
[Clause('(os == "win")')]
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from ..errors import AmbiguousClauseError, CollapseError, UnknownLiteralError
from ..forms.clauses import Clause, ClauseGroup
from ..forms.literals import (
    equality_literal,
    flag_literal,
    literal_axis,
)
from ..relations.space import ConfigSpace

__all__ = [
    "Leaf",
    "Branch",
    "DomainTree",
    "build_domain_tree",
    "collapse_with_tree",
]

log = logging.getLogger(__name__)

# subtree states for the post-order read-back
ALL, NONE, SOME = "all", "none", "some"


@dataclass
class Leaf:
    """A concrete configuration; `marked` once any clause selects it."""
    marked: bool = False


@dataclass
class Branch:
    """One axis with ordered, mutually exclusive labelled children."""
    axis: str
    children: List[Tuple[str, "Node"]] = field(default_factory=list)

    def labels(self) -> List[str]:
        return [lab for lab, _ in self.children]


Node = Union[Leaf, Branch]


def _label(axis: str, value, is_flag: bool) -> str:
    if is_flag:
        return flag_literal(axis, bool(value))
    return equality_literal(axis, value.item() if hasattr(value, "item") else value)


def build_domain_tree(space: ConfigSpace, axes: Optional[Sequence[str]] = None) -> Node:
    """
    Trie of `space` over `axes` (default: all axes in column order).

    Children keep the first-seen order of values in the configuration table.
    """
    axes = list(axes or space.axes)
    flags = set(space.flag_axes)

    def _build(df: pd.DataFrame, rest: List[str]) -> Node:
        if not rest:
            return Leaf()
        axis, tail = rest[0], rest[1:]
        node = Branch(axis)
        for v in pd.unique(df[axis]):
            sub = df.loc[df[axis] == v]
            node.children.append((_label(axis, v, axis in flags), _build(sub, tail)))
        return node

    return _build(space.df, axes)


def _walk_labels(node: Node, out: Dict[str, set]) -> None:
    if isinstance(node, Branch):
        for lab, child in node.children:
            out.setdefault(node.axis, set()).add(lab)
            _walk_labels(child, out)


def _mark(node: Node, clause: frozenset) -> int:
    if isinstance(node, Leaf):
        node.marked = True
        return 1
    chosen = [lab for lab in node.labels() if lab in clause]
    if chosen:
        return _mark(dict(node.children)[chosen[0]], clause)
    if any(literal_axis(t) == node.axis for t in clause):
        # the clause asks for a value this path does not have
        return 0
    return sum(_mark(child, clause) for _, child in node.children)


def _reset(node: Node) -> None:
    if isinstance(node, Leaf):
        node.marked = False
        return
    for _, child in node.children:
        _reset(child)


def _minimize(node: Node) -> Tuple[str, List[Tuple[str, ...]]]:
    if isinstance(node, Leaf):
        return (ALL, [()]) if node.marked else (NONE, [])
    results = [(lab, _minimize(child)) for lab, child in node.children]
    states = {st for _, (st, _) in results}
    if states == {ALL}:
        return ALL, [()]
    if states == {NONE}:
        return NONE, []
    forced = len(node.children) == 1
    out: List[Tuple[str, ...]] = []
    for lab, (st, clauses) in results:
        if st == NONE:
            continue
        for c in clauses:
            out.append(c if forced else (lab,) + c)
    return SOME, out


class DomainTree:
    """
    Mutable marking state over a domain trie.

    Build once per configuration space; call :meth:`reset` between groups (or
    use :func:`collapse_with_tree`, which does it for you).
    """

    def __init__(self, root: Node) -> None:
        self.root = root
        self._labels: Dict[str, set] = {}
        _walk_labels(root, self._labels)

    @classmethod
    def from_space(cls, space: ConfigSpace, axes: Optional[Sequence[str]] = None) -> "DomainTree":
        return cls(build_domain_tree(space, axes))

    def vocabulary(self) -> frozenset:
        return frozenset().union(*self._labels.values()) if self._labels else frozenset()

    def reset(self) -> None:
        _reset(self.root)

    def check(self, clause: Clause) -> None:
        """
        Validate a clause against the tree.

        Raises
        ------
        UnknownLiteralError
            A literal that labels no branch of the tree.
        AmbiguousClauseError
            Two literals on the same axis (two values, or a flag and its
            negation).
        """
        by_axis: Dict[str, List[str]] = {}
        for t in clause:
            axis = literal_axis(t)
            if t not in self._labels.get(axis, ()):
                raise UnknownLiteralError(t, "not part of the domain tree")
            by_axis.setdefault(axis, []).append(t)
        for axis, lits in by_axis.items():
            if len(lits) > 1:
                raise AmbiguousClauseError(axis, lits)

    def apply(self, clause: Clause) -> int:
        """Mark every configuration `clause` selects; returns how many."""
        self.check(clause)
        return _mark(self.root, clause.as_set())

    def minimize(self) -> List[Clause]:
        """Read back the minimal clause list for the current marks."""
        _, clauses = _minimize(self.root)
        return [Clause(c) for c in clauses]


def collapse_with_tree(group: ClauseGroup, tree: DomainTree) -> ClauseGroup:
    """
    Replace the clauses of `group` with the tree's minimal read-back.

    Unknown or ambiguous clauses leave the group untouched (warning logged).
    """
    tree.reset()
    try:
        for clause in group.clauses:
            tree.apply(clause)
    except CollapseError as e:
        log.warning("Not collapsing group %r…%r: %s", group.prefix, group.suffix, e)
        tree.reset()
        return group
    group.clauses[:] = tree.minimize()
    tree.reset()
    return group

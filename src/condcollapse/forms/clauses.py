# src/condcollapse/forms/clauses.py

"""
Clauses and clause groups.

A :class:`Clause` is a conjunction of distinct literals. It behaves like a set
for membership and equality, but remembers the order its literals were written
in so that re-serialization reproduces the input order.

A :class:`ClauseGroup` is the ordered list of clauses that share one text
context (the same prefix and suffix). It is the unit the reduction driver
works on and the only object it mutates.

Examples
--------
>>> from condcollapse.forms.clauses import Clause
>>> c = Clause.of('(os == "win")', "e10s")
>>> "e10s" in c, len(c)
(True, 2)
>>> c.without("e10s")
Clause('(os == "win")')
>>> Clause.of("a", "b") == Clause.of("b", "a")
True
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Tuple

__all__ = [
    "Clause",
    "ClauseGroup",
]


@dataclass(frozen=True, eq=False)
class Clause:
    """
    Immutable conjunction of distinct literals.

    Parameters
    ----------
    literals : tuple of str
        Literals in their written order. Duplicates are dropped, keeping the
        first occurrence.

    Notes
    -----
    - Equality and hashing are set-based: order never matters for identity.
    - Two clauses are shape-compatible (candidates for a pairwise merge) when
      they have the same length.
    """
    literals: Tuple[str, ...]
    _members: frozenset = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        lits = tuple(dict.fromkeys(self.literals))
        object.__setattr__(self, "literals", lits)
        object.__setattr__(self, "_members", frozenset(lits))

    @classmethod
    def of(cls, *literals: str) -> "Clause":
        return cls(tuple(literals))

    # --- set-like protocol ---

    def __contains__(self, literal: object) -> bool:
        return literal in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self.literals)

    def __len__(self) -> int:
        return len(self.literals)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Clause):
            return NotImplemented
        return self._members == other._members

    def __hash__(self) -> int:
        return hash(self._members)

    def issuperset(self, literals: Iterable[str]) -> bool:
        return self._members.issuperset(literals)

    def as_set(self) -> frozenset:
        return self._members

    # --- derivation ---

    def without(self, literal: str) -> "Clause":
        """Copy of the clause with `literal` removed (no-op if absent)."""
        return Clause(tuple(t for t in self.literals if t != literal))

    def __repr__(self) -> str:
        return f"Clause({', '.join(repr(t) for t in self.literals)})"


@dataclass
class ClauseGroup:
    """
    Ordered clauses sharing one prefix/suffix text context.

    Parameters
    ----------
    clauses : list of Clause
        Clauses in input order. Mutated in place by the reduction driver.
    prefix : str, default ""
        Opaque leading text, e.g. ``"    if "``.
    suffix : str, default ""
        Opaque trailing text, e.g. ``": FAIL"``.
    """
    clauses: List[Clause] = field(default_factory=list)
    prefix: str = ""
    suffix: str = ""

    @classmethod
    def from_literals(
        cls,
        rows: Iterable[Iterable[str]],
        *,
        prefix: str = "",
        suffix: str = "",
    ) -> "ClauseGroup":
        return cls([Clause(tuple(r)) for r in rows], prefix=prefix, suffix=suffix)

    def __len__(self) -> int:
        return len(self.clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    def literal_count(self) -> int:
        """Total literal occurrences summed over all clauses."""
        return sum(len(c) for c in self.clauses)

    def literals(self) -> List[str]:
        """Distinct literals across the group, in first-seen order."""
        seen = {}
        for c in self.clauses:
            for t in c:
                seen.setdefault(t, None)
        return list(seen)

    def copy(self) -> "ClauseGroup":
        return ClauseGroup(list(self.clauses), prefix=self.prefix, suffix=self.suffix)

    def as_sets(self) -> List[frozenset]:
        return [c.as_set() for c in self.clauses]

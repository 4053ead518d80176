# src/condcollapse/relations/rules.py

"""
Collapse rules and rule catalogs.

A collapse rule states a domain fact: *under these prerequisite literals, the
alternative literals are mutually exclusive and jointly exhaustive*.

- With one alternative, the alternative is implied by the prerequisites and
  can be dropped from any clause that already holds the prerequisites.
- With two alternatives, two clauses that differ only in which alternative
  they hold can be merged into one clause holding neither.

The invariant is the rule author's responsibility; see
:func:`condcollapse.relations.soundness.check_catalog` for an optional check
against a configuration space.

Examples
--------
>>> from condcollapse.relations.rules import CollapseRule, RuleCatalog
>>> r = CollapseRule.new(['(os == "mac")'], ['(bits == 64)'])
>>> r.is_single, r.is_pair
(True, False)
>>> len(RuleCatalog([r]))
1
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

__all__ = [
    "CollapseRule",
    "RuleCatalog",
]


@dataclass(frozen=True, slots=True)
class CollapseRule:
    """
    One catalog entry.

    Parameters
    ----------
    prerequisites : frozenset of str
        Literals every affected clause must contain.
    alternatives : tuple of str
        One or two literals that partition the prerequisite context.

    Raises
    ------
    ValueError
        If there are not exactly one or two distinct alternatives, or an
        alternative is also a prerequisite.
    """
    prerequisites: frozenset
    alternatives: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "prerequisites", frozenset(self.prerequisites))
        object.__setattr__(self, "alternatives", tuple(self.alternatives))
        if len(self.alternatives) not in (1, 2):
            raise ValueError(
                f"A collapse rule needs 1 or 2 alternatives, got {len(self.alternatives)}"
            )
        if len(set(self.alternatives)) != len(self.alternatives):
            raise ValueError("Collapse rule alternatives must be distinct")
        if self.prerequisites.intersection(self.alternatives):
            raise ValueError("A literal cannot be both prerequisite and alternative")

    @classmethod
    def new(cls, prerequisites: Iterable[str], alternatives: Iterable[str]) -> "CollapseRule":
        return cls(frozenset(prerequisites), tuple(alternatives))

    @property
    def is_single(self) -> bool:
        return len(self.alternatives) == 1

    @property
    def is_pair(self) -> bool:
        return len(self.alternatives) == 2

    def matches(self, literals) -> bool:
        """True iff every prerequisite is contained in `literals`."""
        return all(p in literals for p in self.prerequisites)

    def other_alternative(self, literal: str) -> Optional[str]:
        """For a two-alternative rule, the alternative that is not `literal`."""
        if not self.is_pair:
            return None
        a, b = self.alternatives
        if literal == a:
            return b
        if literal == b:
            return a
        return None

    def pretty(self) -> str:
        pre = " ∧ ".join(sorted(self.prerequisites)) or "TRUE"
        alts = " | ".join(self.alternatives)
        return f"{pre} ⇒ {{{alts}}}"

    def __repr__(self) -> str:
        return f"CollapseRule({self.pretty()})"


class RuleCatalog:
    """
    Immutable, ordered list of :class:`CollapseRule`.

    The catalog is built once and passed explicitly to the reduction driver;
    nothing mutates it afterwards. Order decides which rule fires first.
    """

    __slots__ = ("_rules", "name")

    def __init__(self, rules: Iterable[CollapseRule], *, name: str = "catalog") -> None:
        rules = tuple(rules)
        for r in rules:
            if not isinstance(r, CollapseRule):
                raise TypeError(f"RuleCatalog expects CollapseRule items, got {type(r).__name__}")
        self._rules: Tuple[CollapseRule, ...] = rules
        self.name = name

    @property
    def rules(self) -> Tuple[CollapseRule, ...]:
        return self._rules

    def single_rules(self) -> Tuple[CollapseRule, ...]:
        return tuple(r for r in self._rules if r.is_single)

    def pair_rules(self) -> Tuple[CollapseRule, ...]:
        return tuple(r for r in self._rules if r.is_pair)

    def literals(self) -> frozenset:
        """Every literal mentioned anywhere in the catalog."""
        out = set()
        for r in self._rules:
            out.update(r.prerequisites)
            out.update(r.alternatives)
        return frozenset(out)

    def __iter__(self) -> Iterator[CollapseRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __getitem__(self, i: int) -> CollapseRule:
        return self._rules[i]

    def __repr__(self) -> str:
        return f"RuleCatalog({self.name!r}, n={len(self._rules)})"

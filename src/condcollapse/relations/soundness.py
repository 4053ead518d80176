# src/condcollapse/relations/soundness.py

"""
Runtime soundness check for a collapse catalog.

The reduction driver trusts every rule blindly. This module checks each rule
against an enumerated configuration space:

- a single-alternative rule is sound iff ``prerequisites ⊆ alternative``
  holds on every configuration;
- a two-alternative rule is sound iff, on configurations meeting the
  prerequisites, the alternatives are disjoint and their union covers
  every such configuration;
- a rule whose prerequisites hold nowhere is reported as *vacuous*. It can
  never fire on meaningful input, and usually means a typo.

Examples
--------
>>> from condcollapse.relations.space import ConfigSpace
>>> from condcollapse.relations.rules import CollapseRule, RuleCatalog
>>> from condcollapse.relations.soundness import check_catalog
>>> sp = ConfigSpace.from_axes(os=["win", "mac"], e10s=[True, False])
>>> bad = RuleCatalog([CollapseRule.new(['(os == "win")'], ["e10s"])])
>>> [v.kind for v in check_catalog(bad, sp)]
['not_implied']
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List

from ..errors import UnknownLiteralError
from ..forms.predicates import clause_predicate, literal_predicate
from .rules import CollapseRule, RuleCatalog
from .space import ConfigSpace

__all__ = [
    "RuleViolation",
    "check_rule",
    "check_catalog",
]


@dataclass(frozen=True)
class RuleViolation:
    """
    One problem found with one rule.

    kind is one of ``"vacuous"``, ``"not_implied"``, ``"overlap"``,
    ``"not_exhaustive"``, ``"unknown_literal"``. ``count`` is the number of
    offending configurations (0 for vacuous/unknown).
    """
    rule: CollapseRule
    kind: str
    count: int = 0
    detail: str = ""

    def pretty(self) -> str:
        s = f"[{self.kind}] {self.rule.pretty()}"
        if self.count:
            s += f"  ({self.count} configuration(s))"
        if self.detail:
            s += f"  {self.detail}"
        return s


def check_rule(rule: CollapseRule, space: ConfigSpace) -> List[RuleViolation]:
    """All violations of a single rule over `space` (empty list when sound)."""
    try:
        pre = space.mask(clause_predicate(sorted(rule.prerequisites)))
        alts = [space.mask(literal_predicate(a)) for a in rule.alternatives]
    except UnknownLiteralError as e:
        return [RuleViolation(rule, "unknown_literal", detail=str(e))]

    if not pre.any():
        return [RuleViolation(rule, "vacuous")]

    out: List[RuleViolation] = []
    if rule.is_single:
        bad = int((pre & ~alts[0]).sum())
        if bad:
            out.append(RuleViolation(rule, "not_implied", bad))
        return out

    a, b = alts
    overlap = int((pre & a & b).sum())
    if overlap:
        out.append(RuleViolation(rule, "overlap", overlap))
    missing = int((pre & ~(a | b)).sum())
    if missing:
        out.append(RuleViolation(rule, "not_exhaustive", missing))
    return out


def check_catalog(catalog: RuleCatalog, space: ConfigSpace) -> List[RuleViolation]:
    """Check every rule in order; returns the concatenated violations."""
    out: List[RuleViolation] = []
    for rule in catalog:
        out.extend(check_rule(rule, space))
    return out

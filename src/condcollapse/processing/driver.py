# src/condcollapse/processing/driver.py

"""
Fixed-point reduction driver.

The driver owns one :class:`~condcollapse.forms.clauses.ClauseGroup` for the
duration of a call and rewrites it in place:

scanning
    For ``i = 0, 1, …`` and ``j < i`` try the flip-merge, then every catalog
    rule as a rule-guided merge, on ``(clause[i], clause[j])``. On the first
    success ``clause[j]`` is replaced by the merge, ``clause[i]`` is removed
    and scanning restarts from the top.

    If no pair merges, every clause is swept against every single-alternative
    rule. If the sweep shrank anything, scanning restarts.

converged
    Nothing fired; the group is returned.

Every success lowers either the clause count or the total literal count, so
the loop always terminates.

Examples
--------
>>> from condcollapse.forms.clauses import ClauseGroup
>>> from condcollapse.relations.catalog import build_collapse_rules
>>> from condcollapse.processing.driver import collapse
>>> g = ClauseGroup.from_literals([
...     ['(os == "win")', '(version == "6.1.7601")', "not webrender", "e10s"],
...     ['(os == "win")', '(version == "10.0.15063")', "e10s"],
... ])
>>> [list(c) for c in collapse(g, build_collapse_rules())]
[['(os == "win")']]
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..config import CollapseConfig
from ..errors import ReductionLimitError, UnknownLiteralError
from ..forms.clauses import Clause, ClauseGroup
from ..relations.rules import RuleCatalog
from ..relations.space import ConfigSpace, Vocabulary
from .merge import try_collapse, try_collapse_flip, try_collapse_pair

__all__ = [
    "CollapseStats",
    "collapse",
    "collapse_with_stats",
    "is_converged",
]

log = logging.getLogger(__name__)


@dataclass
class CollapseStats:
    """
    Counters for one reduction call.

    Attributes
    ----------
    flip_merges, rule_merges, single_shrinks : int
        Successful applications of each operator.
    sweeps : int
        Single-clause sweeps performed (including the final empty one).
    clauses_before, clauses_after : int
    literals_before, literals_after : int
    skipped : bool
        True when the group was returned unreduced by a fail-safe.
    unknown : list of str
        Literals that triggered the unknown-literal fail-safe.
    reverted : bool
        True when equivalence verification restored the original clauses.
    """
    flip_merges: int = 0
    rule_merges: int = 0
    single_shrinks: int = 0
    sweeps: int = 0
    clauses_before: int = 0
    clauses_after: int = 0
    literals_before: int = 0
    literals_after: int = 0
    skipped: bool = False
    unknown: List[str] = field(default_factory=list)
    reverted: bool = False

    @property
    def steps(self) -> int:
        return self.flip_merges + self.rule_merges + self.single_shrinks

    @property
    def clauses_removed(self) -> int:
        return self.clauses_before - self.clauses_after


def _merge_pair(a: Clause, b: Clause, catalog: RuleCatalog, stats: CollapseStats) -> Optional[Clause]:
    merged = try_collapse_flip(a, b)
    if merged is not None:
        log.debug("Collapsed %r and %r to %r via flip", a, b, merged)
        stats.flip_merges += 1
        return merged
    for rule in catalog:
        merged = try_collapse_pair(a, b, rule)
        if merged is not None:
            log.debug("Collapsed %r and %r to %r via %r", a, b, merged, rule)
            stats.rule_merges += 1
            return merged
    return None


def _scan_pairs(clauses: List[Clause], catalog: RuleCatalog, stats: CollapseStats) -> bool:
    for i in range(len(clauses)):
        for j in range(i):
            merged = _merge_pair(clauses[i], clauses[j], catalog, stats)
            if merged is not None:
                clauses[j] = merged
                del clauses[i]
                return True
    return False


def _sweep_singles(clauses: List[Clause], catalog: RuleCatalog, stats: CollapseStats) -> bool:
    stats.sweeps += 1
    fired = False
    for idx in range(len(clauses)):
        for rule in catalog:
            shrunk = try_collapse(clauses[idx], rule)
            if shrunk is not None:
                log.debug("Collapsed %r to %r via %r", clauses[idx], shrunk, rule)
                clauses[idx] = shrunk
                stats.single_shrinks += 1
                fired = True
    return fired


def collapse_with_stats(
    group: ClauseGroup,
    catalog: RuleCatalog,
    *,
    vocabulary: Optional[Vocabulary] = None,
    space: Optional[ConfigSpace] = None,
    config: Optional[CollapseConfig] = None,
) -> Tuple[ClauseGroup, CollapseStats]:
    """
    Reduce `group` in place to a fixed point under `catalog`.

    Parameters
    ----------
    group : ClauseGroup
        Mutated in place and returned.
    catalog : RuleCatalog
        Domain rules, passed explicitly.
    vocabulary : Vocabulary, optional
        Known literals. A group holding anything else is returned unchanged
        (when ``config.validate_literals`` is on).
    space : ConfigSpace, optional
        Needed only for ``config.verify_equivalence``.
    config : CollapseConfig, optional

    Returns
    -------
    (ClauseGroup, CollapseStats)

    Raises
    ------
    ReductionLimitError
        If more than ``config.max_steps`` merges succeed.
    """
    cfg = config or CollapseConfig()
    stats = CollapseStats(
        clauses_before=len(group),
        literals_before=group.literal_count(),
    )

    if vocabulary is not None and cfg.validate_literals:
        unknown = vocabulary.unknown(group.literals())
        if unknown:
            log.warning(
                "Not collapsing group %r…%r: unrecognized literal(s) %s",
                group.prefix, group.suffix, ", ".join(unknown),
            )
            stats.skipped = True
            stats.unknown = unknown
            stats.clauses_after = stats.clauses_before
            stats.literals_after = stats.literals_before
            return group, stats

    original = list(group.clauses)
    clauses = group.clauses

    while True:
        if stats.steps > cfg.max_steps:
            raise ReductionLimitError(cfg.max_steps)
        if _scan_pairs(clauses, catalog, stats):
            continue
        if _sweep_singles(clauses, catalog, stats):
            continue
        break

    if cfg.verify_equivalence and space is not None:
        from .coverage import equivalent  # local import to avoid cycle
        try:
            same = equivalent(original, clauses, space)
        except UnknownLiteralError as e:
            log.warning("Cannot verify group %r…%r: %s", group.prefix, group.suffix, e)
            same = True
        if not same:
            log.warning(
                "Collapse of group %r…%r changed its meaning; keeping the original clauses",
                group.prefix, group.suffix,
            )
            clauses[:] = original
            stats.reverted = True

    stats.clauses_after = len(clauses)
    stats.literals_after = group.literal_count()
    return group, stats


def collapse(
    group: ClauseGroup,
    catalog: RuleCatalog,
    *,
    vocabulary: Optional[Vocabulary] = None,
    space: Optional[ConfigSpace] = None,
    config: Optional[CollapseConfig] = None,
) -> ClauseGroup:
    """Same as :func:`collapse_with_stats` but returns only the group."""
    out, _ = collapse_with_stats(group, catalog, vocabulary=vocabulary, space=space, config=config)
    return out


def is_converged(group: ClauseGroup, catalog: RuleCatalog) -> bool:
    """True iff no operator would fire on `group` (the group is not touched)."""
    clauses = list(group.clauses)
    probe = CollapseStats()
    for i in range(len(clauses)):
        for j in range(i):
            if _merge_pair(clauses[i], clauses[j], catalog, probe) is not None:
                return False
    return not any(
        try_collapse(c, rule) is not None for c in clauses for rule in catalog
    )

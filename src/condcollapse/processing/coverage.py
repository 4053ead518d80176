# src/condcollapse/processing/coverage.py

"""
Brute-force diagnostics over a configuration space.

- :func:`coverage_mask`: which configurations a set of clauses selects
- :func:`equivalent`: do two clause sets select exactly the same
  configurations?
- :func:`uncovered`: the configurations a clause set leaves out
- :func:`inverted_coverage_count`: how many clauses the complement would
  need under the same catalog (an advisory signal for flipping a default)

All functions are read-only with respect to their inputs.
"""

from __future__ import annotations
from typing import Iterable, List, Optional

import pandas as pd

from ..config import CollapseConfig
from ..forms.clauses import Clause, ClauseGroup
from ..forms.predicates import group_predicate
from ..relations.rules import RuleCatalog
from ..relations.space import ConfigSpace

__all__ = [
    "coverage_mask",
    "equivalent",
    "uncovered",
    "complement_group",
    "inverted_coverage_count",
]


def _as_literal_lists(clauses: Iterable[Iterable[str]]) -> List[List[str]]:
    if isinstance(clauses, ClauseGroup):
        clauses = clauses.clauses
    return [list(c) for c in clauses]


def coverage_mask(clauses: Iterable[Iterable[str]], space: ConfigSpace) -> pd.Series:
    """Boolean mask of configurations where at least one clause holds."""
    return space.mask(group_predicate(_as_literal_lists(clauses)))


def equivalent(
    before: Iterable[Iterable[str]],
    after: Iterable[Iterable[str]],
    space: ConfigSpace,
) -> bool:
    """
    True iff both clause sets select the same configurations of `space`.

    Examples
    --------
    >>> from condcollapse.relations.space import ConfigSpace
    >>> sp = ConfigSpace.from_axes(os=["win", "mac"], e10s=[True, False])
    >>> equivalent([['(os == "win")', "e10s"], ['(os == "win")', "not e10s"]],
    ...            [['(os == "win")']], sp)
    True
    """
    return bool(coverage_mask(before, space).equals(coverage_mask(after, space)))


def uncovered(clauses: Iterable[Iterable[str]], space: ConfigSpace) -> pd.DataFrame:
    """Rows of the configuration table that no clause selects."""
    m = coverage_mask(clauses, space)
    return space.df.loc[~m]


def complement_group(
    group: ClauseGroup,
    space: ConfigSpace,
    *,
    axes: Optional[List[str]] = None,
) -> ClauseGroup:
    """
    One fully specified clause per configuration the group does not select.

    The result is unreduced; it shares the group's prefix and suffix.
    """
    m = coverage_mask(group, space)
    rows = [space.row_literals(i, axes) for i in range(len(space)) if not bool(m.iloc[i])]
    return ClauseGroup([Clause(r) for r in rows], prefix=group.prefix, suffix=group.suffix)


def inverted_coverage_count(
    group: ClauseGroup,
    catalog: RuleCatalog,
    space: ConfigSpace,
    *,
    config: Optional[CollapseConfig] = None,
) -> int:
    """
    Number of clauses needed to express the complement of `group`.

    The complement is built from the configurations `group` leaves out and
    then reduced with the same catalog. `group` itself is not modified.

    Raises
    ------
    UnknownLiteralError
        If the group mentions a literal the space cannot evaluate.
    """
    from .driver import collapse  # local import to avoid cycle

    comp = complement_group(group, space)
    cfg = config or CollapseConfig()
    collapse(comp, catalog, config=CollapseConfig(validate_literals=False, max_steps=cfg.max_steps))
    return len(comp)

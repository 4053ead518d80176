# src/condcollapse/processing/merge.py

"""
The three reduction primitives.

Each operator either returns a new, smaller :class:`~condcollapse.forms.clauses.Clause`
or ``None`` when it does not fire. None of them mutate their inputs.

- :func:`try_collapse`: one clause, one single-alternative rule: drop the
  implied alternative.
- :func:`try_collapse_flip`: two clauses that differ only in ``X`` vs
  ``not X``: drop the flag.
- :func:`try_collapse_pair`: two clauses that differ only in the two
  alternatives of a two-alternative rule: drop the alternative.

Examples
--------
>>> from condcollapse.forms.clauses import Clause
>>> from condcollapse.processing.merge import try_collapse_flip
>>> try_collapse_flip(Clause.of("a", "not x"), Clause.of("a", "x"))
Clause('a')
>>> try_collapse_flip(Clause.of("not x", "not y"), Clause.of("x", "y")) is None
True
"""

from __future__ import annotations
import logging
from typing import List, Optional

from ..forms.clauses import Clause
from ..forms.literals import flip, is_equality
from ..relations.rules import CollapseRule

__all__ = [
    "try_collapse",
    "try_collapse_flip",
    "try_collapse_pair",
]

log = logging.getLogger(__name__)


def try_collapse(clause: Clause, rule: CollapseRule) -> Optional[Clause]:
    """
    Single-clause reduction.

    Fires iff `rule` has exactly one alternative, `clause` holds every
    prerequisite, and `clause` holds the alternative. Returns `clause`
    without the alternative.
    """
    if not rule.is_single:
        return None
    if not rule.matches(clause):
        return None
    alt = rule.alternatives[0]
    if alt not in clause:
        return None
    return clause.without(alt)


def try_collapse_flip(a: Clause, b: Clause) -> Optional[Clause]:
    """
    Generic flip-merge of two equal-size clauses.

    Every literal of `a` must either be in `b`, or be the single literal whose
    textual negation is in `b`. A second flip, or any other mismatch, makes
    the merge fail. Equality literals never flip, in either direction.
    """
    if len(a) != len(b):
        return None
    result: List[str] = []
    flipped = False
    for tok in a:
        if tok in b:
            result.append(tok)
        elif not flipped and not is_equality(tok) and not is_equality(flip(tok)) and flip(tok) in b:
            log.debug("  flipped %s", tok)
            flipped = True
        else:
            return None
    # no flip: a and b are identical and collapse to one copy
    return Clause(tuple(result))


def try_collapse_pair(a: Clause, b: Clause, rule: CollapseRule) -> Optional[Clause]:
    """
    Rule-guided merge of two equal-size clauses.

    Both clauses must hold the rule's prerequisites. Every literal of `a` must
    either be in `b`, or be the single literal that is one of the rule's two
    alternatives while `b` holds the other one.
    """
    if not rule.is_pair:
        return None
    if len(a) != len(b):
        return None
    if not (rule.matches(a) and rule.matches(b)):
        return None
    result: List[str] = []
    matched = False
    for tok in a:
        if tok in b:
            result.append(tok)
            continue
        if matched:
            return None
        other = rule.other_alternative(tok)
        if other is None or other not in b:
            return None
        log.debug("  matched alternatives %s, %s", tok, other)
        matched = True
    return Clause(tuple(result))

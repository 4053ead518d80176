# src/condcollapse/errors.py

"""
Exception types raised by condcollapse.

All of them derive from :class:`CollapseError` so callers that only care about
"something in the collapse machinery went wrong" can catch one type. Constructor
validation (bad rule arity, bad config knobs) keeps using ``ValueError`` and
``TypeError``.
"""

from __future__ import annotations

from typing import Iterable, Tuple

__all__ = [
    "CollapseError",
    "UnknownLiteralError",
    "AmbiguousClauseError",
    "ReductionLimitError",
]


class CollapseError(Exception):
    """Base class for every condcollapse error."""


class UnknownLiteralError(CollapseError):
    """
    A literal is not part of the known vocabulary.

    Parameters
    ----------
    literal : str
        The offending literal, exactly as it appeared in the clause.
    """

    def __init__(self, literal: str, detail: str = "") -> None:
        self.literal = literal
        msg = f"Unknown literal: {literal!r}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class AmbiguousClauseError(CollapseError):
    """
    A clause selects more than one mutually exclusive sibling of a branch.

    Raised by the domain-tree variant, e.g. for a clause holding both
    ``(os == "win")`` and ``(os == "mac")``.
    """

    def __init__(self, axis: str, literals: Iterable[str]) -> None:
        self.axis = axis
        self.literals: Tuple[str, ...] = tuple(literals)
        super().__init__(
            f"Clause selects {len(self.literals)} alternatives of axis {axis!r}: "
            + ", ".join(self.literals)
        )


class ReductionLimitError(CollapseError):
    """The reduction driver exceeded its configured step guard."""

    def __init__(self, steps: int) -> None:
        self.steps = steps
        super().__init__(f"Reduction did not converge within {steps} steps")

# src/condcollapse/config.py

from __future__ import annotations
from dataclasses import dataclass

"""
Configuration objects for the collapse pipeline.

This module centralizes the user-tunable knobs that affect how clause groups
are reduced and what diagnostics are produced along the way.

The primary entry point is :class:`CollapseConfig`, a small dataclass with
sane defaults. Treat it as an immutable configuration snapshot you pass into
the driver or pipeline; avoid mutating it mid-run.

Examples
--------
>>> from condcollapse.config import CollapseConfig
>>> cfg = CollapseConfig(max_steps=50, verify_equivalence=True)
>>> cfg.max_steps
50
>>> cfg.validate_literals
True
"""

__all__ = [
    'CollapseConfig',
]

@dataclass(frozen=True)
class CollapseConfig:
    """
    Knobs used by the reduction driver and the file-level pipeline.

    Parameters
    ----------
    validate_literals : bool, default=True
        If ``True`` and a vocabulary is available, a group holding any literal
        outside the vocabulary is returned unreduced (with a warning) instead of
        being merged.
    max_steps : int, default=10000
        Upper bound on successful merge applications for a single group. The
        driver always terminates on its own; reaching this bound means a bug
        and raises :class:`~condcollapse.errors.ReductionLimitError`.
    verify_equivalence : bool, default=False
        After reducing a group, compare the before/after clause sets by brute
        force over the configuration space. On mismatch the original clauses
        are restored and a warning is logged.
    suggest_inversion : bool, default=False
        Compute the inverted coverage count for every reduced group and log a
        hint when the complement would need fewer clauses than the group.
    warn_duplicate_suffix : bool, default=True
        Warn when two groups in the same section share a suffix.

    Notes
    -----
    - ``verify_equivalence`` and ``suggest_inversion`` require a
      :class:`~condcollapse.relations.space.ConfigSpace`; without one they are
      silently skipped.

    Examples
    --------
    >>> CollapseConfig(validate_literals=False)  # doctest: +ELLIPSIS
    CollapseConfig(validate_literals=False, max_steps=10000, ...)
    """

    validate_literals: bool = True
    max_steps: int = 10_000

    # Diagnostics
    verify_equivalence: bool = False
    suggest_inversion: bool = False
    warn_duplicate_suffix: bool = True

    def __post_init__(self):
        if self.max_steps < 1:
            raise ValueError("max_steps must be ≥ 1")

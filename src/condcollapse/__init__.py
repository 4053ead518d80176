"""
condcollapse: minimize blocks of conditional expectation lines.

A block such as::

    if (os == "win") and (version == "6.1.7601") and e10s: FAIL
    if (os == "win") and (version == "10.0.15063") and e10s: FAIL

is rewritten into the smallest equivalent set of clauses using a catalog of
domain rules about the known platform matrix.
"""

from .config import CollapseConfig
from .errors import AmbiguousClauseError, CollapseError, ReductionLimitError, UnknownLiteralError
from .forms import Clause, ClauseGroup
from .relations import (
    CollapseRule,
    ConfigSpace,
    RuleCatalog,
    Vocabulary,
    build_collapse_rules,
    check_catalog,
    default_space,
)
from .processing import collapse, collapse_with_stats, inverted_coverage_count
from .pipeline import CollapsePipeline

__version__ = "0.1.0"

__all__ = [
    "CollapseConfig",
    "CollapseError",
    "UnknownLiteralError",
    "AmbiguousClauseError",
    "ReductionLimitError",
    "Clause",
    "ClauseGroup",
    "CollapseRule",
    "RuleCatalog",
    "ConfigSpace",
    "Vocabulary",
    "build_collapse_rules",
    "check_catalog",
    "default_space",
    "collapse",
    "collapse_with_stats",
    "inverted_coverage_count",
    "CollapsePipeline",
]

from __future__ import annotations

from .merge import try_collapse, try_collapse_flip, try_collapse_pair
from .driver import CollapseStats, collapse, collapse_with_stats, is_converged
from .coverage import (
    complement_group,
    coverage_mask,
    equivalent,
    inverted_coverage_count,
    uncovered,
)
from .tree import Branch, DomainTree, Leaf, build_domain_tree, collapse_with_tree

__all__ = [
    "try_collapse",
    "try_collapse_flip",
    "try_collapse_pair",
    "CollapseStats",
    "collapse",
    "collapse_with_stats",
    "is_converged",
    "complement_group",
    "coverage_mask",
    "equivalent",
    "inverted_coverage_count",
    "uncovered",
    "Branch",
    "DomainTree",
    "Leaf",
    "build_domain_tree",
    "collapse_with_tree",
]

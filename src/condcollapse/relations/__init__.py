"""
Domain knowledge: collapse rules, the default catalog, the configuration
space they describe and the check that ties the two together.
"""

from .rules import CollapseRule, RuleCatalog
from .catalog import build_collapse_rules
from .space import ConfigSpace, Vocabulary, default_space
from .soundness import RuleViolation, check_rule, check_catalog

__all__ = [
    "CollapseRule",
    "RuleCatalog",
    "build_collapse_rules",
    "ConfigSpace",
    "Vocabulary",
    "default_space",
    "RuleViolation",
    "check_rule",
    "check_catalog",
]

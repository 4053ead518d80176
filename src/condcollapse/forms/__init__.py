"""
Unified import layer for the condition forms.

This makes condcollapse.forms a single access point for:
    - Literals                          (literals)
    - Clauses and clause groups         (clauses)
    - Masks over a configuration table  (predicates)
"""

from . import literals
from . import clauses
from . import predicates

# Re-export everything explicitly
from .literals import *
from .clauses import *
from .predicates import *

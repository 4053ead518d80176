# src/condcollapse/forms/predicates.py

"""
Configuration-table predicates C(df) -> boolean masks.

A configuration space is a DataFrame with one row per valid configuration and
one column per axis (``os``, ``version``, ``bits``, ``e10s``, ...). Literals,
clauses and clause groups are turned into predicates over that table so their
meaning can be compared by brute force.

- Composable boolean logic: AND (&), OR (|), NOT (~)
- :func:`literal_predicate` maps one literal to a column test
- :func:`clause_predicate` / :func:`group_predicate` build conjunctions and
  disjunctions of those

Examples
--------
>>> import pandas as pd
>>> from condcollapse.forms.predicates import literal_predicate, clause_predicate
>>> df = pd.DataFrame({"os": ["win", "mac", "win"], "e10s": [True, True, False]})
>>> literal_predicate('(os == "win")').mask(df).tolist()
[True, False, True]
>>> clause_predicate(['(os == "win")', "not e10s"]).mask(df).tolist()
[False, False, True]
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import reduce
from typing import Any, Callable, Iterable
import numpy as np
import pandas as pd
from pandas.api.types import is_bool_dtype

from ..errors import UnknownLiteralError
from .literals import is_negated, parse_equality, NOT_PREFIX

__all__ = [
    "Predicate",
    "AndPred",
    "OrPred",
    "NotPred",
    "Where",
    "TRUE",
    "FALSE",
    "literal_predicate",
    "clause_predicate",
    "group_predicate",
]


# =========================
# Internal helpers
# =========================

def _as_bool_series(arr: Any, index: pd.Index) -> pd.Series:
    """
    Normalize any array-like to a boolean Series aligned to a given index.

    Examples
    --------
    >>> import pandas as pd
    >>> from condcollapse.forms.predicates import _as_bool_series
    >>> _as_bool_series([1, 0, 2], pd.RangeIndex(3)).tolist()
    [True, False, True]
    """
    if isinstance(arr, pd.Series):
        if arr.dtype != bool:
            arr = arr.fillna(False).astype(bool, copy=False)
        return arr.reindex(index, fill_value=False)
    return pd.Series(np.asarray(arr, dtype=bool), index=index)


# =========================
# Base predicate + combinators
# =========================

class Predicate:
    """
    Base class for predicates producing boolean masks over a configuration table.

    Predicates are composable with bitwise operators:
    - `&` (AND) yields :class:`AndPred`
    - `|` (OR) yields :class:`OrPred`
    - `~` (NOT) yields :class:`NotPred`
    """
    name: str = "Predicate"

    def mask(self, df: pd.DataFrame) -> pd.Series:
        """Return a boolean Series aligned to `df.index`. Subclasses must implement."""
        raise NotImplementedError

    def __and__(self, other: "Predicate") -> "Predicate":
        return AndPred(self, other)

    def __or__(self, other: "Predicate") -> "Predicate":
        return OrPred(self, other)

    def __invert__(self) -> "Predicate":
        return NotPred(self)

    def __repr__(self) -> str:
        return getattr(self, "name", self.__class__.__name__)


@dataclass
class AndPred(Predicate):
    """Logical conjunction (AND) of two predicates."""
    a: Predicate
    b: Predicate
    name: str = "C_and"

    def mask(self, df: pd.DataFrame) -> pd.Series:
        return _as_bool_series(self.a.mask(df) & self.b.mask(df), df.index)

    def __repr__(self) -> str:
        return f"({self.a!r} ∧ {self.b!r})"


@dataclass
class OrPred(Predicate):
    """Logical disjunction (OR) of two predicates."""
    a: Predicate
    b: Predicate
    name: str = "C_or"

    def mask(self, df: pd.DataFrame) -> pd.Series:
        return _as_bool_series(self.a.mask(df) | self.b.mask(df), df.index)

    def __repr__(self) -> str:
        return f"({self.a!r} ∨ {self.b!r})"


@dataclass
class NotPred(Predicate):
    """Logical negation (NOT) of a predicate."""
    a: Predicate
    name: str = "C_not"

    def mask(self, df: pd.DataFrame) -> pd.Series:
        return _as_bool_series(~self.a.mask(df), df.index)

    def __repr__(self) -> str:
        return f"(~{self.a!r})"


@dataclass
class Where(Predicate):
    """
    Vectorized predicate from a function `fn(df) -> Series[bool]`.

    Raises
    ------
    ValueError
        If `fn` does not return a boolean Series.
    """
    fn: Callable[[pd.DataFrame], pd.Series]
    name: str = "Where"

    def mask(self, df: pd.DataFrame) -> pd.Series:
        m = self.fn(df)
        if not isinstance(m, pd.Series) or m.dtype != bool:
            raise ValueError("Where(fn) must return a boolean pandas Series.")
        return m.reindex(df.index, fill_value=False)

    def __repr__(self) -> str:
        if self.name and self.name != "Where":
            return self.name
        fn = getattr(self.fn, "__name__", "fn")
        return f"Where({fn})"


TRUE = Where(lambda df: pd.Series(True, index=df.index, dtype=bool), name="TRUE")
FALSE = Where(lambda df: pd.Series(False, index=df.index, dtype=bool), name="FALSE")


# =========================
# Literal / clause / group builders
# =========================

def _require_column(df: pd.DataFrame, col: str, literal: str) -> pd.Series:
    if col not in df.columns:
        raise UnknownLiteralError(literal, f"no axis named {col!r}")
    return df[col]


def literal_predicate(literal: str) -> Predicate:
    """
    Predicate for a single literal.

    - ``(name == value)`` tests column `name` for equality with `value`
    - ``flag`` tests a boolean column
    - ``not flag`` negates the flag test

    Evaluating the mask raises :class:`~condcollapse.errors.UnknownLiteralError`
    when the table has no matching column, or when a bare flag names a
    non-boolean column.
    """
    eq = parse_equality(literal)
    if eq is not None:
        col, value = eq

        def _eq(df: pd.DataFrame) -> pd.Series:
            s = _require_column(df, col, literal)
            return (s == value).fillna(False).astype(bool)
        return Where(_eq, name=literal)

    if is_negated(literal):
        return NotPred(literal_predicate(literal[len(NOT_PREFIX):]), name=literal)

    def _flag(df: pd.DataFrame) -> pd.Series:
        s = _require_column(df, literal, literal)
        if not is_bool_dtype(s):
            raise UnknownLiteralError(literal, f"axis {literal!r} is not a flag")
        return s.fillna(False).astype(bool)
    return Where(_flag, name=literal)


def clause_predicate(literals: Iterable[str]) -> Predicate:
    """AND of the literal predicates; the empty clause is :data:`TRUE`."""
    preds = [literal_predicate(t) for t in literals]
    if not preds:
        return TRUE
    return reduce(lambda a, b: a & b, preds)


def group_predicate(clauses: Iterable[Iterable[str]]) -> Predicate:
    """OR of the clause predicates; the empty group is :data:`FALSE`."""
    preds = [clause_predicate(c) for c in clauses]
    if not preds:
        return FALSE
    return reduce(lambda a, b: a | b, preds)

# src/condcollapse/relations/space.py

from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd
from pandas.api.types import is_bool_dtype

from ..errors import UnknownLiteralError
from ..forms.literals import (
    equality_literal,
    flag_literal,
    is_equality,
    is_negated,
    parse_equality,
    NOT_PREFIX,
)
from ..forms.predicates import Predicate, _as_bool_series

__all__ = [
    "ConfigSpace",
    "Vocabulary",
    "DEFAULT_PLATFORMS",
    "default_space",
]

# ──────────────────────────────────────────────────────────────────────────────
# Known platform matrix
# ──────────────────────────────────────────────────────────────────────────────

# (os, version, processor, bits, e10s, webrender); every row also exists with
# debug on and off.
DEFAULT_PLATFORMS: Tuple[Tuple[str, str, str, int, bool, bool], ...] = (
    ("mac", "OS X 10.10.5", "x86_64", 64, True, False),
    ("win", "6.1.7601", "x86", 32, True, False),
    ("win", "10.0.15063", "x86_64", 64, True, False),
    ("win", "10.0.15063", "x86_64", 64, True, True),
    ("linux", "Ubuntu 16.04", "x86", 32, False, False),
    ("linux", "Ubuntu 16.04", "x86", 32, True, False),
    ("linux", "Ubuntu 16.04", "x86_64", 64, False, False),
    ("linux", "Ubuntu 16.04", "x86_64", 64, True, False),
    ("linux", "Ubuntu 16.04", "x86_64", 64, True, True),
    ("android", "4.3", "arm", 32, False, False),
)

_PLATFORM_COLUMNS = ("os", "version", "processor", "bits", "e10s", "webrender")


def _canon(literal: str) -> str:
    """Canonical spelling used for vocabulary lookups only."""
    lit = literal.strip()
    eq = parse_equality(lit)
    if eq is not None:
        return equality_literal(*eq)
    return lit


# ──────────────────────────────────────────────────────────────────────────────
# Vocabulary
# ──────────────────────────────────────────────────────────────────────────────

class Vocabulary:
    """
    The set of literals known to be meaningful.

    Membership is exact for flags and spelling-tolerant for equality literals
    (``(bits==64)`` and ``(bits == 64)`` are the same entry).
    """

    __slots__ = ("_known",)

    def __init__(self, literals: Iterable[str]) -> None:
        self._known = frozenset(_canon(t) for t in literals)

    @classmethod
    def from_catalog(cls, catalog, *, include_flips: bool = True) -> "Vocabulary":
        """Every literal a catalog mentions, plus the flip of each flag literal."""
        lits = set(catalog.literals())
        if include_flips:
            for t in list(lits):
                if not is_equality(t):
                    lits.add(t[len(NOT_PREFIX):] if is_negated(t) else NOT_PREFIX + t)
        return cls(lits)

    def __contains__(self, literal: object) -> bool:
        return isinstance(literal, str) and _canon(literal) in self._known

    def __len__(self) -> int:
        return len(self._known)

    def __iter__(self):
        return iter(sorted(self._known))

    def __or__(self, other: "Vocabulary") -> "Vocabulary":
        return Vocabulary([*self._known, *other._known])

    def unknown(self, literals: Iterable[str]) -> List[str]:
        """Literals from `literals` that are not known, in input order."""
        return [t for t in literals if t not in self]

    def require(self, literal: str) -> str:
        if literal not in self:
            raise UnknownLiteralError(literal)
        return literal


# ──────────────────────────────────────────────────────────────────────────────
# Configuration space
# ──────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, eq=False)
class ConfigSpace:
    """
    Immutable view of every valid configuration.

    Responsibilities
    ----------------
    • Owns the configuration DataFrame `df` (one row per configuration).
    • Splits axes into flag axes (bool dtype) and value axes (anything else).
    • Evaluates predicates over the table and derives the literal vocabulary.

    Examples
    --------
    >>> from condcollapse.relations.space import ConfigSpace
    >>> sp = ConfigSpace.from_axes(os=["win", "mac"], e10s=[True, False])
    >>> len(sp)
    4
    >>> '(os == "win")' in sp.vocabulary(), "not e10s" in sp.vocabulary()
    (True, True)
    """

    df: pd.DataFrame

    def __post_init__(self):
        if not isinstance(self.df, pd.DataFrame):
            raise TypeError("ConfigSpace requires a pandas DataFrame.")
        if self.df.empty:
            raise ValueError("ConfigSpace needs at least one configuration row.")
        object.__setattr__(self, "df", self.df.drop_duplicates().reset_index(drop=True))

    # --- constructors ---

    @classmethod
    def from_axes(cls, **axes: Sequence[Any]) -> "ConfigSpace":
        """Full cartesian product of the given axis values."""
        if not axes:
            raise ValueError("from_axes needs at least one axis")
        names = list(axes)
        rows = list(product(*(axes[n] for n in names)))
        return cls(pd.DataFrame(rows, columns=names))

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Mapping[str, Any]],
        *,
        free_flags: Sequence[str] = (),
    ) -> "ConfigSpace":
        """
        Build a space from explicit rows, crossing each with every combination
        of the unconstrained `free_flags`.
        """
        base = pd.DataFrame(list(rows))
        for flag in free_flags:
            base = base.merge(pd.DataFrame({flag: [False, True]}), how="cross")
        return cls(base)

    # --- axes ---

    @property
    def axes(self) -> List[str]:
        return list(self.df.columns)

    @property
    def flag_axes(self) -> List[str]:
        return [c for c in self.df.columns if is_bool_dtype(self.df[c])]

    @property
    def value_axes(self) -> List[str]:
        return [c for c in self.df.columns if not is_bool_dtype(self.df[c])]

    def values(self, axis: str) -> List[Any]:
        """Distinct values of `axis` in first-seen order."""
        if axis not in self.df.columns:
            raise KeyError(f"Unknown axis: {axis!r}")
        return list(pd.unique(self.df[axis]))

    def __len__(self) -> int:
        return int(len(self.df))

    # --- evaluation ---

    def mask(self, pred: Predicate) -> pd.Series:
        return _as_bool_series(pred.mask(self.df), self.df.index)

    def support(self, pred: Predicate) -> int:
        """Number of configurations where `pred` holds."""
        return int(self.mask(pred).sum())

    def row_literals(self, i: int, axes: Optional[Sequence[str]] = None) -> Tuple[str, ...]:
        """One literal per axis describing configuration row `i`."""
        row = self.df.iloc[i]
        flags = set(self.flag_axes)
        out: List[str] = []
        for axis in (axes or self.axes):
            v = row[axis]
            if axis in flags:
                out.append(flag_literal(axis, bool(v)))
            else:
                out.append(equality_literal(axis, v.item() if hasattr(v, "item") else v))
        return tuple(out)

    def vocabulary(self) -> Vocabulary:
        lits: List[str] = []
        flags = set(self.flag_axes)
        for axis in self.axes:
            if axis in flags:
                lits.extend([axis, NOT_PREFIX + axis])
            else:
                for v in self.values(axis):
                    lits.append(equality_literal(axis, v.item() if hasattr(v, "item") else v))
        return Vocabulary(lits)

    def summary(self) -> Dict[str, Any]:
        """Small dict summary useful in logs/demos."""
        return {
            "rows": len(self),
            "flag_axes": self.flag_axes,
            "value_axes": self.value_axes,
        }


def default_space() -> ConfigSpace:
    """The platform matrix described by the default collapse catalog."""
    rows = [dict(zip(_PLATFORM_COLUMNS, p)) for p in DEFAULT_PLATFORMS]
    return ConfigSpace.from_rows(rows, free_flags=("debug",))

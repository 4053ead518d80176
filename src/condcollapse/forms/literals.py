# src/condcollapse/forms/literals.py

"""
Literals: the atomic conditions a clause is built from.

A literal is a plain ``str``. Three shapes occur in practice:

- a plain flag, e.g. ``e10s`` or ``webrender``;
- its syntactic negation, e.g. ``not e10s``;
- an equality test, e.g. ``(os == "win")`` or ``(bits == 64)``.

Identity is exact string equality. Only flags and their ``not`` forms are
related by :func:`flip`; two equality literals for the same name are related
only through explicit collapse rules.

Examples
--------
>>> from condcollapse.forms.literals import flip, is_equality, parse_equality
>>> flip("e10s")
'not e10s'
>>> flip("not e10s")
'e10s'
>>> is_equality('(os == "win")')
True
>>> parse_equality('(bits == 64)')
('bits', 64)
"""

from __future__ import annotations
import re
from typing import Optional, Tuple, Union

__all__ = [
    "NOT_PREFIX",
    "flip",
    "is_negated",
    "is_equality",
    "parse_equality",
    "literal_axis",
    "equality_literal",
    "flag_literal",
]

NOT_PREFIX = "not "

_EQ_RE = re.compile(r'^\(\s*(?P<name>[A-Za-z_][A-Za-z0-9_]*)\s*==\s*(?P<value>.+?)\s*\)$')


def is_negated(literal: str) -> bool:
    """True iff `literal` carries the ``not `` prefix."""
    return literal.startswith(NOT_PREFIX)


def flip(literal: str) -> str:
    """
    Textual negation of a literal: strip a leading ``not `` or prepend one.

    The result is only meaningful for plain flags; callers never flip
    equality literals (see :func:`is_equality`).
    """
    if is_negated(literal):
        return literal[len(NOT_PREFIX):]
    return NOT_PREFIX + literal


def is_equality(literal: str) -> bool:
    """True iff `literal` has the parenthesized ``(name == value)`` shape."""
    return _EQ_RE.match(literal.strip()) is not None


def _parse_value(raw: str) -> Union[str, int, float]:
    raw = raw.strip()
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in "\"'":
        return raw[1:-1]
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        return raw


def parse_equality(literal: str) -> Optional[Tuple[str, Union[str, int, float]]]:
    """
    Split an equality literal into ``(name, value)``.

    Quoted values come back as ``str``, bare numbers as ``int``/``float``.
    Returns ``None`` for anything that is not an equality literal.
    """
    m = _EQ_RE.match(literal.strip())
    if m is None:
        return None
    return m.group("name"), _parse_value(m.group("value"))


def literal_axis(literal: str) -> str:
    """
    The configuration axis a literal talks about.

    ``(os == "win")`` -> ``os``; ``not e10s`` -> ``e10s``; ``debug`` -> ``debug``.
    """
    eq = parse_equality(literal)
    if eq is not None:
        return eq[0]
    return literal[len(NOT_PREFIX):] if is_negated(literal) else literal


def equality_literal(name: str, value: Union[str, int, float]) -> str:
    """Render ``(name == value)`` with strings quoted and numbers bare."""
    if isinstance(value, str):
        return f'({name} == "{value}")'
    return f"({name} == {value})"


def flag_literal(name: str, value: bool) -> str:
    """``name`` when `value` is true, ``not name`` otherwise."""
    return name if value else NOT_PREFIX + name

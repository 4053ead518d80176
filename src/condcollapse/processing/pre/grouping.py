# src/condcollapse/processing/pre/grouping.py

"""
Split expectation text into clause groups.

A *condition line* looks like::

    <prefix>if <lit> and <lit> and ...<suffix>

where the prefix runs up to and including the first ``"if "`` and the suffix
runs from the first ``':'`` to the end of the line (``": FAIL"``). Consecutive
condition lines that share both prefix and suffix form one
:class:`~condcollapse.forms.clauses.ClauseGroup`. Every other line is passed
through untouched, in order.

Example
-------
>>> from condcollapse.processing.pre.grouping import iter_blocks
>>> lines = [
...     "  expected:",
...     '    if (os == "win") and debug: FAIL',
...     '    if os == "mac": FAIL',
...     "    PASS",
... ]
>>> [type(b).__name__ for b in iter_blocks(lines)]
['str', 'ClauseGroup', 'str']
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple, Union

from ...forms.clauses import Clause, ClauseGroup

__all__ = [
    "IF_KEYWORD",
    "AND_DELIM",
    "normalize_literal",
    "split_line",
    "iter_blocks",
]

IF_KEYWORD = "if "
AND_DELIM = " and "


def normalize_literal(token: str) -> str:
    """
    Trim a token and wrap a bare equality in parentheses.

    >>> normalize_literal(' os == "win" ')
    '(os == "win")'
    >>> normalize_literal('(bits == 64)')
    '(bits == 64)'
    >>> normalize_literal(' not e10s')
    'not e10s'
    """
    t = token.strip()
    if "==" in t and not t.startswith("("):
        return f"({t})"
    return t


def split_line(line: str) -> Optional[Tuple[str, List[str], str]]:
    """
    Break a condition line into ``(prefix, literals, suffix)``.

    Returns ``None`` for anything that is not a condition line: no leading
    ``if`` keyword or no ``':'`` suffix.
    """
    if not line.lstrip().startswith(IF_KEYWORD):
        return None
    p = line.find(IF_KEYWORD)
    s = line.find(":", p + len(IF_KEYWORD))
    if s < 0:
        return None
    prefix = line[: p + len(IF_KEYWORD)]
    suffix = line[s:]
    body = line[len(prefix): s]
    literals = [normalize_literal(t) for t in body.split(AND_DELIM)]
    literals = [t for t in literals if t]
    if not literals:
        return None
    return prefix, literals, suffix


def iter_blocks(lines: Iterable[str]) -> Iterator[Union[str, ClauseGroup]]:
    """
    Yield, in input order, either a verbatim line (``str``) or a
    :class:`ClauseGroup` of consecutive condition lines with equal prefix and
    suffix. Trailing newlines are stripped from every line.
    """
    current: Optional[ClauseGroup] = None
    for raw in lines:
        line = raw.rstrip("\r\n")
        parts = split_line(line)
        if parts is None:
            if current is not None:
                yield current
                current = None
            yield line
            continue

        prefix, literals, suffix = parts
        if current is not None and (current.prefix != prefix or current.suffix != suffix):
            yield current
            current = None
        if current is None:
            current = ClauseGroup(prefix=prefix, suffix=suffix)
        current.clauses.append(Clause(tuple(literals)))

    if current is not None:
        yield current

# src/condcollapse/processing/post/emit.py

from __future__ import annotations
import logging
from typing import Iterable, List

from ...forms.clauses import ClauseGroup

__all__ = [
    "format_clause",
    "emit_group",
]

log = logging.getLogger(__name__)


def format_clause(clause: Iterable[str], prefix: str = "", suffix: str = "") -> str:
    """
    One condition line: ``prefix + " and ".join(literals) + suffix``.

    >>> format_clause(['(os == "win")', "debug"], "    if ", ": FAIL")
    '    if (os == "win") and debug: FAIL'
    """
    return prefix + " and ".join(clause) + suffix


def emit_group(group: ClauseGroup) -> List[str]:
    """
    One line per clause, in clause order, sharing the group's prefix/suffix.

    Notes
    -----
    A group that reduced to the empty clause (e.g. ``if debug: FAIL`` plus
    ``if not debug: FAIL``) holds unconditionally. It is still written as
    ``<prefix><suffix>`` (``if : FAIL``), which is not a valid condition
    line; a warning is logged so the block can be rewritten as an
    unconditional outcome by hand.
    """
    lines = []
    for c in group.clauses:
        if not len(c):
            log.warning(
                "Group %r…%r reduced to an unconditional clause; emitted line needs manual editing",
                group.prefix, group.suffix,
            )
        lines.append(format_clause(c, group.prefix, group.suffix))
    return lines

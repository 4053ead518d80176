# src/condcollapse/relations/catalog.py

"""
The default, hand-authored collapse rule catalog.

Each rule has a list of prerequisites and a list of alternatives. For a group
of clauses to collapse via a rule:

1) every clause in the group holds all of the prerequisites;
2) each clause holds exactly one of the alternatives, and each alternative is
   used by exactly one clause;
3) apart from the alternative, the clauses are identical.

Collapsing removes the alternatives, which makes the clauses identical, and
keeps a single copy.

Worked example. Starting from::

    if (os == "win") and (version == "6.1.7601") and not webrender and e10s: FAIL
    if (os == "win") and (version == "10.0.15063") and e10s: FAIL

the rule ``win ∧ 6.1.7601 ⇒ {not webrender}`` drops ``not webrender`` from the
first clause (Windows 7 never runs WebRender). The rule
``win ⇒ {6.1.7601 | 10.0.15063}`` then merges the two clauses, leaving::

    if (os == "win") and e10s: FAIL

The catalog must be re-authored whenever the configuration matrix changes;
:func:`condcollapse.relations.soundness.check_catalog` can confirm it against
:func:`condcollapse.relations.space.default_space`.
"""

from __future__ import annotations

from .rules import CollapseRule, RuleCatalog

__all__ = [
    "MAC",
    "WIN",
    "LINUX",
    "ANDROID",
    "WIN7",
    "WIN10",
    "build_collapse_rules",
]

MAC = '(os == "mac")'
WIN = '(os == "win")'
LINUX = '(os == "linux")'
ANDROID = '(os == "android")'

MAC_VERSION = '(version == "OS X 10.10.5")'
WIN7 = '(version == "6.1.7601")'
WIN10 = '(version == "10.0.15063")'
UBUNTU = '(version == "Ubuntu 16.04")'

X86 = '(processor == "x86")'
X86_64 = '(processor == "x86_64")'
BITS32 = "(bits == 32)"
BITS64 = "(bits == 64)"

_R = CollapseRule.new


def build_collapse_rules() -> RuleCatalog:
    """Return a fresh copy of the default catalog."""
    return RuleCatalog([
        # macOS: a single platform, so everything below is implied
        _R([MAC], [MAC_VERSION]),
        _R([MAC], ["e10s"]),
        _R([MAC], ["not webrender"]),
        _R([MAC], [X86_64]),
        _R([MAC], [BITS64]),

        # Win32
        _R([WIN, WIN7], ["e10s"]),
        _R([WIN, WIN7], ["not webrender"]),
        _R([WIN, WIN7], [X86]),
        _R([WIN, WIN7], [BITS32]),

        # Win64
        _R([WIN, WIN10], ["e10s"]),
        _R([WIN, WIN10], [X86_64]),
        _R([WIN, WIN10], [BITS64]),

        # WebRender on Windows implies Windows 10
        _R([WIN, "webrender"], [WIN10]),

        # Windows versions
        _R([WIN], [WIN7, WIN10]),

        # Linux
        _R([LINUX], [UBUNTU]),
        _R([LINUX, X86_64], [BITS64]),
        _R([LINUX, X86], [BITS32]),
        _R([LINUX, X86], ["not webrender"]),
        _R([LINUX], [X86_64, X86]),

        # WebRender on Linux implies 64-bit and e10s
        _R([LINUX, "webrender"], [X86_64]),
        _R([LINUX, "webrender"], ["e10s"]),

        # Android: no WebRender, no e10s
        _R([ANDROID], ["not webrender"]),
        _R([ANDROID], ["not e10s"]),
    ], name="default")

# src/condcollapse/__main__.py
"""
Command-line entry point.

Usage
-----
    # Rewrite an expectation file and print the result
    python -m condcollapse path/to/test.html.ini

    # More logging on stderr (-v info, -vv debug)
    condcollapse -vv path/to/test.html.ini

    # Confirm the default catalog against the default platform matrix
    condcollapse --check-catalog

Exit codes
----------
    0   Success.
    1   Unreadable input, or --check-catalog found violations.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .config import CollapseConfig
from .pipeline.pipeline import CollapsePipeline
from .relations.catalog import build_collapse_rules
from .relations.soundness import check_catalog
from .relations.space import default_space

_log = logging.getLogger("condcollapse")

EXIT_OK = 0
EXIT_ERROR = 1


def _configure_logging(verbosity: int) -> None:
    """0 → WARNING, 1 → INFO, 2+ → DEBUG, on stderr."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)-5.5s] %(name)s: %(message)s"))
    root = logging.getLogger("condcollapse")
    # one handler per process, even when main() runs repeatedly
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(level)
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="condcollapse",
        description="Collapse redundant conditional lines in an expectation file.",
    )
    p.add_argument("path", nargs="?", help="file to rewrite; the result goes to stdout")
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="increase log verbosity (repeatable)")
    p.add_argument("--no-validate", action="store_true",
                   help="reduce groups even when they hold unrecognized literals")
    p.add_argument("--verify", action="store_true",
                   help="check every reduction by brute force over the platform matrix")
    p.add_argument("--check-catalog", action="store_true",
                   help="check the default catalog against the platform matrix and exit")
    p.add_argument("--suggest-inversion", action="store_true",
                   help="log a hint when a group's complement is shorter")
    return p


def _check_catalog() -> int:
    violations = check_catalog(build_collapse_rules(), default_space())
    for v in violations:
        print(v.pretty())
    if violations:
        _log.error("%d catalog violation(s)", len(violations))
        return EXIT_ERROR
    print("catalog OK")
    return EXIT_OK


def _read_lines(path: str) -> Optional[List[str]]:
    try:
        return Path(path).read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        _log.error("Cannot read %s: %s", path, exc)
        return None


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.check_catalog:
        return _check_catalog()
    if args.path is None:
        parser.error("a path is required unless --check-catalog is given")

    lines = _read_lines(args.path)
    if lines is None:
        return EXIT_ERROR

    cfg = CollapseConfig(
        validate_literals=not args.no_validate,
        verify_equivalence=args.verify,
        suggest_inversion=args.suggest_inversion,
    )
    pipeline = CollapsePipeline(build_collapse_rules(), cfg, space=default_space())
    out = pipeline.run(lines)
    if out:
        sys.stdout.write("\n".join(out) + "\n")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

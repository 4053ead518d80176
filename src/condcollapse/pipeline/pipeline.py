# src/condcollapse/pipeline/pipeline.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from ..config import CollapseConfig
from ..errors import CollapseError, ReductionLimitError
from ..forms.clauses import ClauseGroup
from ..processing.coverage import inverted_coverage_count
from ..processing.driver import collapse_with_stats
from ..processing.post.emit import emit_group
from ..processing.pre.grouping import iter_blocks
from ..relations.rules import RuleCatalog
from ..relations.space import ConfigSpace, Vocabulary

__all__ = [
    "PipelineReport",
    "CollapsePipeline",
]

log = logging.getLogger(__name__)


@dataclass
class PipelineReport:
    groups_seen: int = 0
    groups_reduced: int = 0
    groups_skipped: int = 0
    clauses_removed: int = 0
    duplicate_suffixes: List[str] = field(default_factory=list)
    # (prefix + suffix, reduced clause count, inverted clause count)
    inversion_hints: List[tuple] = field(default_factory=list)

    def summary(self) -> str:
        return (
            f"{self.groups_seen} group(s), {self.groups_reduced} reduced, "
            f"{self.groups_skipped} skipped, {self.clauses_removed} clause(s) removed"
        )


class CollapsePipeline:
    """
    Line-oriented driver around the clause reducer.

    Feeds every block of condition lines through
    :func:`~condcollapse.processing.driver.collapse_with_stats` and writes it
    back; every other line is passed through verbatim.

    Parameters
    ----------
    catalog : RuleCatalog
        Domain rules used for every group.
    config : CollapseConfig, optional
    space : ConfigSpace, optional
        Enables equivalence verification and the inversion hint, and widens
        the literal vocabulary with every literal the space can evaluate.
    vocabulary : Vocabulary, optional
        Overrides the vocabulary derived from `catalog` and `space`.

    Examples
    --------
    >>> from condcollapse.relations.catalog import build_collapse_rules
    >>> from condcollapse.relations.space import default_space
    >>> p = CollapsePipeline(build_collapse_rules(), space=default_space())
    >>> p.run([
    ...     '  if (os == "win") and (version == "6.1.7601"): FAIL',
    ...     '  if (os == "win") and (version == "10.0.15063"): FAIL',
    ... ])
    ['  if (os == "win"): FAIL']
    """

    def __init__(
        self,
        catalog: RuleCatalog,
        config: Optional[CollapseConfig] = None,
        *,
        space: Optional[ConfigSpace] = None,
        vocabulary: Optional[Vocabulary] = None,
    ):
        self.catalog = catalog
        self.cfg = config or CollapseConfig()
        self.space = space
        if vocabulary is None:
            vocabulary = Vocabulary.from_catalog(catalog)
            if space is not None:
                vocabulary = vocabulary | space.vocabulary()
        self.vocabulary = vocabulary
        self.report = PipelineReport()

    # ————————————————————————————————————————————————
    # Single group
    # ————————————————————————————————————————————————

    def reduce_group(self, group: ClauseGroup) -> ClauseGroup:
        """Reduce one group in place, updating the run report."""
        self.report.groups_seen += 1
        original = group.copy()
        try:
            _, stats = collapse_with_stats(
                group,
                self.catalog,
                vocabulary=self.vocabulary,
                space=self.space,
                config=self.cfg,
            )
        except ReductionLimitError as e:
            log.warning("Not collapsing group %r…%r: %s", group.prefix, group.suffix, e)
            self.report.groups_skipped += 1
            return original

        if stats.skipped:
            self.report.groups_skipped += 1
            return group
        if stats.clauses_removed or stats.literals_after < stats.literals_before:
            self.report.groups_reduced += 1
        self.report.clauses_removed += stats.clauses_removed

        if self.cfg.suggest_inversion and self.space is not None:
            self._inversion_hint(group)
        return group

    def _inversion_hint(self, group: ClauseGroup) -> None:
        try:
            n_inv = inverted_coverage_count(group, self.catalog, self.space, config=self.cfg)
        except CollapseError as e:
            log.debug("No inversion hint for %r…%r: %s", group.prefix, group.suffix, e)
            return
        if n_inv < len(group):
            log.info(
                "Group %r…%r needs %d clause(s); its complement needs only %d. "
                "Consider flipping the default outcome.",
                group.prefix, group.suffix, len(group), n_inv,
            )
            self.report.inversion_hints.append((group.prefix + group.suffix, len(group), n_inv))

    # ————————————————————————————————————————————————
    # Whole input
    # ————————————————————————————————————————————————

    def run(self, lines: Iterable[str]) -> List[str]:
        """
        Rewrite `lines` and return the output lines (without newlines).

        A suffix seen twice within one section (sections are separated by
        blank lines) is reported, since the second block cannot merge with
        the first.
        """
        out: List[str] = []
        seen: Set[str] = set()
        for block in iter_blocks(lines):
            if isinstance(block, str):
                if not block.strip():
                    seen.clear()
                out.append(block)
                continue

            if self.cfg.warn_duplicate_suffix and block.suffix in seen:
                log.warning("Duplicate suffix %r in one section; blocks were not merged", block.suffix)
                self.report.duplicate_suffixes.append(block.suffix)
            seen.add(block.suffix)
            out.extend(emit_group(self.reduce_group(block)))

        log.info("Collapse summary: %s", self.report.summary())
        return out

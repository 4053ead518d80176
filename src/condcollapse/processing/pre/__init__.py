from .grouping import AND_DELIM, IF_KEYWORD, iter_blocks, normalize_literal, split_line

__all__ = [
    "AND_DELIM",
    "IF_KEYWORD",
    "iter_blocks",
    "normalize_literal",
    "split_line",
]

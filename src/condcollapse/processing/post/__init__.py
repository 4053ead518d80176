from .emit import emit_group, format_clause

__all__ = [
    "emit_group",
    "format_clause",
]

"""Summary formatting utilities for consistent terminal output.

Design principles:
- Every summary fits on one line (~80 chars max)
- Paths compressed for deep nesting
- Grammatically correct (1 usage vs 2 usages)
"""

from __future__ import annotations


def compress_path(path: str, max_len: int = 30) -> str:
    """Compress path to fit within max_len.

    Examples:
        lib/parsing/lexer/tokens.ml -> lib/.../tokens.ml
        short/path.ml -> short/path.ml (unchanged)
    """
    if len(path) <= max_len:
        return path

    parts = path.split("/")
    if len(parts) <= 2:
        return path

    compressed = f"{parts[0]}/.../{parts[-1]}"
    if len(compressed) <= max_len:
        return compressed

    return parts[-1]


def format_path_list(
    paths: list[str],
    *,
    max_total: int = 50,
    max_shown: int = 3,
    compress: bool = True,
) -> str:
    """Format a list of paths, compressing as needed.

    Examples:
        ["a.ml"] -> "a.ml"
        ["a.ml", "b.ml"] -> "a.ml, b.ml"
        ["a.ml", "b.ml", "c.ml", "d.ml"] -> "a.ml, b.ml, +2 more"
    """
    if not paths:
        return ""

    display_paths = [compress_path(p, 25) if compress else p for p in paths]

    if len(display_paths) == 1:
        return display_paths[0]

    result = ", ".join(display_paths[:max_shown])

    if len(display_paths) > max_shown:
        result = ", ".join(display_paths[:2]) + f", +{len(display_paths) - 2} more"

    if len(result) > max_total:
        result = f"{display_paths[0]}, +{len(display_paths) - 1} more"

    if len(result) > max_total:
        return f"{len(paths)} files"

    return result


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Returns:
        Formatted string like "1 usage" or "3 usages"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"

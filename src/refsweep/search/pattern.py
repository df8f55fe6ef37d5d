"""Search pattern construction.

OCaml identifiers may contain ``'`` (``x'``, ``foo''``), which regex ``\\b``
does not treat as a word character. The ripgrep pattern therefore only
narrows the search; ``is_identifier_at`` makes the exact boundary check on
each reported match.
"""

from __future__ import annotations

import re


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _is_identifier_char(ch: str) -> bool:
    return _is_word_char(ch) or ch == "'"


def build_pattern(identifier: str) -> str:
    """Regex for ripgrep matching ``identifier`` as a whole word.

    A ``\\b`` boundary is added on each side whose edge character is a word
    character, so ``foo`` never matches inside ``foobar`` or ``myfoo``.
    Matches such as ``foo`` inside ``foo'`` still get through and are
    dropped by ``is_identifier_at``.
    """
    if not identifier:
        raise ValueError("identifier must not be empty")
    pattern = re.escape(identifier)
    if _is_word_char(identifier[0]):
        pattern = r"\b" + pattern
    if _is_word_char(identifier[-1]):
        pattern = pattern + r"\b"
    return pattern


def identifier_regex(identifier: str) -> re.Pattern[str]:
    """Python regex matching ``identifier`` bounded by non-identifier characters."""
    if not identifier:
        raise ValueError("identifier must not be empty")
    pattern = re.escape(identifier)
    if _is_identifier_char(identifier[0]):
        pattern = r"(?<![\w'])" + pattern
    if _is_identifier_char(identifier[-1]):
        pattern = pattern + r"(?![\w'])"
    return re.compile(pattern)


def is_identifier_at(text: str, column: int, identifier: str) -> bool:
    """Check that a whole ``identifier`` starts at a 1-based byte ``column`` of ``text``."""
    if column < 1:
        return False
    prefix = text.encode()[: column - 1].decode(errors="ignore")
    return identifier_regex(identifier).match(text, len(prefix)) is not None

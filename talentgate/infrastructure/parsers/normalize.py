"""
===============================================================================
FILE: normalize.py
===============================================================================

Text normalization and truncation applied to every extracted resume.
===============================================================================
"""

from __future__ import annotations

import re

_NULL_CHAR = "\x00"


def normalize_text(text: str, *, collapse_whitespace: bool = True) -> str:
    """
    Drop NULL chars, strip the ends and optionally collapse whitespace runs.

    Runs of spaces/tabs become one space; three or more newlines become two
    (paragraph breaks survive).
    """
    if not text:
        return ""

    text = text.replace(_NULL_CHAR, "").strip()

    if collapse_whitespace:
        text = re.sub(r"[ \t]+", " ", text)
        text = re.sub(r"\n{3,}", "\n\n", text)

    return text


def truncate_text(text: str, *, max_chars: int | None) -> tuple[str, bool]:
    """Return (text, was_truncated). max_chars None or <= 0 means no limit."""
    if max_chars is None or max_chars <= 0:
        return text, False
    if len(text) <= max_chars:
        return text, False
    return text[:max_chars], True

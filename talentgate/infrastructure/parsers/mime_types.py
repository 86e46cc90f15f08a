"""
MIME types accepted for resume uploads, plus a safe normalizer.
"""

from __future__ import annotations

PDF_MIME: str = "application/pdf"

RESUME_MIME_TYPES = frozenset({PDF_MIME})


def normalize_mime_type(mime_type: str | None) -> str:
    """
    "Application/PDF; charset=binary" -> "application/pdf".

    Browsers and clients send MIME types with case drift and parameters.
    """
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()

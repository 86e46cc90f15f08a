"""
===============================================================================
FILE: pdf_parser.py
===============================================================================

CRC CARD (Class)
-------------------------------------------------------------------------------
Class:
    PdfParser

Responsibilities:
    - Extract text from PDF bytes with pypdf.
    - Apply page/char limits.
    - Tolerate partial failures (one broken page does not sink the file).
    - Report warnings for observability.

Collaborators:
    - ParserOptions / ExtractedText
    - errors.DocumentParsingError
    - normalize.normalize_text / truncate_text
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import BytesIO

from pypdf import PdfReader

from .errors import DocumentParsingError
from .normalize import normalize_text, truncate_text


@dataclass(frozen=True)
class ParserOptions:
    """
    max_pages: pages read from the PDF (None/0 = all).
    max_chars: characters kept after normalization (None/0 = all).
    """

    max_pages: int | None = 20
    max_chars: int | None = 50_000
    normalize_whitespace: bool = True


@dataclass(frozen=True)
class ExtractedText:
    content: str
    warnings: list[str] = field(default_factory=list)
    page_count: int | None = None
    was_truncated: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()


class PdfParser:
    """PDF parsing strategy (pypdf)."""

    def parse(self, content: bytes, *, options: ParserOptions) -> ExtractedText:
        # strict=False tolerates slightly broken PDFs
        try:
            reader = PdfReader(BytesIO(content), strict=False)
        except Exception as e:
            raise DocumentParsingError(
                "Could not open the PDF (corrupt or invalid file)",
                original_error=e,
            ) from e

        warnings: list[str] = []

        page_count: int | None
        try:
            page_count = len(reader.pages)
        except Exception as e:
            raise DocumentParsingError(
                "Could not read the PDF page tree", original_error=e
            ) from e

        max_pages = (
            options.max_pages if (options.max_pages and options.max_pages > 0) else None
        )

        extracted_parts: list[str] = []
        truncated_by_pages = False

        for i, page in enumerate(reader.pages):
            if max_pages is not None and i >= max_pages:
                truncated_by_pages = True
                warnings.append(f"PDF truncated at max_pages={max_pages}")
                break

            try:
                text = page.extract_text() or ""
            except Exception as e:
                warnings.append(f"Failed to extract page {i}: {type(e).__name__}")
                continue

            if text.strip():
                extracted_parts.append(text)

        normalized = normalize_text(
            "\n".join(extracted_parts),
            collapse_whitespace=options.normalize_whitespace,
        )
        normalized, truncated_by_chars = truncate_text(
            normalized, max_chars=options.max_chars
        )

        return ExtractedText(
            content=normalized,
            warnings=warnings,
            page_count=page_count,
            was_truncated=truncated_by_pages or truncated_by_chars,
        )

"""
===============================================================================
FILE: resume_text_extractor.py
===============================================================================

CRC CARD (Class)
-------------------------------------------------------------------------------
Class:
    PdfResumeTextExtractor (Adapter)

Responsibilities:
    - Implement domain.services.ResumeTextExtractor for PDF resumes.
    - Reject unsupported MIME types before touching the bytes.
    - Log parser warnings (broken pages, truncation).

Collaborators:
    - pdf_parser.PdfParser / ParserOptions
    - mime_types.normalize_mime_type
===============================================================================
"""

from __future__ import annotations

from ...crosscutting.logger import logger
from ...domain.services import ResumeTextExtractor
from .errors import UnsupportedMimeTypeError
from .mime_types import RESUME_MIME_TYPES, normalize_mime_type
from .pdf_parser import ParserOptions, PdfParser


class PdfResumeTextExtractor(ResumeTextExtractor):
    def __init__(
        self,
        parser: PdfParser | None = None,
        options: ParserOptions | None = None,
    ) -> None:
        self._parser = parser or PdfParser()
        self._options = options or ParserOptions()

    def extract_text(self, mime_type: str, content: bytes) -> str:
        normalized_mime = normalize_mime_type(mime_type)
        if normalized_mime not in RESUME_MIME_TYPES:
            raise UnsupportedMimeTypeError(normalized_mime, supported=RESUME_MIME_TYPES)

        extracted = self._parser.parse(content, options=self._options)
        if extracted.warnings:
            logger.warning(
                "resume extracted with warnings",
                extra={
                    "warnings": extracted.warnings,
                    "page_count": extracted.page_count,
                },
            )
        logger.info(
            "resume text extracted",
            extra={
                "text_chars": len(extracted.content),
                "page_count": extracted.page_count,
                "was_truncated": extracted.was_truncated,
            },
        )
        return extracted.content

"""
===============================================================================
PACKAGE: infrastructure.parsers
===============================================================================

Responsibilities:
    - Expose the resume extractor used by the container.
    - Expose the accepted resume MIME types.
===============================================================================
"""

from .mime_types import RESUME_MIME_TYPES, normalize_mime_type
from .resume_text_extractor import PdfResumeTextExtractor

__all__ = ["PdfResumeTextExtractor", "RESUME_MIME_TYPES", "normalize_mime_type"]

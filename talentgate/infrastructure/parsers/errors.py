"""
===============================================================================
FILE: errors.py
===============================================================================

Typed exceptions of the parser subsystem. Each carries a short `code` so the
HTTP layer can map it without string matching.
===============================================================================
"""

from __future__ import annotations


class ParserError(Exception):
    """Base error of the parsing subsystem."""

    code: str = "PARSER_ERROR"


class UnsupportedMimeTypeError(ParserError):
    code = "UNSUPPORTED_MIME_TYPE"

    def __init__(self, mime_type: str, *, supported: frozenset[str] | None = None) -> None:
        supported_msg = f" Supported: {sorted(supported)}" if supported else ""
        super().__init__(f"No parser for MIME type: {mime_type or '<empty>'}.{supported_msg}")
        self.mime_type = mime_type
        self.supported = supported or frozenset()


class DocumentParsingError(ParserError):
    """The document is corrupt/malformed or the parser failed."""

    code = "PARSING_FAILED"

    def __init__(
        self, message: str, *, original_error: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_error = original_error

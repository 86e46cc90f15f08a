"""
===============================================================================
MÓDULO: Excepciones tipadas (errores internos)
===============================================================================

Objetivo
--------
Excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message "humana" (sin filtrar secretos)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  PortalError + subclases

Responsabilidades:
  - Estandarizar errores internos que luego se mapean a HTTP
  - Generar error_id para rastreo

Colaboradores:
  - api/exception_handlers.py (mapea a AppHTTPException)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class PortalError(Exception):
    """Base de los errores internos que lanzan servicios y adapters."""

    error_code: str = "PORTAL_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class EmbeddingError(PortalError):
    """Fallas del proveedor de embeddings."""

    error_code: str = "EMBEDDING_ERROR"


class LLMError(PortalError):
    """Fallas del proveedor de generación de texto (cuota, request inválido, caída)."""

    error_code: str = "LLM_ERROR"


class ResumeExtractionError(PortalError):
    """El CV no se pudo convertir a texto."""

    error_code: str = "RESUME_EXTRACTION_ERROR"

"""
===============================================================================
CRC CARD — talentgate/api/exception_handlers.py (Mapeo centralizado de excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones de la aplicación a respuestas RFC 7807.
  - Convertir la señal de redirect de las páginas en un 303.
  - Loguear errores de servicio con request_id + error_id.
  - No filtrar detalles internos de errores no controlados en producción.

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions: PortalError y subclases
  - identity.session_check.redirect_required_handler
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.exceptions import (
    EmbeddingError,
    LLMError,
    PortalError,
    ResumeExtractionError,
)
from ..crosscutting.logger import logger
from ..identity.access_policy import RedirectRequired
from ..identity.session_check import redirect_required_handler


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def _handle_service_error(
    request: Request,
    *,
    exc: PortalError,
    code: ErrorCode,
    status_code: int,
) -> JSONResponse:
    request_id = _request_id_from(request)

    logger.error(
        "Service error",
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "error_message": exc.message,
            "request_id": request_id,
        },
    )

    app_exc = AppHTTPException(
        status_code=status_code,
        code=code,
        detail=exc.message,
        errors=[{"error_id": exc.error_id}],
    )
    return await app_exception_handler(request, app_exc)


async def embedding_error_handler(
    request: Request, exc: EmbeddingError
) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.EMBEDDING_ERROR, status_code=503
    )


async def llm_error_handler(request: Request, exc: LLMError) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.LLM_ERROR, status_code=503
    )


async def resume_extraction_error_handler(
    request: Request, exc: ResumeExtractionError
) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.RESUME_EXTRACTION_ERROR, status_code=500
    )


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.INTERNAL_ERROR, status_code=500
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Stack trace completo en el log, body genérico en la respuesta."""
    request_id = _request_id_from(request)

    logger.error(
        "Unhandled exception",
        exc_info=True,
        extra={"request_id": request_id, "error_type": type(exc).__name__},
    )

    detail = "Internal error." if get_settings().is_production() else str(exc)

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=detail,
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Registra los handlers en una app FastAPI.

    Exception se registra último, como fallback.
    """
    app.add_exception_handler(RedirectRequired, redirect_required_handler)
    app.add_exception_handler(EmbeddingError, embedding_error_handler)
    app.add_exception_handler(LLMError, llm_error_handler)
    app.add_exception_handler(ResumeExtractionError, resume_extraction_error_handler)
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]

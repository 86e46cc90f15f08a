"""
===============================================================================
CRC CARD — talentgate/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar datos del request en ContextVars (seguro en async).
  - Permitir que el logger correlacione sin pasar ids por todo el stack.

Colaboradores:
  - crosscutting.middleware: setea request_id/method/path por request.
  - crosscutting.logger: lee get_context_dict() para enriquecer registros.

Restricciones:
  - Solo strings primitivos; string vacío significa "no disponible".
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Final

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")

_CTX_REQUEST_ID: Final[str] = "request_id"
_CTX_METHOD: Final[str] = "method"
_CTX_PATH: Final[str] = "path"


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    """Setea el contexto mínimo del request."""
    request_id_var.set(request_id or "")
    http_method_var.set(method or "")
    http_path_var.set(path or "")


def get_context_dict() -> dict[str, str]:
    """Devuelve el contexto actual como dict, omitiendo claves vacías."""
    ctx: dict[str, str] = {}

    if val := request_id_var.get():
        ctx[_CTX_REQUEST_ID] = val
    if val := http_method_var.get():
        ctx[_CTX_METHOD] = val
    if val := http_path_var.get():
        ctx[_CTX_PATH] = val

    return ctx


def clear_context() -> None:
    """Resetea el contexto al final del request para que nada se filtre al siguiente."""
    request_id_var.set("")
    http_method_var.set("")
    http_path_var.set("")

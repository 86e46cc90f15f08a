"""
============================================================
CRC CARD — clients/portal_client.py
============================================================
Class: PortalClient

Responsibilities:
  - Wrap POST /api/get-embedding, /api/extract-resume, /api/generate-bio.
  - Wrap POST /api/match and /api/match-opps (lists of matches).
  - Wrap sign-up / sign-in / logout / me for session-aware callers.
  - Apply one failure policy to the AI wrappers: log, optionally alert,
    return None (or a failure GenerateBioResponse). No retry, no backoff.

Collaborators:
  - httpx.Client (injectable transport for tests)
  - crosscutting.config.get_settings (default base URL / timeout)
  - identity.sessions.Session, identity.roles.Role

Constraints:
  - The access token returned by sign-in is sent as a Bearer header.
  - Auth failures raise PortalClientError (callers need the message).
============================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Callable
from uuid import UUID

import httpx

from ..crosscutting.logger import logger
from ..identity.roles import Role
from ..identity.sessions import Session

RESUME_ALERT_MESSAGE = "Failed to extract resume text"
BIO_FALLBACK_ERROR = "Failed to generate bio"

ResumeFile = bytes | Path | IO[bytes]


class PortalClientError(Exception):
    """Non-success answer from an auth route."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


@dataclass
class GenerateBioRequest:
    resume_text: str = ""
    work_style_preference: list[str] | None = None
    industry_preference: list[str] | None = None
    location_preference: list[str] | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"resumeText": self.resume_text}
        if self.work_style_preference is not None:
            payload["workStylePreference"] = list(self.work_style_preference)
        if self.industry_preference is not None:
            payload["industryPreference"] = list(self.industry_preference)
        if self.location_preference is not None:
            payload["locationPreference"] = list(self.location_preference)
        return payload


@dataclass
class GenerateBioResponse:
    bio: str
    success: bool
    error: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"
    if isinstance(data, dict):
        return str(data.get("detail") or data.get("error") or data)
    return str(data)


def _json_object(response: httpx.Response) -> dict[str, Any] | None:
    """Body as a JSON object, or None when it is not one."""
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _session_from(data: dict[str, Any]) -> Session:
    return Session(
        user_id=UUID(str(data["id"])),
        email=data["email"],
        role=Role(data["role"]),
        is_onboarded=bool(data.get("is_onboarded", False)),
        full_name=data.get("full_name"),
        company_name=data.get("company_name"),
    )


class PortalClient:
    """Synchronous client for the portal API."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
        alert: Callable[[str], None] | None = None,
    ):
        if base_url is None or timeout is None:
            from ..crosscutting.config import get_settings

            settings = get_settings()
            base_url = base_url or settings.portal_base_url
            timeout = timeout if timeout is not None else settings.client_timeout_seconds

        self._alert = alert
        self._client = httpx.Client(
            base_url=base_url, timeout=timeout, transport=transport
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "PortalClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # AI helpers
    # ------------------------------------------------------------------
    def get_embeddings(self, text: str) -> list[float] | None:
        """Embedding vector for `text`, or None when the call fails."""
        try:
            response = self._client.post("/api/get-embedding", json=text)
        except httpx.HTTPError as exc:
            logger.error(
                "embedding request failed",
                extra={"error_type": type(exc).__name__},
            )
            return None

        if not response.is_success:
            logger.error(
                "Failed to fetch embeddings",
                extra={
                    "status_code": response.status_code,
                    "detail": _error_detail(response),
                },
            )
            return None

        data = _json_object(response)
        embeddings = (data or {}).get("embeddings") or []
        first = embeddings[0] if isinstance(embeddings, list) and embeddings else None
        values = first.get("values") if isinstance(first, dict) else None
        if not isinstance(values, list):
            logger.error(
                "Malformed embeddings response",
                extra={"status_code": response.status_code},
            )
            return None
        return list(values)

    def extract_resume_text(
        self,
        file: ResumeFile,
        *,
        filename: str | None = None,
        content_type: str = "application/pdf",
    ) -> str | None:
        """Text of a PDF resume, or None (after alerting) when extraction fails."""
        if isinstance(file, Path):
            content: bytes | IO[bytes] = file.read_bytes()
            filename = filename or file.name
        else:
            content = file

        try:
            response = self._client.post(
                "/api/extract-resume",
                files={"file": (filename or "resume.pdf", content, content_type)},
            )
        except httpx.HTTPError as exc:
            logger.error(
                "resume extraction request failed",
                extra={"error_type": type(exc).__name__},
            )
            self._notify(RESUME_ALERT_MESSAGE)
            return None

        if not response.is_success:
            logger.error(
                "resume extraction rejected",
                extra={
                    "status_code": response.status_code,
                    "detail": _error_detail(response),
                },
            )
            self._notify(RESUME_ALERT_MESSAGE)
            return None

        text = (_json_object(response) or {}).get("text")
        if not isinstance(text, str):
            logger.error(
                "Malformed resume extraction response",
                extra={"status_code": response.status_code},
            )
            self._notify(RESUME_ALERT_MESSAGE)
            return None
        return text

    def generate_bio(self, request: GenerateBioRequest) -> GenerateBioResponse:
        """Never raises: failures come back as success=False with an error."""
        try:
            response = self._client.post(
                "/api/generate-bio", json=request.to_payload()
            )
        except httpx.HTTPError as exc:
            logger.error(
                "Error calling bio generation API",
                extra={"error_type": type(exc).__name__},
            )
            return GenerateBioResponse(
                bio="", success=False, error=str(exc) or BIO_FALLBACK_ERROR
            )

        data = _json_object(response)
        if not response.is_success or data is None:
            error = (data or {}).get("error") or BIO_FALLBACK_ERROR
            logger.error(
                "Error calling bio generation API",
                extra={"status_code": response.status_code},
            )
            return GenerateBioResponse(bio="", success=False, error=error)

        return GenerateBioResponse(
            bio=data.get("bio", ""),
            success=bool(data.get("success", False)),
            error=data.get("error"),
            extra={
                k: v for k, v in data.items() if k not in {"bio", "success", "error"}
            },
        )

    def match_talents(self, prompt: str) -> list[dict[str, Any]] | None:
        """Talents matching `prompt`, best first, each with `similarity`; None on failure."""
        return self._match("/api/match", prompt)

    def match_opportunities(
        self, talent_id: UUID | str
    ) -> list[dict[str, Any]] | None:
        return self._match("/api/match-opps", {"id": str(talent_id)})

    def _match(self, path: str, payload: Any) -> list[dict[str, Any]] | None:
        try:
            response = self._client.post(path, json=payload)
        except httpx.HTTPError as exc:
            logger.error(
                "match request failed",
                extra={"path": path, "error_type": type(exc).__name__},
            )
            return None

        if not response.is_success:
            logger.error(
                "match request rejected",
                extra={
                    "path": path,
                    "status_code": response.status_code,
                    "detail": _error_detail(response),
                },
            )
            return None

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, list):
            logger.error(
                "Malformed match response",
                extra={"path": path, "status_code": response.status_code},
            )
            return None
        return data

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------
    def signup(
        self,
        role: Role,
        email: str,
        password: str,
        *,
        full_name: str | None = None,
        company_name: str | None = None,
    ) -> Session:
        payload: dict[str, Any] = {"email": email, "password": password}
        if full_name is not None:
            payload["full_name"] = full_name
        if company_name is not None:
            payload["company_name"] = company_name
        return self._sign_in(f"/auth/{Role(role).value}/signup", payload)

    def login(self, role: Role, email: str, password: str) -> Session:
        return self._sign_in(
            f"/auth/{Role(role).value}/login", {"email": email, "password": password}
        )

    def logout(self) -> None:
        try:
            self._client.post("/auth/logout")
        finally:
            self._client.headers.pop("Authorization", None)
            self._client.cookies.clear()

    def me(self) -> Session | None:
        """Current session, or None when signed out."""
        response = self._client.get("/auth/me")
        if response.status_code == 401:
            return None
        if not response.is_success:
            raise PortalClientError(response.status_code, _error_detail(response))
        return _session_from(response.json())

    def _sign_in(self, path: str, payload: dict[str, Any]) -> Session:
        response = self._client.post(path, json=payload)
        if not response.is_success:
            raise PortalClientError(response.status_code, _error_detail(response))
        data = response.json()
        self._client.headers["Authorization"] = f"Bearer {data['access_token']}"
        return _session_from(data["user"])

    def _notify(self, message: str) -> None:
        if self._alert is not None:
            self._alert(message)

"""
===============================================================================
CRC CARD — talentgate/api/ai_routes.py (AI helper endpoints)
===============================================================================

Responsibilities:
  - POST /api/get-embedding: JSON string -> {"embeddings": [{"values": [...]}]}
  - POST /api/extract-resume: multipart PDF upload -> {"text": "..."}
  - POST /api/generate-bio: resume text + preferences -> {"bio", "success"}

Collaborators:
  - container: embedding service, resume extractor, GenerateBioUseCase
  - infrastructure.parsers.errors: parser failures -> HTTP
  - crosscutting.error_responses: RFC 7807 factories

Constraints:
  - Provider calls are blocking; they run in the threadpool.
  - generate-bio failures keep the {"bio", "success", "error"} shape the
    clients branch on, instead of problem+json.
===============================================================================
"""

from __future__ import annotations

import json

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.concurrency import run_in_threadpool

from ..application.usecases import (
    GenerateBioInput,
    GenerateBioResult,
    GenerateBioUseCase,
)
from ..container import (
    get_embedding_service,
    get_generate_bio_use_case,
    get_resume_text_extractor,
)
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    OPENAPI_ERROR_RESPONSES,
    bad_request,
    payload_too_large,
    unsupported_media,
)
from ..crosscutting.exceptions import ResumeExtractionError
from ..crosscutting.logger import logger
from ..domain.services import EmbeddingService, ResumeTextExtractor
from ..infrastructure.parsers import normalize_mime_type
from ..infrastructure.parsers.errors import ParserError, UnsupportedMimeTypeError
from ..infrastructure.parsers.mime_types import PDF_MIME

router = APIRouter(prefix="/api", tags=["ai"], responses=OPENAPI_ERROR_RESPONSES)

EXTRACTION_FAILURE_MESSAGE = "Failed to extract text"


# -----------------------------------------------------------------------------
# HTTP models (DTOs)
# -----------------------------------------------------------------------------


class EmbeddingValues(BaseModel):
    values: list[float]


class EmbeddingResponse(BaseModel):
    embeddings: list[EmbeddingValues]


class ExtractResumeResponse(BaseModel):
    text: str


class GenerateBioRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume_text: str = Field(default="", alias="resumeText")
    work_style_preference: list[str] | None = Field(
        default=None, alias="workStylePreference"
    )
    industry_preference: list[str] | None = Field(
        default=None, alias="industryPreference"
    )
    location_preference: list[str] | None = Field(
        default=None, alias="locationPreference"
    )


class GenerateBioResponse(BaseModel):
    bio: str
    success: bool
    error: str | None = None
    details: str | None = None


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.post("/get-embedding", response_model=EmbeddingResponse)
async def get_embedding(
    request: Request,
    embedding_service: EmbeddingService = Depends(get_embedding_service),
):
    """Body is a raw JSON string: `"some text"`."""
    raw = await request.body()
    try:
        text = json.loads(raw) if raw else None
    except (ValueError, UnicodeDecodeError) as exc:
        raise bad_request("Body must be a JSON string.") from exc

    if not isinstance(text, str) or not text.strip():
        raise bad_request("Text is required.")

    vector = await run_in_threadpool(embedding_service.embed_text, text)
    return EmbeddingResponse(embeddings=[EmbeddingValues(values=vector)])


def _resolve_mime(upload: UploadFile) -> str:
    mime = normalize_mime_type(upload.content_type)
    filename = (upload.filename or "").lower()
    if mime in ("", "application/octet-stream") and filename.endswith(".pdf"):
        return PDF_MIME
    return mime


@router.post("/extract-resume", response_model=ExtractResumeResponse)
async def extract_resume(
    file: UploadFile | None = File(None),
    extractor: ResumeTextExtractor = Depends(get_resume_text_extractor),
):
    """Multipart upload with a `file` field holding a PDF resume."""
    if file is None:
        raise bad_request("No file uploaded.")

    settings = get_settings()
    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise payload_too_large(f"{settings.max_upload_bytes} bytes")
    if not content:
        raise bad_request("Uploaded file is empty.")

    mime = _resolve_mime(file)
    try:
        text = await run_in_threadpool(extractor.extract_text, mime, content)
    except UnsupportedMimeTypeError as exc:
        raise unsupported_media("Only PDF resumes are supported.") from exc
    except ParserError as exc:
        logger.warning(
            "resume extraction failed",
            extra={"parser_code": exc.code, "size_bytes": len(content)},
        )
        raise ResumeExtractionError(
            EXTRACTION_FAILURE_MESSAGE, original_error=exc
        ) from exc

    return ExtractResumeResponse(text=text)


@router.post(
    "/generate-bio", response_model=GenerateBioResponse, response_model_exclude_none=True
)
async def generate_bio(
    req: GenerateBioRequest,
    use_case: GenerateBioUseCase = Depends(get_generate_bio_use_case),
):
    result: GenerateBioResult = await run_in_threadpool(
        use_case.execute,
        GenerateBioInput(
            resume_text=req.resume_text,
            work_style=req.work_style_preference or [],
            industry=req.industry_preference or [],
            location=req.location_preference or [],
        ),
    )

    if result.success:
        return GenerateBioResponse(bio=result.bio, success=True)

    body = GenerateBioResponse(bio="", success=False, error=result.error)
    if not get_settings().is_production():
        body.details = result.details
    return JSONResponse(
        status_code=500, content=body.model_dump(mode="json", exclude_none=True)
    )

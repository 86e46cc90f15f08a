"""
Name: Generate Bio Use Case

Responsibilities:
  - Build the bio prompt from resume text + preferences
  - Call the LLM and return the trimmed bio
  - Report provider failures as a typed result instead of raising

Collaborators:
  - application.bio_prompt.build_bio_prompt
  - domain.services.LLMService
  - crosscutting.exceptions.LLMError

Constraints:
  - No HTTP concerns (the route maps the result to a status code)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...crosscutting.exceptions import LLMError
from ...crosscutting.logger import logger
from ...domain.services import LLMService
from ..bio_prompt import build_bio_prompt

BIO_FAILURE_MESSAGE = "Failed to generate bio. Please try again."


@dataclass
class GenerateBioInput:
    """
    R: Input data for GenerateBio.

    Attributes:
        resume_text: Extracted resume text (empty = preferences-only prompt)
        work_style / industry / location: Preference lists
    """

    resume_text: str = ""
    work_style: list[str] = field(default_factory=list)
    industry: list[str] = field(default_factory=list)
    location: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class GenerateBioResult:
    bio: str = ""
    error: str | None = None
    details: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


class GenerateBioUseCase:
    """R: Resume + preferences -> short first-person bio."""

    def __init__(self, llm_service: LLMService):
        self.llm_service = llm_service

    def execute(self, input_data: GenerateBioInput) -> GenerateBioResult:
        prompt = build_bio_prompt(
            input_data.resume_text,
            work_style=input_data.work_style,
            industry=input_data.industry,
            location=input_data.location,
        )
        mode = "resume" if (input_data.resume_text or "").strip() else "preferences"

        try:
            bio = self.llm_service.generate_text(prompt)
        except LLMError as exc:
            logger.error(
                "bio generation failed",
                extra={"mode": mode, "error_id": exc.error_id},
            )
            return GenerateBioResult(error=BIO_FAILURE_MESSAGE, details=exc.message)

        bio = (bio or "").strip()
        logger.info(
            "bio generated",
            extra={
                "mode": mode,
                "model_id": getattr(self.llm_service, "model_id", "unknown"),
                "bio_chars": len(bio),
            },
        )
        return GenerateBioResult(bio=bio)

"""
Unit tests for the bio prompt builder and GenerateBioUseCase.
"""

from unittest.mock import Mock

import pytest

from talentgate.application.bio_prompt import (
    NOT_SPECIFIED,
    build_bio_prompt,
    join_preferences,
)
from talentgate.application.usecases import GenerateBioInput, GenerateBioUseCase
from talentgate.application.usecases.generate_bio import BIO_FAILURE_MESSAGE
from talentgate.crosscutting.exceptions import LLMError

pytestmark = pytest.mark.unit


class TestBioPrompt:
    def test_join_preferences(self):
        assert join_preferences(["Remote", " Hybrid "]) == "Remote, Hybrid"
        assert join_preferences(["", "  "]) == NOT_SPECIFIED
        assert join_preferences(None) == NOT_SPECIFIED

    def test_resume_prompt_embeds_resume_and_preferences(self):
        prompt = build_bio_prompt(
            "Built payment systems.", work_style=["Remote"], location=["Berlin"]
        )

        assert "Resume Content:\nBuilt payment systems." in prompt
        assert "Work Style Preferences: Remote" in prompt
        assert "Industry Preferences: Not specified" in prompt
        assert "Location Preferences: Berlin" in prompt
        assert prompt.rstrip().endswith("Bio:")

    def test_blank_resume_switches_to_preferences_prompt(self):
        prompt = build_bio_prompt("   ", industry=["Gaming"])

        assert "Resume Content:" not in prompt
        assert "based on their preferences" in prompt
        assert "Industry Preferences: Gaming" in prompt


class TestGenerateBioUseCase:
    def test_returns_trimmed_bio(self):
        llm = Mock()
        llm.generate_text.return_value = "\n  I love building things.  \n"

        result = GenerateBioUseCase(llm).execute(
            GenerateBioInput(resume_text="Engineer", work_style=["Remote"])
        )

        assert result.success
        assert result.bio == "I love building things."
        assert "Engineer" in llm.generate_text.call_args.args[0]

    def test_provider_failure_is_a_result_not_an_exception(self):
        llm = Mock()
        llm.generate_text.side_effect = LLMError("model overloaded")

        result = GenerateBioUseCase(llm).execute(GenerateBioInput())

        assert not result.success
        assert result.bio == ""
        assert result.error == BIO_FAILURE_MESSAGE
        assert result.details == "model overloaded"

    def test_none_from_provider_is_empty_bio(self):
        llm = Mock()
        llm.generate_text.return_value = None

        result = GenerateBioUseCase(llm).execute(GenerateBioInput(resume_text="x"))

        assert result.success
        assert result.bio == ""

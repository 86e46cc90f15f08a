"""
Name: Bio prompt builder

Responsibilities:
  - Pick the resume-based or the preferences-only prompt
  - Render the three preference lists ("Not specified" when missing)

Notes:
  - Prompts are plain templates; the model sees exactly this text.
"""

from __future__ import annotations

from typing import Sequence

NOT_SPECIFIED = "Not specified"

_PREFERENCES_BLOCK = """Work Style Preferences: {work_style}
Industry Preferences: {industry}
Location Preferences: {location}"""

PREFERENCES_ONLY_TEMPLATE = """
Generate a professional and engaging bio for a job seeker based on their preferences. The bio should be:
- 2-3 sentences long
- Professional yet personable
- Show personality and career aspirations
- Be suitable for a job matching platform

{preferences}

Generate a compelling bio that would help this person stand out to potential employers. Focus on their interests, preferred work style, and career goals. Keep it concise but impactful.
Make sure to use first person pronouns and make it sound like the person is talking about themselves.
Bio:"""

RESUME_TEMPLATE = """
Based on the following resume and preferences, generate a professional and engaging bio for a job seeker. The bio should be:
- 2-3 sentences long
- Professional yet personable
- Highlight key skills and experience
- Show personality and passion
- Be suitable for a job matching platform

Resume Content:
{resume_text}

{preferences}

Generate a compelling bio that would help this person stand out to potential employers. Focus on their strengths, experience, and what makes them unique. Keep it concise but impactful.
Make sure to use first person pronouns and make it sound like the person is talking about themselves.
Bio:"""


def join_preferences(values: Sequence[str] | None) -> str:
    """Comma-join non-empty values; "Not specified" when nothing is left."""
    cleaned = [v.strip() for v in (values or []) if v and v.strip()]
    return ", ".join(cleaned) or NOT_SPECIFIED


def build_bio_prompt(
    resume_text: str | None,
    *,
    work_style: Sequence[str] | None = None,
    industry: Sequence[str] | None = None,
    location: Sequence[str] | None = None,
) -> str:
    preferences = _PREFERENCES_BLOCK.format(
        work_style=join_preferences(work_style),
        industry=join_preferences(industry),
        location=join_preferences(location),
    )
    if not (resume_text or "").strip():
        return PREFERENCES_ONLY_TEMPLATE.format(preferences=preferences)
    return RESUME_TEMPLATE.format(resume_text=resume_text, preferences=preferences)

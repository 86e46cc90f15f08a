"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the portal's documented behavior

Collaborators:
  - api/main.py: reads settings for CORS and startup validation
  - container.py: picks real or fake AI providers
  - identity/*: JWT secret, cookie name, redirect targets
  - clients/portal_client.py: base URL and timeout

Constraints:
  - No business logic, pure configuration

Notes:
  - Singleton via lru_cache
  - GOOGLE_API_KEY is required unless FAKE_LLM=1 and FAKE_EMBEDDINGS=1
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: development | test | production
        google_api_key: Google Gemini API key
        allowed_origins: Comma-separated CORS origins
        jwt_secret: Secret for signing session tokens
        jwt_access_ttl_minutes: Session token TTL in minutes
        jwt_cookie_name: Cookie holding the session token
        jwt_cookie_secure: Set Secure on auth cookies
        sign_in_path: Redirect target for unauthenticated visitors
        unauthorized_redirect_path: Single redirect target for role
            mismatches (empty = send users to their own home)
        max_upload_bytes: Maximum resume upload size
        max_resume_pages: Pages read from a resume PDF (0 = all)
        max_resume_chars: Characters kept from extracted text (0 = all)
        embedding_model / embedding_task_type: Gemini embedding config
        bio_model: Gemini model used for bio generation
        match_threshold: Minimum cosine similarity for a match
        match_count: Maximum matches returned per query
        portal_base_url: Base URL used by the Python API client
    """

    app_env: str = "development"
    google_api_key: str = ""

    # CORS
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = True

    # Testing/CI
    fake_llm: bool = False
    fake_embeddings: bool = False

    # Session tokens
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 60 * 24
    jwt_cookie_name: str = "access_token"
    jwt_cookie_secure: bool = False

    # Redirect targets for denied page access
    sign_in_path: str = "/"
    unauthorized_redirect_path: str = ""

    # Request limits
    max_body_bytes: int = 12 * 1024 * 1024
    max_upload_bytes: int = 10 * 1024 * 1024

    # Resume extraction
    max_resume_pages: int = 20
    max_resume_chars: int = 50_000

    # Gemini
    embedding_model: str = "gemini-embedding-exp-03-07"
    embedding_task_type: str = "SEMANTIC_SIMILARITY"
    bio_model: str = "gemini-2.5-flash"

    # Matching
    match_threshold: float = 0.75
    match_count: int = 5

    # Retry/Resilience
    retry_max_attempts: int = 3
    retry_base_delay_seconds: float = 1.0
    retry_max_delay_seconds: float = 30.0

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # API client
    portal_base_url: str = "http://localhost:8000"
    client_timeout_seconds: float = 30.0

    @field_validator("jwt_access_ttl_minutes")
    @classmethod
    def ttl_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("jwt_access_ttl_minutes must be greater than 0")
        return v

    @field_validator("match_threshold")
    @classmethod
    def threshold_in_range(cls, v: float) -> float:
        if not -1.0 <= v <= 1.0:
            raise ValueError("match_threshold must be between -1 and 1")
        return v

    @field_validator("match_count")
    @classmethod
    def count_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("match_count must be greater than 0")
        return v

    @field_validator("sign_in_path", "unauthorized_redirect_path")
    @classmethod
    def redirect_paths_are_local(cls, v: str) -> str:
        path = (v or "").strip()
        if path and not path.startswith("/"):
            raise ValueError("redirect paths must start with '/'")
        return path

    @model_validator(mode="after")
    def validate_ai_requirements(self):
        if not self.google_api_key and not (self.fake_llm and self.fake_embeddings):
            raise ValueError(
                "GOOGLE_API_KEY is required unless FAKE_LLM=1 and FAKE_EMBEDDINGS=1"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        if not self.jwt_cookie_secure:
            raise ValueError("JWT_COOKIE_SECURE must be true in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()

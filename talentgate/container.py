"""
===============================================================================
CRC CARD — talentgate/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer repositorios, proveedores y casos de uso.
  - Exponer factories para FastAPI (Depends) y para el middleware de rutas.
  - Mantener singletons con lru_cache para recursos pesados (clientes SDK).
  - Centralizar decisiones de runtime según Settings (proveedores reales o fakes).

Colaboradores:
  - talentgate.crosscutting.config.get_settings
  - talentgate.domain.* (puertos)
  - talentgate.infrastructure.* (implementaciones)
  - talentgate.application.usecases.*

Notas:
  - Sin lógica de negocio acá.
  - Los tests resetean el estado con clear_container_caches().
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    GenerateBioUseCase,
    IndexTalentProfileUseCase,
    MatchLimits,
    MatchOpportunitiesUseCase,
    MatchTalentsUseCase,
    PostOpportunityUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    AccountRepository,
    OpportunityRepository,
    TalentProfileRepository,
)
from .domain.services import EmbeddingService, LLMService, ResumeTextExtractor
from .identity.sessions import SessionResolver, TokenSessionResolver
from .infrastructure.parsers import PdfResumeTextExtractor
from .infrastructure.parsers.pdf_parser import ParserOptions
from .infrastructure.repositories import (
    InMemoryAccountRepository,
    InMemoryOpportunityRepository,
    InMemoryTalentProfileRepository,
)
from .infrastructure.services import (
    FakeEmbeddingService,
    FakeLLMService,
    GoogleEmbeddingService,
    GoogleLLMService,
)

# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_account_repository() -> AccountRepository:
    """Store de cuentas (in-memory)."""
    return InMemoryAccountRepository()


@lru_cache(maxsize=1)
def get_talent_profile_repository() -> TalentProfileRepository:
    """Perfiles de talentos + embeddings (in-memory)."""
    return InMemoryTalentProfileRepository()


@lru_cache(maxsize=1)
def get_opportunity_repository() -> OpportunityRepository:
    return InMemoryOpportunityRepository()


@lru_cache(maxsize=1)
def get_session_resolver() -> SessionResolver:
    """Resolver de sesión basado en access tokens + repositorio de cuentas."""
    return TokenSessionResolver(get_account_repository())


# =============================================================================
# Servicios externos (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_embedding_service() -> EmbeddingService:
    settings = get_settings()
    if settings.fake_embeddings:
        return FakeEmbeddingService()
    return GoogleEmbeddingService(
        settings.google_api_key,
        model_id=settings.embedding_model,
        task_type=settings.embedding_task_type,
    )


@lru_cache(maxsize=1)
def get_llm_service() -> LLMService:
    """Servicio LLM (fake en test/dev si está habilitado)."""
    settings = get_settings()
    if settings.fake_llm:
        return FakeLLMService()
    return GoogleLLMService(settings.google_api_key, model_id=settings.bio_model)


@lru_cache(maxsize=1)
def get_resume_text_extractor() -> ResumeTextExtractor:
    settings = get_settings()
    return PdfResumeTextExtractor(
        options=ParserOptions(
            max_pages=settings.max_resume_pages,
            max_chars=settings.max_resume_chars,
        )
    )


# =============================================================================
# Casos de uso
# =============================================================================


def get_generate_bio_use_case() -> GenerateBioUseCase:
    return GenerateBioUseCase(llm_service=get_llm_service())


def get_match_limits() -> MatchLimits:
    settings = get_settings()
    return MatchLimits(
        threshold=settings.match_threshold, count=settings.match_count
    )


def get_index_talent_profile_use_case() -> IndexTalentProfileUseCase:
    return IndexTalentProfileUseCase(
        embedding_service=get_embedding_service(),
        talents=get_talent_profile_repository(),
    )


def get_post_opportunity_use_case() -> PostOpportunityUseCase:
    return PostOpportunityUseCase(
        embedding_service=get_embedding_service(),
        opportunities=get_opportunity_repository(),
    )


def get_match_talents_use_case() -> MatchTalentsUseCase:
    return MatchTalentsUseCase(
        embedding_service=get_embedding_service(),
        talents=get_talent_profile_repository(),
        limits=get_match_limits(),
    )


def get_match_opportunities_use_case() -> MatchOpportunitiesUseCase:
    return MatchOpportunitiesUseCase(
        talents=get_talent_profile_repository(),
        opportunities=get_opportunity_repository(),
        limits=get_match_limits(),
    )


def clear_container_caches() -> None:
    """Descarta todos los singletons cacheados (tests / recarga de settings)."""
    for factory in (
        get_account_repository,
        get_talent_profile_repository,
        get_opportunity_repository,
        get_session_resolver,
        get_embedding_service,
        get_llm_service,
        get_resume_text_extractor,
    ):
        factory.cache_clear()

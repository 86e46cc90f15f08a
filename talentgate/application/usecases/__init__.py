from .generate_bio import GenerateBioInput, GenerateBioResult, GenerateBioUseCase
from .matching import (
    IndexTalentInput,
    IndexTalentProfileUseCase,
    MatchLimits,
    MatchOpportunitiesUseCase,
    MatchTalentsUseCase,
    PostOpportunityUseCase,
)

__all__ = [
    "GenerateBioInput",
    "GenerateBioResult",
    "GenerateBioUseCase",
    "IndexTalentInput",
    "IndexTalentProfileUseCase",
    "MatchLimits",
    "MatchOpportunitiesUseCase",
    "MatchTalentsUseCase",
    "PostOpportunityUseCase",
]

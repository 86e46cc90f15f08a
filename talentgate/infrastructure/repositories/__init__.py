from .in_memory_accounts import InMemoryAccountRepository
from .in_memory_profiles import (
    InMemoryOpportunityRepository,
    InMemoryProfileIndex,
    InMemoryTalentProfileRepository,
)

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryOpportunityRepository",
    "InMemoryProfileIndex",
    "InMemoryTalentProfileRepository",
]

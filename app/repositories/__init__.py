"""Repository implementations package."""
from .memory import (
    DEMO_USER_ID,
    InMemoryContentRepository,
    InMemoryFilterRepository,
    InMemoryInteractionRepository,
    InMemoryPreferencesRepository,
    InMemorySourceRepository,
)

__all__ = [
    "DEMO_USER_ID",
    "InMemoryContentRepository",
    "InMemoryFilterRepository",
    "InMemoryInteractionRepository",
    "InMemoryPreferencesRepository",
    "InMemorySourceRepository",
]

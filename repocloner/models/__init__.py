"""
Core data models API surface for RepoCloner.

This file re-exports model classes from domain-specific modules so callers
can write `from repocloner.models import X`.
"""

from .github import RepositoryRecord
from .clone import (
    ItemState,
    FilterCriteria,
    WorkItem,
    CloneRequest,
    CloneSummary,
)
from .config import ClonerConfig, default_parallelism

__all__ = [
    # GitHub models
    "RepositoryRecord",
    # Clone models
    "ItemState",
    "FilterCriteria",
    "WorkItem",
    "CloneRequest",
    "CloneSummary",
    # Config models
    "ClonerConfig",
    "default_parallelism",
]

"""
RepoCloner - clone every repository a GitHub account owns, in parallel.
"""

__version__ = "1.0.0"

from .interfaces.api import RepoCloner
from .models import CloneRequest, CloneSummary, ClonerConfig, RepositoryRecord

__all__ = [
    "RepoCloner",
    "CloneRequest",
    "CloneSummary",
    "ClonerConfig",
    "RepositoryRecord",
    "__version__",
]

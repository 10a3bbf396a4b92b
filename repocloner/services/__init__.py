"""
Services talking to the outside world: the GitHub API and the git executable.
"""

from .github_api import GitHubAPIService
from .git import GitCloneService, embed_credentials

__all__ = [
    "GitHubAPIService",
    "GitCloneService",
    "embed_credentials",
]

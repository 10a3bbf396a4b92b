"""
GitHub domain models for RepoCloner.

This module contains strongly typed data classes representing the
repositories returned by the GitHub listing API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict
from urllib.parse import urlparse


@dataclass(frozen=True)
class RepositoryRecord:
    """Immutable description of one remote repository."""

    name: str
    is_fork: bool
    clone_url: str
    is_private: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Repository name is required")

        if not urlparse(self.clone_url).scheme:
            raise ValueError(f"Invalid clone URL: {self.clone_url}")

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> RepositoryRecord:
        """Build a record from one object of the `/user/repos` response."""

        try:
            return cls(
                name=payload["name"],
                is_fork=bool(payload.get("fork", False)),
                clone_url=payload["clone_url"],
                is_private=bool(payload.get("private", False)),
            )
        except KeyError as e:
            raise ValueError(f"Repository payload is missing field {e}") from e


__all__ = [
    "RepositoryRecord",
]

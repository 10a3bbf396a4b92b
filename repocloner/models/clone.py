"""
Clone domain models for RepoCloner.

This module contains data classes and enums representing clone requests,
per-repository work state and the aggregated result of a batch run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from .github import RepositoryRecord


class ItemState(Enum):
    """Lifecycle of a single repository inside a batch run."""

    PENDING = "pending"
    ATTEMPTING = "attempting"
    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        return self in (ItemState.SKIPPED, ItemState.SUCCEEDED, ItemState.EXHAUSTED)


@dataclass(frozen=True)
class FilterCriteria:
    """Which kinds of repositories to clone."""

    include_source: bool = False
    include_forks: bool = False

    @property
    def clone_everything(self) -> bool:
        # Neither flag given means both
        return not self.include_source and not self.include_forks

    def matches(self, record: RepositoryRecord) -> bool:
        if self.clone_everything:
            return True
        if record.is_fork:
            return self.include_forks
        return self.include_source


@dataclass
class WorkItem:
    """A repository paired with its mutable per-attempt state."""

    record: RepositoryRecord
    attempts: int = 0
    last_error: Optional[str] = None
    state: ItemState = ItemState.PENDING

    @property
    def name(self) -> str:
        return self.record.name

    def _require(self, *allowed: ItemState) -> None:
        if self.state not in allowed:
            raise RuntimeError(
                f"Illegal transition for '{self.name}' from {self.state.value}"
            )

    def begin_attempt(self) -> int:
        """Move to ATTEMPTING and return the 1-based attempt number."""

        self._require(ItemState.PENDING)
        self.attempts += 1
        self.state = ItemState.ATTEMPTING
        return self.attempts

    def record_failure(self, error: str) -> None:
        self._require(ItemState.ATTEMPTING)
        self.last_error = error
        self.state = ItemState.PENDING

    def attempts_remaining(self, max_retries: int) -> int:
        return max(0, max_retries - self.attempts)

    def mark_succeeded(self) -> None:
        self._require(ItemState.ATTEMPTING)
        self.state = ItemState.SUCCEEDED

    def mark_skipped(self) -> None:
        self._require(ItemState.PENDING)
        self.state = ItemState.SKIPPED

    def mark_exhausted(self) -> None:
        self._require(ItemState.PENDING)
        self.state = ItemState.EXHAUSTED


@dataclass
class CloneRequest:
    """Everything the orchestrator needs to run one batch."""

    destination: Path
    username: str
    token: str
    shallow: bool = False
    max_parallelism: int = 1
    max_retries: int = 3
    dry_run: bool = False

    def __post_init__(self) -> None:
        if not self.destination:
            raise ValueError("Destination path is required")
        self.destination = Path(self.destination)
        if not self.username or not self.token:
            raise ValueError("Username and token are required")
        if self.max_parallelism <= 0:
            raise ValueError("max_parallelism must be positive")
        if self.max_retries <= 0:
            raise ValueError("max_retries must be positive")

    def target_path(self, record: RepositoryRecord) -> Path:
        return self.destination / record.name


@dataclass
class CloneSummary:
    """
    Final tally of a batch run.

    ``succeeded`` mirrors the printed progress counter: repositories that were
    cloned plus those skipped because they already existed. Repositories that
    ran out of retries are ``completed`` but never ``succeeded``.
    """

    total: int
    succeeded: int = 0
    cloned: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    # Dry run only: repositories that would have been cloned
    planned: List[str] = field(default_factory=list)
    dry_run: bool = False
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None

    @property
    def completed(self) -> int:
        return len(self.cloned) + len(self.skipped) + len(self.failed)

    @property
    def is_successful(self) -> bool:
        return self.succeeded == self.total and not self.failed

    @property
    def duration_seconds(self) -> float:
        if self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return 0.0

    def record(self, item: WorkItem) -> None:
        """Fold a terminal work item into the tally."""

        if item.state is ItemState.SUCCEEDED:
            self.cloned.append(item.name)
        elif item.state is ItemState.SKIPPED:
            self.skipped.append(item.name)
        elif item.state is ItemState.EXHAUSTED:
            self.failed[item.name] = item.last_error or "unknown error"
        else:
            raise RuntimeError(f"Work item '{item.name}' is not in a terminal state")

    def mark_completed(self) -> None:
        self.completed_at = datetime.now()


__all__ = [
    "ItemState",
    "FilterCriteria",
    "WorkItem",
    "CloneRequest",
    "CloneSummary",
]

"""
Python API for RepoCloner.

Example:

    cloner = RepoCloner("octocat", token, verbose=True)
    summary = cloner.run(Path("~/src/github").expanduser(), include_forks=True)
    print(summary.succeeded, "/", summary.total)
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, TextIO

from ..core.filter import FilterEngine
from ..core.orchestrator import CloneOrchestrator
from ..models import (
    ClonerConfig, CloneRequest, CloneSummary, FilterCriteria, RepositoryRecord
)
from ..services import GitCloneService, GitHubAPIService
from repocloner.infrastructure.logger import logger


class RepoCloner:
    """
    High level entry point: list, filter and clone every repository owned
    by one GitHub account.
    """

    def __init__(
        self,
        username: str,
        auth_token: str,
        config: Optional[ClonerConfig] = None,
        verbose: bool = False,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None
    ):
        self.username = username
        self.auth_token = auth_token
        self.config = config or ClonerConfig()
        self.out = out
        self.err = err

        self.github_service = GitHubAPIService(auth_token, self.config)
        self.clone_service = GitCloneService(self.config.git_executable)

        self.verbose = verbose
        self.set_verbose(verbose)

    def set_verbose(self, verbose: bool) -> None:
        """Toggle debug logging for the whole package."""

        self.verbose = verbose
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    async def list_repositories(self) -> List[RepositoryRecord]:
        return await self.github_service.list_repositories()

    def select_repositories(
        self,
        repositories: List[RepositoryRecord],
        include_source: bool = False,
        include_forks: bool = False
    ) -> List[RepositoryRecord]:
        criteria = FilterCriteria(include_source=include_source, include_forks=include_forks)
        result = FilterEngine(criteria).filter_repositories(repositories)
        logger.debug(
            f"Selected {result.filtered_repositories}/{result.total_repositories} repositories"
        )
        return result.included

    async def clone_all(
        self,
        destination: Path,
        include_source: bool = False,
        include_forks: bool = False,
        shallow: bool = False,
        max_parallelism: Optional[int] = None,
        max_retries: Optional[int] = None,
        dry_run: bool = False
    ) -> CloneSummary:
        """
        Clone every selected repository into ``destination``.

        The destination root is created before anything is listed; failing
        to create it, or failing to list, aborts the run.

        Raises:
            FilesystemError: If the destination cannot be created
            TransportError: If listing the repositories fails
        """
        request = CloneRequest(
            destination=Path(destination),
            username=self.username,
            token=self.auth_token,
            shallow=shallow,
            max_parallelism=max_parallelism or self.config.max_parallelism,
            max_retries=max_retries or self.config.max_retries,
            dry_run=dry_run,
        )

        if not request.dry_run:
            CloneOrchestrator.ensure_destination(request.destination)

        repositories = await self.list_repositories()
        selected = self.select_repositories(repositories, include_source, include_forks)

        orchestrator = CloneOrchestrator(
            self.clone_service,
            out=self.out,
            err=self.err,
        )
        return await orchestrator.execute(selected, request)

    def run(self, destination: Path, **options) -> CloneSummary:
        """Blocking wrapper around :meth:`clone_all`."""

        return asyncio.run(self.clone_all(destination, **options))


__all__ = [
    "RepoCloner",
]

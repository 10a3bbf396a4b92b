"""
Orchestrator for cloning a batch of repositories
with bounded concurrency and per-repository retry.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from ..models import CloneRequest, CloneSummary, RepositoryRecord, WorkItem
from ..services import GitCloneService
from ..infrastructure.error_handler import FilesystemError

from repocloner.infrastructure.logger import logger



####
##      PROGRESS TRACKER
#####
class ProgressTracker:
    """
    Shared progress counter for concurrently running clone tasks.

    The counter may only change through :meth:`advance`, which reads,
    increments and prints under a single lock so that sequence numbers on
    the console are unique and ordered.
    """

    def __init__(
        self,
        total: int,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None
    ):
        self.total = total
        self._count = 0
        self._lock = asyncio.Lock()
        self._out = out
        self._err = err

    @property
    def count(self) -> int:
        return self._count

    def _write(self, message: str, stream: Optional[TextIO]) -> None:
        print(message, file=stream or sys.stdout, flush=True)

    def info(self, message: str) -> None:
        self._write(message, self._out)

    def error(self, message: str) -> None:
        self._write(message, self._err or sys.stderr)

    def position(self, offset: int = 0) -> str:
        return f"[{self._count + offset}/{self.total}]"

    async def advance(self, message: str) -> int:
        """Increment the counter and print ``[n/total] message`` atomically."""

        async with self._lock:
            self._count += 1
            self.info(f"{self.position()} {message}")
            return self._count


####
##      CLONE ORCHESTRATOR
#####
class CloneOrchestrator:
    """
    Runs the clone executor over a static list of repositories on a
    bounded number of concurrent slots, retrying each one independently.
    """

    def __init__(
        self,
        clone_service: GitCloneService,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None
    ):
        self.clone_service = clone_service
        self._out = out
        self._err = err

    @staticmethod
    def ensure_destination(destination: Path) -> None:
        """
        Create the destination root if it is missing.

        Raises:
            FilesystemError: If the directory cannot be created
        """
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create {destination}: {e}")
            raise FilesystemError(destination, e) from e

    async def execute(
        self,
        repositories: Sequence[RepositoryRecord],
        request: CloneRequest
    ) -> CloneSummary:
        """
        Clone every repository in ``repositories`` into ``request.destination``.

        Individual failures never abort the batch; every repository is run
        to a terminal state before the summary is returned.

        Args:
            repositories: Filtered repositories to clone
            request: Clone request configuration

        Returns:
            CloneSummary with the final tally

        Raises:
            FilesystemError: If the destination root cannot be created
        """
        items = [WorkItem(record) for record in repositories]
        summary = CloneSummary(total=len(items), dry_run=request.dry_run)
        tracker = ProgressTracker(summary.total, self._out, self._err)

        tracker.info(f"Total repositories to clone: {summary.total}")

        if not request.dry_run:
            self.ensure_destination(request.destination)

        logger.debug(
            f"Dispatching {summary.total} repositories on "
            f"{request.max_parallelism} slot(s), {request.max_retries} attempt(s) each"
        )

        semaphore = asyncio.Semaphore(request.max_parallelism)
        await asyncio.gather(*(
            self._process_with_semaphore(semaphore, item, request, tracker, summary)
            for item in items
        ))

        summary.succeeded = tracker.count
        summary.mark_completed()

        if request.dry_run:
            tracker.info(
                f"Dry run completed. Would clone {len(summary.planned)}, "
                f"{len(summary.skipped)} already present."
            )
        else:
            tracker.info(
                f"Cloning completed. {summary.succeeded} out of {summary.total} "
                "repositories cloned successfully."
            )
        logger.debug(
            f"Batch finished in {summary.duration_seconds:.1f}s: "
            f"{len(summary.cloned)} cloned, {len(summary.skipped)} skipped, "
            f"{len(summary.failed)} failed"
        )
        return summary

    async def _process_with_semaphore(
        self,
        semaphore: asyncio.Semaphore,
        item: WorkItem,
        request: CloneRequest,
        tracker: ProgressTracker,
        summary: CloneSummary
    ) -> None:
        async with semaphore:
            await self._process(item, request, tracker, summary)
        logger.debug(f"'{item.name}' ended {item.state.value} after {item.attempts} attempt(s)")

    async def _process(
        self,
        item: WorkItem,
        request: CloneRequest,
        tracker: ProgressTracker,
        summary: CloneSummary
    ) -> None:
        """Drive one work item from PENDING to a terminal state."""

        if request.target_path(item.record).is_dir():
            item.mark_skipped()
            summary.record(item)
            await tracker.advance(f"Repository '{item.name}' already exists. Skipping.")
            return

        if request.dry_run:
            summary.planned.append(item.name)
            tracker.info(f"Would clone repository '{item.name}'.")
            return

        while item.attempts_remaining(request.max_retries):
            attempt = item.begin_attempt()
            tracker.info(
                f"{tracker.position(1)} Cloning repository '{item.name}' "
                f"(Attempt {attempt}/{request.max_retries})..."
            )

            try:
                await self.clone_service.clone(
                    item.record,
                    request.destination,
                    username=request.username,
                    token=request.token,
                    shallow=request.shallow,
                )
            except Exception as e:
                item.record_failure(str(e))
                tracker.error(f"Error cloning repository '{item.name}': {e}")
                if item.attempts_remaining(request.max_retries):
                    tracker.info(f"Retrying '{item.name}'...")
                continue

            item.mark_succeeded()
            summary.record(item)
            await tracker.advance(f"Repository '{item.name}' cloned successfully.")
            return

        item.mark_exhausted()
        summary.record(item)
        tracker.error(
            f"Failed to clone repository '{item.name}' after {request.max_retries} attempts."
        )


__all__ = [
    "ProgressTracker",
    "CloneOrchestrator",
]

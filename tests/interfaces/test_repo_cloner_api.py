"""
Unit tests for the RepoCloner facade.
"""

import logging
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from repocloner.interfaces.api import RepoCloner
from repocloner.infrastructure.error_handler import FilesystemError, TransportError
from repocloner.models import ClonerConfig, RepositoryRecord


def make_repo(name: str, is_fork: bool = False) -> RepositoryRecord:
    return RepositoryRecord(name, is_fork, f"https://github.com/me/{name}.git")


LISTING = [
    make_repo("one"),
    make_repo("two-fork", is_fork=True),
    make_repo("three"),
    make_repo("four-fork", is_fork=True),
    make_repo("five-fork", is_fork=True),
]


@pytest.fixture
def cloner():
    """A RepoCloner whose GitHub and git collaborators are mocked."""
    instance = RepoCloner("me", "tok", config=ClonerConfig(max_parallelism=2))
    instance.github_service.list_repositories = AsyncMock(return_value=list(LISTING))

    async def fake_clone(record, destination, **kwargs):
        (Path(destination) / record.name).mkdir()

    instance.clone_service.clone = AsyncMock(side_effect=fake_clone)
    return instance


# ---- Verbose logging -------------------------------------------------------

class TestVerboseLogging:
    """Test cases for verbose logging functionality."""

    def test_default_initialization(self):
        assert RepoCloner("me", "tok").verbose is False

    @patch("repocloner.interfaces.api.logger")
    def test_logger_level_verbose_true(self, mock_logger):
        RepoCloner("me", "tok", verbose=True)
        mock_logger.setLevel.assert_called_with(logging.DEBUG)

    @patch("repocloner.interfaces.api.logger")
    def test_logger_level_verbose_false(self, mock_logger):
        RepoCloner("me", "tok", verbose=False)
        mock_logger.setLevel.assert_called_with(logging.INFO)

    @patch("repocloner.interfaces.api.logger")
    def test_set_verbose_toggles(self, mock_logger):
        cloner = RepoCloner("me", "tok")
        cloner.set_verbose(True)
        assert cloner.verbose is True
        mock_logger.setLevel.assert_called_with(logging.DEBUG)

        cloner.set_verbose(False)
        assert cloner.verbose is False
        mock_logger.setLevel.assert_called_with(logging.INFO)


# ---- clone_all -------------------------------------------------------------

@pytest.mark.asyncio
async def test_source_only_submits_two_of_five(cloner, tmp_path):
    """Scenario: 5 repositories, 3 forks, --source only submits 2"""
    summary = await cloner.clone_all(tmp_path, include_source=True)

    assert summary.total == 2
    assert sorted(summary.cloned) == ["one", "three"]
    cloned_names = {call.args[0].name for call in cloner.clone_service.clone.await_args_list}
    assert cloned_names == {"one", "three"}


@pytest.mark.asyncio
async def test_no_flags_clones_everything(cloner, tmp_path):
    summary = await cloner.clone_all(tmp_path)

    assert summary.total == 5
    assert summary.succeeded == 5


@pytest.mark.asyncio
async def test_request_options_reach_the_executor(cloner, tmp_path):
    await cloner.clone_all(tmp_path, include_forks=True, shallow=True)

    for call in cloner.clone_service.clone.await_args_list:
        assert call.args[1] == tmp_path
        assert call.kwargs == {"username": "me", "token": "tok", "shallow": True}


@pytest.mark.asyncio
async def test_listing_failure_aborts_before_cloning(cloner, tmp_path):
    cloner.github_service.list_repositories = AsyncMock(
        side_effect=TransportError("GitHub API returned HTTP 500", status_code=500)
    )

    with pytest.raises(TransportError):
        await cloner.clone_all(tmp_path / "out")

    cloner.clone_service.clone.assert_not_awaited()
    # The destination root is prepared before listing
    assert (tmp_path / "out").is_dir()


@pytest.mark.asyncio
async def test_destination_failure_aborts_before_listing(cloner, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")

    with pytest.raises(FilesystemError):
        await cloner.clone_all(blocker / "out")

    cloner.github_service.list_repositories.assert_not_awaited()


def test_run_is_blocking_wrapper(cloner, tmp_path):
    summary = cloner.run(tmp_path, include_forks=True, max_retries=1)

    assert summary.total == 3
    assert sorted(summary.cloned) == ["five-fork", "four-fork", "two-fork"]

import itertools

import pytest

from repocloner.core.filter import FilterEngine, filter_repositories
from repocloner.models import FilterCriteria, RepositoryRecord


def make_repo(name: str, is_fork: bool = False) -> RepositoryRecord:
    """Helper function to build RepositoryRecord instances for tests."""
    return RepositoryRecord(
        name=name, is_fork=is_fork, clone_url=f"https://github.com/me/{name}.git"
    )


@pytest.fixture
def repositories():
    return [
        make_repo("alpha"),
        make_repo("beta-fork", is_fork=True),
        make_repo("gamma"),
        make_repo("delta-fork", is_fork=True),
        make_repo("epsilon-fork", is_fork=True),
    ]


def test_source_only_drops_forks(repositories):
    """Scenario: 5 repositories, 3 forks, --source only"""
    result = filter_repositories(repositories, include_source=True, include_forks=False)
    assert [repo.name for repo in result] == ["alpha", "gamma"]


def test_forks_only_drops_sources(repositories):
    result = filter_repositories(repositories, include_source=False, include_forks=True)
    assert [repo.name for repo in result] == ["beta-fork", "delta-fork", "epsilon-fork"]


def test_no_flags_means_everything(repositories):
    """Scenario: neither flag given behaves like both flags given"""
    assert filter_repositories(repositories, False, False) == filter_repositories(
        repositories, True, True
    )
    assert filter_repositories(repositories, False, False) == repositories


@pytest.mark.parametrize(
    "include_source, include_forks", list(itertools.product([True, False], repeat=2))
)
def test_output_respects_partition(repositories, include_source, include_forks):
    result = filter_repositories(repositories, include_source, include_forks)
    everything = not include_source and not include_forks

    for repo in result:
        if repo.is_fork:
            assert include_forks or everything
        else:
            assert include_source or everything

    expected = [
        repo for repo in repositories
        if everything or (repo.is_fork and include_forks) or (not repo.is_fork and include_source)
    ]
    assert result == expected
    assert len(set(repo.name for repo in result)) == len(result)


def test_engine_reports_excluded_repositories(repositories):
    engine = FilterEngine(FilterCriteria(include_source=True))
    result = engine.filter_repositories(repositories)

    assert [repo.name for repo in result.included] == ["alpha", "gamma"]
    assert {repo.name for repo in result.excluded} == {
        "beta-fork", "delta-fork", "epsilon-fork"
    }
    assert result.total_repositories == len(repositories)
    assert result.filtered_repositories == 2


def test_should_include_single_repository():
    engine = FilterEngine(FilterCriteria(include_forks=True))
    assert engine.should_include(make_repo("mine-fork", is_fork=True)) is True
    assert engine.should_include(make_repo("mine")) is False


def test_empty_input():
    assert filter_repositories([], True, False) == []

"""
Filtering of listed repositories by fork status.
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from ..models import FilterCriteria, RepositoryRecord


@dataclass
class FilterResult:
    """Outcome of filtering a repository listing."""

    included: List[RepositoryRecord] = field(default_factory=list)
    excluded: List[RepositoryRecord] = field(default_factory=list)

    @property
    def total_repositories(self) -> int:
        return len(self.included) + len(self.excluded)

    @property
    def filtered_repositories(self) -> int:
        return len(self.included)


class FilterEngine:
    """Partitions repositories into those to clone and those to leave out."""

    def __init__(self, criteria: FilterCriteria):
        self.criteria = criteria

    def should_include(self, record: RepositoryRecord) -> bool:
        return self.criteria.matches(record)

    def filter_repositories(self, records: Iterable[RepositoryRecord]) -> FilterResult:
        """Split ``records`` preserving their input order."""

        result = FilterResult()
        for record in records:
            if self.should_include(record):
                result.included.append(record)
            else:
                result.excluded.append(record)
        return result


def filter_repositories(
    records: Iterable[RepositoryRecord],
    include_source: bool,
    include_forks: bool
) -> List[RepositoryRecord]:
    """Repositories to clone for the given flags; both false means both true."""

    criteria = FilterCriteria(include_source=include_source, include_forks=include_forks)
    return FilterEngine(criteria).filter_repositories(records).included


__all__ = [
    "FilterResult",
    "FilterEngine",
    "filter_repositories",
]

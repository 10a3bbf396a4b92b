from .filter import FilterEngine, FilterResult, filter_repositories
from .orchestrator import CloneOrchestrator, ProgressTracker

__all__ = [
    "FilterEngine",
    "FilterResult",
    "filter_repositories",
    "CloneOrchestrator",
    "ProgressTracker",
]

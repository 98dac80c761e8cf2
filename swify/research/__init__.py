"""Research aggregation on top of the crawler."""

from swify.research.aggregator import ResearchBundle, ResearchClient, SearchBackendError, SourceLink

__all__ = ["ResearchBundle", "ResearchClient", "SearchBackendError", "SourceLink"]

"""GitHub reference parsing and repository metadata retrieval."""

from .fetcher import (
    RepositoryFetchError,
    RepositoryFetcher,
    RepositoryForbidden,
    RepositoryNotFound,
    RepositoryUpstreamError,
    normalize_repository,
)
from .urls import distinct_references, extract_references, parse_reference, strip_references

__all__ = [
    "RepositoryFetchError",
    "RepositoryFetcher",
    "RepositoryForbidden",
    "RepositoryNotFound",
    "RepositoryUpstreamError",
    "distinct_references",
    "extract_references",
    "normalize_repository",
    "parse_reference",
    "strip_references",
]

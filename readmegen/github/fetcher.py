"""Fetch repository metadata from the GitHub REST API."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from ..config import GitHubConfig
from ..logging import get_logger
from ..models import RepositoryMetadata
from ..stores.repo_cache import RepositoryCache

DEFAULT_DESCRIPTION = "No description provided"
DEFAULT_LANGUAGE = "Not specified"
DEFAULT_LICENSE = "No license specified"
DEFAULT_BRANCH = "main"


class RepositoryFetchError(RuntimeError):
    """Base class for failures talking to the repository host."""


class RepositoryNotFound(RepositoryFetchError):
    """The repository does not exist or is not visible."""


class RepositoryForbidden(RepositoryFetchError):
    """Access was denied, usually a private repository or an exhausted rate limit."""


class RepositoryUpstreamError(RepositoryFetchError):
    """Any other non-success response or transport failure."""


class RepositoryFetcher:
    """Retrieves one repository per call and normalizes it into ``RepositoryMetadata``."""

    def __init__(
        self,
        config: GitHubConfig | None = None,
        *,
        cache: RepositoryCache | None = None,
    ) -> None:
        self.config = config or GitHubConfig()
        self.cache = cache
        self.logger = get_logger("github")

    def fetch(self, owner: str, repo: str) -> RepositoryMetadata:
        if self.cache is not None:
            cached = self.cache.get(owner, repo)
            if cached is not None:
                self.logger.debug("Repository cache hit for %s/%s", owner, repo)
                return cached

        payload = self._request(owner, repo)
        metadata = normalize_repository(payload, owner=owner, repo=repo)

        if self.cache is not None:
            self.cache.put(owner, repo, metadata)
        return metadata

    def _request(self, owner: str, repo: str) -> Mapping[str, Any]:
        url = f"{self.config.api_url.rstrip('/')}/repos/{quote(owner)}/{quote(repo)}"
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": self.config.user_agent,
        }
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"

        self.logger.info(
            "Fetching %s/%s (authenticated=%s)", owner, repo, bool(self.config.token)
        )
        request = Request(url, headers=headers, method="GET")
        try:
            with urlopen(request, timeout=self.config.request_timeout) as response:
                raw = response.read()
        except HTTPError as exc:
            self.logger.warning("GitHub responded %s for %s/%s", exc.code, owner, repo)
            if exc.code == 404:
                raise RepositoryNotFound(f"{owner}/{repo} was not found") from exc
            if exc.code == 403:
                raise RepositoryForbidden(f"Access to {owner}/{repo} was denied") from exc
            raise RepositoryUpstreamError(f"GitHub API returned status {exc.code}") from exc
        except URLError as exc:
            raise RepositoryUpstreamError(f"GitHub API request failed: {exc.reason}") from exc
        except TimeoutError as exc:
            raise RepositoryUpstreamError("GitHub API request timed out") from exc

        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RepositoryUpstreamError("GitHub API returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise RepositoryUpstreamError("GitHub API returned an unexpected payload")
        return payload


def normalize_repository(
    payload: Mapping[str, Any], *, owner: str, repo: str
) -> RepositoryMetadata:
    """Map a loosely-typed API payload onto ``RepositoryMetadata``.

    This is the only place defaults are applied; downstream code never checks
    for missing upstream fields.
    """
    license_data = payload.get("license")
    license_name = license_data.get("name") if isinstance(license_data, Mapping) else None

    raw_topics = payload.get("topics")
    topics: tuple[str, ...] = ()
    if isinstance(raw_topics, list):
        topics = tuple(str(topic) for topic in raw_topics if isinstance(topic, str) and topic)

    return RepositoryMetadata(
        name=_text(payload.get("name")) or repo,
        full_name=_text(payload.get("full_name")) or f"{owner}/{repo}",
        description=_text(payload.get("description")) or DEFAULT_DESCRIPTION,
        primary_language=_text(payload.get("language")) or DEFAULT_LANGUAGE,
        star_count=_count(payload.get("stargazers_count")),
        fork_count=_count(payload.get("forks_count")),
        topics=topics,
        license=_text(license_name) or DEFAULT_LICENSE,
        homepage=_text(payload.get("homepage")),
        default_branch=_text(payload.get("default_branch")) or DEFAULT_BRANCH,
    )


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _count(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int) and value >= 0:
        return value
    return 0


__all__ = [
    "DEFAULT_BRANCH",
    "DEFAULT_DESCRIPTION",
    "DEFAULT_LANGUAGE",
    "DEFAULT_LICENSE",
    "RepositoryFetchError",
    "RepositoryFetcher",
    "RepositoryForbidden",
    "RepositoryNotFound",
    "RepositoryUpstreamError",
    "normalize_repository",
]

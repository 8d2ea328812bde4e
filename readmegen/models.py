"""Core data models shared across readmegen components."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class TrackMode(str, Enum):
    """Generation track selected by the caller."""

    README = "readme"
    TEMPLATE = "template"


class GenerationMode(str, Enum):
    """Generation state resolved for a single request."""

    NEW_WITH_REFERENCE = "new_with_reference"
    NEW_FROM_DESCRIPTION = "new_from_description"
    ITERATION = "iteration"


class ErrorKind(str, Enum):
    """Stable error kinds reported to callers."""

    INVALID_MODE = "invalid_mode"
    INVALID_INPUT = "invalid_input"
    URL_REQUIRED = "url_required"
    URL_NOT_ALLOWED = "url_not_allowed"
    MULTIPLE_URLS = "multiple_urls"
    INVALID_URL = "invalid_url"
    REPO_NOT_FOUND = "repo_not_found"
    FORBIDDEN = "forbidden"
    GITHUB_ERROR = "github_error"
    AI_ERROR = "ai_error"
    SERVER_ERROR = "server_error"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.INVALID_MODE: 400,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.URL_REQUIRED: 400,
    ErrorKind.URL_NOT_ALLOWED: 400,
    ErrorKind.MULTIPLE_URLS: 400,
    ErrorKind.INVALID_URL: 400,
    ErrorKind.REPO_NOT_FOUND: 404,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.GITHUB_ERROR: 500,
    ErrorKind.AI_ERROR: 500,
    ErrorKind.SERVER_ERROR: 500,
}


@dataclass(frozen=True)
class GenerationRequest:
    """A single inbound generation call."""

    text: str
    session_id: str
    mode: TrackMode


@dataclass(frozen=True)
class ParsedReference:
    """Owner/repository pair addressable through the GitHub API."""

    owner: str
    repo: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class RepositoryMetadata:
    """Normalized repository facts; every field holds a defined value."""

    name: str
    full_name: str
    description: str
    primary_language: str
    star_count: int
    fork_count: int
    topics: Tuple[str, ...]
    license: str
    homepage: Optional[str]
    default_branch: str


@dataclass(frozen=True)
class SessionRecord:
    """Last generated document for a session key."""

    previous_document: str
    created_at: datetime


@dataclass(frozen=True)
class GenerationResult:
    """Successful pipeline outcome."""

    document: str
    mode: GenerationMode
    has_reference_data: bool
    repository_name: Optional[str]

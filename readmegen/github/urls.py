"""Locate and decompose GitHub repository references in free text."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from ..models import ParsedReference

# Word characters are unicode-aware here so that look-alike names are caught
# by the extractor and then rejected by the strict patterns below.
_URL_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?github\.com/[\w-]+/[\w.-]+(?:\.git)?",
    re.IGNORECASE,
)
_PARTS_PATTERN = re.compile(
    r"github\.com/([\w-]+)/([\w.-]+?)(?:\.git)?(?:/|$)",
    re.IGNORECASE,
)
_OWNER_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
_REPO_PATTERN = re.compile(r"[A-Za-z0-9_.-]+")
_PREFIX_PATTERN = re.compile(r"^(?:https?://)?(?:www\.)?", re.IGNORECASE)


def extract_references(text: str) -> List[str]:
    """Return every GitHub URL substring in order of appearance."""
    if not text:
        return []
    return [match.group(0) for match in _URL_PATTERN.finditer(text)]


def parse_reference(url: str) -> Optional[ParsedReference]:
    """Split a GitHub URL into owner and repo, rejecting illegal characters."""
    match = _PARTS_PATTERN.search(url)
    if not match:
        return None

    owner = match.group(1)
    # Trailing sentence punctuation is not part of the name.
    repo = match.group(2).rstrip(".")
    if repo.lower().endswith(".git"):
        repo = repo[: -len(".git")]

    if not _OWNER_PATTERN.fullmatch(owner) or not _REPO_PATTERN.fullmatch(repo):
        return None
    return ParsedReference(owner=owner, repo=repo)


def strip_references(text: str) -> str:
    """Remove every GitHub URL from the text, leaving the user's own words."""
    return _URL_PATTERN.sub("", text).strip()


def distinct_references(urls: Iterable[str]) -> List[str]:
    """Drop matches that name a repository already seen earlier in the text."""
    seen: set[str] = set()
    unique: List[str] = []
    for url in urls:
        key = _reference_key(url)
        if key in seen:
            continue
        seen.add(key)
        unique.append(url)
    return unique


def _reference_key(url: str) -> str:
    parsed = parse_reference(url)
    if parsed is not None:
        return parsed.slug.lower()
    key = _PREFIX_PATTERN.sub("", url).lower()
    if key.endswith(".git"):
        key = key[: -len(".git")]
    return key


__all__ = [
    "distinct_references",
    "extract_references",
    "parse_reference",
    "strip_references",
]

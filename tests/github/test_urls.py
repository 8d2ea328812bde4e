"""Tests for GitHub reference extraction and parsing."""

from __future__ import annotations

import pytest

from readmegen.github.urls import (
    distinct_references,
    extract_references,
    parse_reference,
    strip_references,
)
from readmegen.models import ParsedReference


def test_extracts_single_reference() -> None:
    matches = extract_references("check https://github.com/foo/bar please")
    assert matches == ["https://github.com/foo/bar"]
    assert parse_reference(matches[0]) == ParsedReference(owner="foo", repo="bar")


def test_extracts_all_references_in_order() -> None:
    text = "compare github.com/b/two with https://www.GitHub.com/a/one.git"
    assert extract_references(text) == [
        "github.com/b/two",
        "https://www.GitHub.com/a/one.git",
    ]


def test_no_references_in_plain_text() -> None:
    assert extract_references("a todo app written in rust") == []
    assert extract_references("") == []


@pytest.mark.parametrize(
    ("url", "owner", "repo"),
    [
        ("https://github.com/acme/widget", "acme", "widget"),
        ("http://www.github.com/acme/widget.git", "acme", "widget"),
        ("GITHUB.COM/Some-Org/my_repo", "Some-Org", "my_repo"),
        ("github.com/acme/widget.js", "acme", "widget.js"),
        ("github.com/acme/widget.", "acme", "widget"),
        ("github.com/acme/widget.git.", "acme", "widget"),
        ("see https://github.com/acme/Widget.GIT.", "acme", "Widget"),
    ],
)
def test_parses_owner_and_repo(url: str, owner: str, repo: str) -> None:
    assert parse_reference(url) == ParsedReference(owner=owner, repo=repo)


def test_rejects_unicode_identifiers_instead_of_coercing() -> None:
    matches = extract_references("see github.com/ownér/repo")
    assert matches == ["github.com/ownér/repo"]
    assert parse_reference(matches[0]) is None


def test_rejects_dot_only_repository_names() -> None:
    assert parse_reference("github.com/acme/..") is None


def test_rejects_non_github_text() -> None:
    assert parse_reference("https://gitlab.com/acme/widget") is None


def test_distinct_references_collapse_same_repository() -> None:
    urls = [
        "https://github.com/acme/widget",
        "github.com/ACME/widget.git",
        "github.com/acme/other",
    ]
    assert distinct_references(urls) == [
        "https://github.com/acme/widget",
        "github.com/acme/other",
    ]


def test_strip_references_leaves_user_words() -> None:
    text = "github.com/acme/widget see https://github.com/acme/widget.git add badges"
    assert strip_references(text) == "see  add badges"


def test_reference_at_sentence_end_matches_plain_reference() -> None:
    urls = extract_references("Use github.com/acme/widget.git. Also github.com/acme/widget")
    assert distinct_references(urls) == ["github.com/acme/widget.git."]

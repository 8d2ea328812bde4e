"""Tests for generation mode resolution."""

from __future__ import annotations

import pytest

from readmegen.models import ErrorKind, GenerationMode, TrackMode
from readmegen.modes import ModeResolutionError, resolve_mode


@pytest.mark.parametrize(
    ("track", "has_reference", "has_previous", "expected"),
    [
        (TrackMode.README, True, False, GenerationMode.NEW_WITH_REFERENCE),
        (TrackMode.README, True, True, GenerationMode.NEW_WITH_REFERENCE),
        (TrackMode.README, False, True, GenerationMode.ITERATION),
        (TrackMode.TEMPLATE, False, False, GenerationMode.NEW_FROM_DESCRIPTION),
        (TrackMode.TEMPLATE, False, True, GenerationMode.ITERATION),
    ],
)
def test_transition_table(
    track: TrackMode, has_reference: bool, has_previous: bool, expected: GenerationMode
) -> None:
    assert resolve_mode(track, has_reference=has_reference, has_previous=has_previous) is expected


def test_readme_without_reference_or_history_requires_url() -> None:
    with pytest.raises(ModeResolutionError) as excinfo:
        resolve_mode(TrackMode.README, has_reference=False, has_previous=False)
    assert excinfo.value.kind is ErrorKind.URL_REQUIRED


@pytest.mark.parametrize("has_previous", [True, False])
def test_template_rejects_any_reference(has_previous: bool) -> None:
    with pytest.raises(ModeResolutionError) as excinfo:
        resolve_mode(TrackMode.TEMPLATE, has_reference=True, has_previous=has_previous)
    assert excinfo.value.kind is ErrorKind.URL_NOT_ALLOWED

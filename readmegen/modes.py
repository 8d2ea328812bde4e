"""Per-request classification into a generation mode."""

from __future__ import annotations

from .models import ErrorKind, GenerationMode, TrackMode


class ModeResolutionError(ValueError):
    """The combination of track, reference, and session state is not allowed."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


def resolve_mode(
    track: TrackMode,
    *,
    has_reference: bool,
    has_previous: bool,
) -> GenerationMode:
    """Decide between a fresh generation and an edit of the previous document.

    ``has_reference`` means a reference appeared in the text (for TEMPLATE it
    does not matter whether it parsed); the session lookup supplies
    ``has_previous``.
    """
    if track is TrackMode.TEMPLATE:
        if has_reference:
            raise ModeResolutionError(
                ErrorKind.URL_NOT_ALLOWED,
                "Template mode doesn't use URLs. Switch to README tab or remove the URL",
            )
        return GenerationMode.ITERATION if has_previous else GenerationMode.NEW_FROM_DESCRIPTION

    if has_reference:
        return GenerationMode.NEW_WITH_REFERENCE
    if has_previous:
        return GenerationMode.ITERATION
    raise ModeResolutionError(
        ErrorKind.URL_REQUIRED,
        "Please provide a GitHub URL for README generation",
    )


__all__ = ["ModeResolutionError", "resolve_mode"]

"""Guards that reject malformed or spam-like input before any external call."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Optional

MIN_LENGTH = 5

_LETTER_PATTERN = re.compile(r"[A-Za-z]")
# A character followed by 15 repeats of itself.
_REPEAT_PATTERN = re.compile(r"(.)\1{15,}", re.DOTALL)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a piece of user text."""

    valid: bool
    reason: Optional[str] = None


def validate_input(text: object) -> ValidationResult:
    """Check length, presence of letters, and repeated-character spam."""
    trimmed = text.strip() if isinstance(text, str) else ""

    if len(trimmed) < MIN_LENGTH:
        return ValidationResult(False, f"Input is too short (minimum {MIN_LENGTH} characters)")

    if not _LETTER_PATTERN.search(trimmed):
        return ValidationResult(False, "Input must contain letters")

    if _REPEAT_PATTERN.search(trimmed):
        return ValidationResult(False, "Invalid input pattern detected")

    return ValidationResult(True)


__all__ = ["MIN_LENGTH", "ValidationResult", "validate_input"]

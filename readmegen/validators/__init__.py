"""Validation of inbound user text."""

from .input import MIN_LENGTH, ValidationResult, validate_input

__all__ = ["MIN_LENGTH", "ValidationResult", "validate_input"]

"""Post-processing applied to model output."""

from .fences import strip_code_fence

__all__ = ["strip_code_fence"]

"""Prompt construction for README generation."""

from .builder import PromptBuilder, RenderedSection
from .constants import INSTALL_PLACEHOLDER, PLACEHOLDER, TEMPLATES, PromptTemplate, SectionSpec

__all__ = [
    "INSTALL_PLACEHOLDER",
    "PLACEHOLDER",
    "PromptBuilder",
    "PromptTemplate",
    "RenderedSection",
    "SectionSpec",
    "TEMPLATES",
]

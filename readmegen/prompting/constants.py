"""Declarative per-mode prompt templates.

Each template is data: an intro line, the ordered rules the model must obey,
and the ordered sections it must produce. Optional sections name the metadata
field that must be present for the section to be requested at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..models import GenerationMode

PLACEHOLDER = "[To be added]"
INSTALL_PLACEHOLDER = "[Install command here]"


@dataclass(frozen=True)
class SectionSpec:
    """One section of the requested document.

    ``instruction`` may reference prompt context values with ``str.format``
    fields (``{name}``, ``{primary_language}``, ``{license}``, ...).
    """

    title: str
    instruction: str
    required: bool = True
    source: Optional[str] = None


@dataclass(frozen=True)
class PromptTemplate:
    """Instruction contract for a generation mode."""

    mode: GenerationMode
    template_file: str
    intro: str
    rules: Tuple[str, ...]
    sections: Tuple[SectionSpec, ...] = field(default_factory=tuple)


ITERATION_TEMPLATE = PromptTemplate(
    mode=GenerationMode.ITERATION,
    template_file="iteration.j2",
    intro="You are a professional README editor.",
    rules=(
        "Apply only the changes requested by the user",
        "Do NOT invent any new information or introduce facts the user did not state",
        "Keep all other sections unchanged",
        "Return the COMPLETE updated README (not just modified parts)",
        "Output only markdown content, do not include markdown code fences",
    ),
)

NEW_WITH_REFERENCE_TEMPLATE = PromptTemplate(
    mode=GenerationMode.NEW_WITH_REFERENCE,
    template_file="new_with_reference.j2",
    intro=(
        "You are a professional README generator. "
        "Create comprehensive, well-organized READMEs."
    ),
    rules=(
        "Do NOT invent contact information (emails, social media, author names)",
        "Do NOT invent specific features not mentioned in the description",
        "Do NOT invent external URLs or resources not provided",
        "For installation: use appropriate generic commands for {primary_language}",
        "Provide helpful generic examples for usage sections",
        "Do NOT add sections for topics or a homepage unless they are listed below",
        'Do NOT add "Contact" or "Authors" sections',
        "Output only markdown, no code fences",
    ),
    sections=(
        SectionSpec("Title", "# {name}"),
        SectionSpec("Description", "comprehensive explanation of what the project does"),
        SectionSpec("Installation", "language-appropriate generic instructions"),
        SectionSpec("Usage", "helpful generic examples"),
        SectionSpec("Contributing", "standard contribution guidelines"),
        SectionSpec("License", "state: {license}"),
        SectionSpec("Topics/Tags", "{topics}", required=False, source="topics"),
        SectionSpec("Homepage", "{homepage}", required=False, source="homepage"),
    ),
)

NEW_FROM_DESCRIPTION_TEMPLATE = PromptTemplate(
    mode=GenerationMode.NEW_FROM_DESCRIPTION,
    template_file="new_from_description.j2",
    intro=(
        "You are a professional README Template generator. "
        "Create clean, well-organized README templates."
    ),
    rules=(
        "Use ONLY the information from the user's project description",
        "Do NOT invent contact information (emails, phone numbers, social media handles)",
        "Do NOT invent specific installation commands beyond generic placeholders",
        "Do NOT invent project features not mentioned in the description",
        "Do NOT invent URLs, links, or external resources not provided",
        'For Installation section: use generic placeholders like "' + INSTALL_PLACEHOLDER + '"',
        'If critical information is missing, use "' + PLACEHOLDER + '" as placeholder',
        'Do NOT add "Contact" or "Authors" sections',
        "Output only markdown content, no code fences",
    ),
    sections=(
        SectionSpec("Title", "Project name"),
        SectionSpec("Description", "What the project does"),
        SectionSpec("Installation", "How to install"),
        SectionSpec("Usage", "How to use it"),
        SectionSpec("Contributing", "How to contribute (generic)"),
        SectionSpec("License", "License info"),
    ),
)

TEMPLATES: Dict[GenerationMode, PromptTemplate] = {
    template.mode: template
    for template in (
        ITERATION_TEMPLATE,
        NEW_WITH_REFERENCE_TEMPLATE,
        NEW_FROM_DESCRIPTION_TEMPLATE,
    )
}


__all__ = [
    "INSTALL_PLACEHOLDER",
    "PLACEHOLDER",
    "PromptTemplate",
    "SectionSpec",
    "TEMPLATES",
]

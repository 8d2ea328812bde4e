"""Builds model prompts from the declarative per-mode templates."""

from __future__ import annotations

from dataclasses import dataclass
import re
from pathlib import Path
from typing import Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models import GenerationMode, RepositoryMetadata
from .constants import TEMPLATES, PromptTemplate, SectionSpec

_FENCE_PATTERN = re.compile(r"`{3,}")


@dataclass(frozen=True)
class RenderedSection:
    """A section request with its instruction filled in."""

    title: str
    instruction: str


class PromptBuilder:
    """Renders a deterministic prompt for a generation mode.

    The same ``(mode, metadata, free_text, previous_document)`` always yields
    byte-identical output.
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = self._create_env(self.templates_dir)

    def build(
        self,
        mode: GenerationMode,
        metadata: RepositoryMetadata | None = None,
        free_text: str = "",
        previous_document: str | None = None,
    ) -> str:
        template = TEMPLATES[mode]
        request = self._neutralize(free_text.strip())
        context: Dict[str, str] = {}
        variables: Dict[str, object] = {}

        if mode is GenerationMode.ITERATION:
            if previous_document is None:
                raise ValueError("Iteration prompts require the previous document")
            variables = {
                # Verbatim: code blocks in the document are real content.
                "previous_document": previous_document,
            }
        elif mode is GenerationMode.NEW_WITH_REFERENCE:
            if metadata is None:
                raise ValueError("Reference prompts require repository metadata")
            context = self.metadata_context(metadata)
            variables = {"repo": context}

        rendered = self._env.get_template(template.template_file).render(
            intro=template.intro,
            rules=self.render_rules(template, context),
            sections=self.render_sections(template, context),
            request=request,
            **variables,
        )
        return rendered.strip()

    @staticmethod
    def template_for(mode: GenerationMode) -> PromptTemplate:
        return TEMPLATES[mode]

    def render_rules(self, template: PromptTemplate, context: Dict[str, str]) -> List[str]:
        return [rule.format_map(context) if context else rule for rule in template.rules]

    def render_sections(
        self, template: PromptTemplate, context: Dict[str, str]
    ) -> List[RenderedSection]:
        """Fill section instructions, dropping optional sections without data."""
        sections: List[RenderedSection] = []
        for spec in template.sections:
            if not self._is_available(spec, context):
                continue
            instruction = spec.instruction.format_map(context) if context else spec.instruction
            sections.append(RenderedSection(title=spec.title, instruction=instruction))
        return sections

    def metadata_context(self, metadata: RepositoryMetadata) -> Dict[str, str]:
        """Flatten metadata into prompt-safe strings; empty optional data becomes ``""``."""
        return {
            "name": self._neutralize(metadata.name),
            "full_name": self._neutralize(metadata.full_name),
            "description": self._neutralize(metadata.description),
            "primary_language": self._neutralize(metadata.primary_language),
            "star_count": str(metadata.star_count),
            "fork_count": str(metadata.fork_count),
            "topics": self._neutralize(", ".join(metadata.topics)),
            "license": self._neutralize(metadata.license),
            "homepage": self._neutralize(metadata.homepage or ""),
            "default_branch": self._neutralize(metadata.default_branch),
        }

    @staticmethod
    def _is_available(spec: SectionSpec, context: Dict[str, str]) -> bool:
        if spec.required or spec.source is None:
            return True
        return bool(context.get(spec.source))

    @staticmethod
    def _neutralize(value: Optional[str]) -> str:
        """Replace fence markers so caller text cannot open a code block in the prompt."""
        if not value:
            return ""
        return _FENCE_PATTERN.sub(lambda match: "'" * len(match.group(0)), value)

    @staticmethod
    def _create_env(templates_dir: Path) -> Environment:
        return Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )


__all__ = ["PromptBuilder", "RenderedSection"]

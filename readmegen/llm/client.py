"""Generation client: one model call per request, normalized to raw markdown."""

from __future__ import annotations

from ..config import LLMConfig
from ..logging import get_logger
from ..postproc.fences import strip_code_fence
from .runner import LLMRunner


class GenerationClientError(RuntimeError):
    """Base class for model-service failures."""


class NotConfigured(GenerationClientError):
    """No credential is available for the model API."""


class ServiceUnavailable(GenerationClientError):
    """The model call did not produce a usable document."""


class GenerationClient:
    """Invokes the language model and guarantees unfenced markdown output."""

    def __init__(
        self,
        config: LLMConfig | None = None,
        *,
        runner: LLMRunner | None = None,
    ) -> None:
        self.config = config or LLMConfig()
        self.runner = runner or LLMRunner(self.config)
        self.logger = get_logger("llm")

    @property
    def configured(self) -> bool:
        return bool(self.config.api_key)

    def generate(self, prompt: str) -> str:
        if not self.configured:
            raise NotConfigured("Model API key is not configured")

        self.logger.debug(
            "Calling model %s (prompt length %d)", self.config.model, len(prompt)
        )
        try:
            raw = self.runner.run(prompt, system=self.config.system_prompt)
        except Exception as exc:
            self.logger.warning("Model call failed: %s", exc)
            raise ServiceUnavailable("Model call failed") from exc

        document = strip_code_fence(raw or "")
        if not document:
            raise ServiceUnavailable("Model returned an empty document")
        return document


__all__ = [
    "GenerationClient",
    "GenerationClientError",
    "NotConfigured",
    "ServiceUnavailable",
]

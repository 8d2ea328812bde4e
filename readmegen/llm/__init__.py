"""Language model access."""

from .client import GenerationClient, GenerationClientError, NotConfigured, ServiceUnavailable
from .runner import LLMRequest, LLMRunner

__all__ = [
    "GenerationClient",
    "GenerationClientError",
    "LLMRequest",
    "LLMRunner",
    "NotConfigured",
    "ServiceUnavailable",
]

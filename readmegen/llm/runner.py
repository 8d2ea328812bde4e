"""HTTP adapter for OpenAI-compatible chat-completion endpoints."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config import LLMConfig


@dataclass
class LLMRequest:
    """Represents a single chat-completion call."""

    prompt: str
    system: Optional[str]
    model: str
    temperature: Optional[float]
    max_tokens: Optional[int]
    base_url: str
    api_key: Optional[str]
    request_timeout: Optional[float]


class LLMRunner:
    """Executes prompts against the configured chat-completion API."""

    def __init__(
        self,
        config: LLMConfig | None = None,
        *,
        runner: Callable[[LLMRequest], str] | None = None,
    ) -> None:
        config = config or LLMConfig()
        self.model = config.model
        self.base_url = config.base_url.rstrip("/")
        self.temperature = config.temperature
        self.max_tokens = config.max_tokens
        self.api_key = config.api_key
        self.request_timeout = config.request_timeout
        self._runner = runner or self._http_runner

    def run(self, prompt: str, *, system: str | None = None) -> str:
        """Send the prompt to the model and return the response text."""
        request = LLMRequest(
            prompt=prompt,
            system=system,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            base_url=self.base_url,
            api_key=self.api_key,
            request_timeout=self.request_timeout,
        )
        return self._runner(request)

    @staticmethod
    def _http_runner(request: LLMRequest) -> str:
        endpoint = f"{request.base_url}/chat/completions"
        payload: dict[str, object] = {
            "model": request.model,
            "messages": LLMRunner._build_messages(request.system, request.prompt),
        }
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        if request.max_tokens is not None:
            payload["max_tokens"] = request.max_tokens

        data = json.dumps(payload).encode("utf-8")
        headers = {"Content-Type": "application/json"}
        if request.api_key:
            headers["Authorization"] = f"Bearer {request.api_key}"

        http_request = Request(endpoint, data=data, headers=headers, method="POST")
        timeout = request.request_timeout or 60.0

        try:
            with urlopen(http_request, timeout=timeout) as response:
                raw = response.read()
        except HTTPError as exc:
            raise RuntimeError(f"LLM HTTP runner failed with status {exc.code}") from exc
        except URLError as exc:
            raise RuntimeError(f"LLM HTTP runner failed: {exc.reason}") from exc
        except TimeoutError as exc:
            raise RuntimeError("LLM HTTP runner timed out") from exc

        try:
            response_payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RuntimeError("LLM HTTP runner returned invalid JSON") from exc
        if not isinstance(response_payload, dict):
            raise RuntimeError("LLM HTTP runner returned an unexpected payload")

        content = LLMRunner._extract_content(response_payload)
        if not content:
            raise RuntimeError("LLM HTTP runner returned an empty response")
        return content

    @staticmethod
    def _build_messages(system: str | None, prompt: str) -> list[dict[str, str]]:
        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return messages

    @staticmethod
    def _extract_content(payload: dict[str, object]) -> str:
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""
        first = choices[0]
        if not isinstance(first, dict):
            return ""
        message = first.get("message")
        if isinstance(message, dict):
            content = message.get("content")
            if isinstance(content, str):
                return content
        text = first.get("text")
        if isinstance(text, str):
            return text
        return ""


__all__ = ["LLMRequest", "LLMRunner"]

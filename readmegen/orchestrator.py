"""Pipeline orchestration for a single generate call."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .config import ReadmeGenConfig
from .github.fetcher import (
    RepositoryFetcher,
    RepositoryForbidden,
    RepositoryNotFound,
    RepositoryUpstreamError,
)
from .github.urls import (
    distinct_references,
    extract_references,
    parse_reference,
    strip_references,
)
from .llm.client import GenerationClient, GenerationClientError
from .logging import get_logger
from .models import (
    ErrorKind,
    GenerationMode,
    GenerationRequest,
    GenerationResult,
    ParsedReference,
    RepositoryMetadata,
    TrackMode,
)
from .modes import ModeResolutionError, resolve_mode
from .prompting.builder import PromptBuilder
from .stores import (
    IntervalSweeper,
    RepositoryCache,
    SessionStore,
    SweepScheduler,
    session_key,
    utc_now,
)
from .stores.ttl import Clock
from .validators import validate_input

URL_SUGGESTION = "Use format: https://github.com/owner/repo"


class GenerationError(Exception):
    """A typed, user-facing failure of the pipeline."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        suggestion: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.suggestion = suggestion

    @property
    def status_code(self) -> int:
        return self.kind.status_code


@dataclass
class _Plan:
    """Everything decided before any external call is made."""

    mode: GenerationMode
    key: str
    reference: Optional[ParsedReference]
    free_text: str
    previous_document: Optional[str]


class Orchestrator:
    """Validates, classifies, fetches, prompts, generates, and remembers."""

    def __init__(
        self,
        *,
        sessions: SessionStore | None = None,
        fetcher: RepositoryFetcher | None = None,
        prompt_builder: PromptBuilder | None = None,
        client: GenerationClient | None = None,
    ) -> None:
        # Stores define __len__, so an empty one is falsy.
        self.sessions = sessions if sessions is not None else SessionStore()
        self.fetcher = fetcher if fetcher is not None else RepositoryFetcher()
        self.prompt_builder = prompt_builder if prompt_builder is not None else PromptBuilder()
        self.client = client if client is not None else GenerationClient()
        self.logger = get_logger("orchestrator")

    @classmethod
    def from_config(
        cls,
        config: ReadmeGenConfig,
        *,
        scheduler: SweepScheduler | None = None,
        clock: Clock = utc_now,
    ) -> "Orchestrator":
        """Wire the pipeline from settings and register store sweeps with ``scheduler``."""
        stores = config.stores
        sessions = SessionStore(timedelta(minutes=stores.session_ttl_minutes), clock=clock)
        cache = (
            RepositoryCache(timedelta(minutes=stores.cache_ttl_minutes), clock=clock)
            if stores.cache_enabled
            else None
        )
        if scheduler is not None:
            scheduler.register(sessions.sweep)
            if cache is not None:
                scheduler.register(cache.sweep)
        return cls(
            sessions=sessions,
            fetcher=RepositoryFetcher(config.github, cache=cache),
            client=GenerationClient(config.llm),
        )

    def generate(self, text: object, session_id: object, mode: object) -> GenerationResult:
        """Run the full pipeline; every failure surfaces as ``GenerationError``."""
        try:
            return self._generate(text, session_id, mode)
        except GenerationError as exc:
            self.logger.info("Request rejected (%s): %s", exc.kind.value, exc.message)
            raise
        except Exception as exc:
            self.logger.exception("Unexpected error while generating")
            raise GenerationError(ErrorKind.SERVER_ERROR, "Something went wrong") from exc

    def _generate(self, text: object, session_id: object, mode: object) -> GenerationResult:
        request = self._build_request(text, session_id, mode)
        plan = self._plan(request)
        self.logger.info(
            "Resolved mode %s for track %s", plan.mode.value, request.mode.value
        )

        metadata: Optional[RepositoryMetadata] = None
        if plan.reference is not None:
            metadata = self._fetch(plan.reference)

        prompt = self.prompt_builder.build(
            plan.mode,
            metadata,
            plan.free_text,
            plan.previous_document,
        )
        self.logger.debug("Prompt built, length %d", len(prompt))

        try:
            document = self.client.generate(prompt)
        except GenerationClientError as exc:
            # The session keeps its previous document when the model fails.
            raise GenerationError(
                ErrorKind.AI_ERROR, "AI service unavailable. Please try again"
            ) from exc

        self.sessions.put(plan.key, document)
        self.logger.debug("Session updated for track %s", request.mode.value)

        return GenerationResult(
            document=document,
            mode=plan.mode,
            has_reference_data=metadata is not None,
            repository_name=metadata.name if metadata is not None else None,
        )

    @staticmethod
    def _build_request(text: object, session_id: object, mode: object) -> GenerationRequest:
        try:
            track = TrackMode(mode)
        except (TypeError, ValueError):
            raise GenerationError(
                ErrorKind.INVALID_MODE, "Invalid mode. Must be 'readme' or 'template'"
            ) from None

        validation = validate_input(text)
        if not validation.valid:
            raise GenerationError(ErrorKind.INVALID_INPUT, validation.reason or "Invalid input")

        return GenerationRequest(
            text=str(text),
            session_id=session_id.strip() if isinstance(session_id, str) else "",
            mode=track,
        )

    def _plan(self, request: GenerationRequest) -> _Plan:
        urls = extract_references(request.text)
        distinct = distinct_references(urls)
        self.logger.debug("References found: %d (%d distinct)", len(urls), len(distinct))

        if len(distinct) > 1:
            raise GenerationError(
                ErrorKind.MULTIPLE_URLS, "Please provide only one GitHub URL at a time"
            )

        key = session_key(request.session_id, request.mode) if request.session_id else ""
        record = self.sessions.get(key)
        previous_document = record.previous_document if record is not None else None

        reference: Optional[ParsedReference] = None
        free_text = request.text
        if distinct and request.mode is TrackMode.README:
            reference = parse_reference(distinct[0])
            if reference is None:
                raise GenerationError(
                    ErrorKind.INVALID_URL,
                    "Invalid GitHub URL format",
                    suggestion=URL_SUGGESTION,
                )
            free_text = strip_references(request.text)

        try:
            mode = resolve_mode(
                request.mode,
                has_reference=bool(distinct),
                has_previous=previous_document is not None,
            )
        except ModeResolutionError as exc:
            raise GenerationError(exc.kind, exc.message) from exc

        return _Plan(
            mode=mode,
            key=key,
            reference=reference,
            free_text=free_text,
            previous_document=previous_document if mode is GenerationMode.ITERATION else None,
        )

    def _fetch(self, reference: ParsedReference) -> RepositoryMetadata:
        try:
            return self.fetcher.fetch(reference.owner, reference.repo)
        except RepositoryNotFound as exc:
            raise GenerationError(
                ErrorKind.REPO_NOT_FOUND,
                "Repository not found. Check URL and ensure repo is public",
            ) from exc
        except RepositoryForbidden as exc:
            raise GenerationError(
                ErrorKind.FORBIDDEN,
                "Cannot access private repository or rate limit exceeded",
            ) from exc
        except RepositoryUpstreamError as exc:
            raise GenerationError(
                ErrorKind.GITHUB_ERROR, "GitHub API error. Please try again"
            ) from exc


def build_default_orchestrator(config: ReadmeGenConfig) -> tuple[Orchestrator, IntervalSweeper]:
    """Create an orchestrator whose stores are swept on the configured interval."""
    sweeper = IntervalSweeper(config.stores.sweep_interval_minutes * 60)
    orchestrator = Orchestrator.from_config(config, scheduler=sweeper)
    return orchestrator, sweeper


__all__ = [
    "GenerationError",
    "Orchestrator",
    "URL_SUGGESTION",
    "build_default_orchestrator",
]

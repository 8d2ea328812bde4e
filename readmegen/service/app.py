"""FastAPI application entrypoint for readmegen."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..config import load_config
from ..logging import UVICORN_LOGGERS, configure_logging, get_logger
from ..models import ErrorKind, GenerationResult
from ..orchestrator import GenerationError, Orchestrator, build_default_orchestrator
from ..stores import SweepScheduler

GENERATE_PATH = "/api/generate-readme"

logger = get_logger("service")


class GenerateRequest(BaseModel):
    text: str = Field(default="", validation_alias=AliasChoices("text", "message"))
    # Any value reaches the orchestrator: a missing mode is invalid_mode, a missing id is blank.
    session_id: Any = Field(default=None, validation_alias=AliasChoices("sessionId", "session_id"))
    mode: Any = None


class GenerateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    document: str
    mode: str
    has_reference_data: bool = Field(alias="hasReferenceData")
    repository_name: Optional[str] = Field(default=None, alias="repositoryName")

    @classmethod
    def from_result(cls, result: GenerationResult) -> "GenerateResponse":
        return cls(
            document=result.document,
            mode=result.mode.value,
            has_reference_data=result.has_reference_data,
            repository_name=result.repository_name,
        )


class ErrorResponse(BaseModel):
    message: str
    kind: str
    suggestion: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _error_response(exc: GenerationError) -> JSONResponse:
    payload = ErrorResponse(
        message=exc.message, kind=exc.kind.value, suggestion=exc.suggestion
    ).model_dump(exclude_none=True)
    return JSONResponse(status_code=exc.status_code, content=payload)


def _default_components() -> tuple[Orchestrator, SweepScheduler]:
    return build_default_orchestrator(load_config())


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] | None = None,
    *,
    scheduler: SweepScheduler | None = None,
) -> FastAPI:
    """Create the FastAPI application exposing the generate operation.

    The orchestrator is created once per application because it owns the
    session memory shared by every request.
    """
    if orchestrator_factory is None:
        orchestrator, default_scheduler = _default_components()
        scheduler = scheduler or default_scheduler
    else:
        orchestrator = orchestrator_factory()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if scheduler is not None:
            scheduler.start()
        try:
            yield
        finally:
            if scheduler is not None:
                scheduler.stop()

    app = FastAPI(title="readmegen", version="0.1.0", lifespan=lifespan)
    app.state.orchestrator = orchestrator

    async def get_orchestrator() -> Orchestrator:
        return orchestrator

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post(
        GENERATE_PATH,
        response_model=GenerateResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid input, mode, or URL"},
            403: {"model": ErrorResponse, "description": "Repository access denied"},
            404: {"model": ErrorResponse, "description": "Repository not found"},
            500: {"model": ErrorResponse, "description": "Upstream or internal failure"},
        },
    )
    async def generate(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        def _run() -> GenerationResult:
            return orchestrator.generate(payload.text, payload.session_id, payload.mode)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run)
        return GenerateResponse.from_result(result)

    @app.exception_handler(GenerationError)
    async def generation_error_handler(_: Request, exc: GenerationError) -> JSONResponse:
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Malformed bodies share the error envelope of every other failure.
        logger.debug("Rejected malformed request body: %s", exc.errors())
        return _error_response(
            GenerationError(ErrorKind.INVALID_INPUT, "Invalid request payload")
        )

    return app


def run_service(
    host: str = "0.0.0.0",
    port: int = 8000,
    *,
    config_path: Path | None = None,
    verbose: bool = False,
    log_file: Path | None = None,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    configure_logging(verbose=verbose, log_file=log_file, adopt=UVICORN_LOGGERS)
    config = load_config(config_path)
    orchestrator, scheduler = build_default_orchestrator(config)
    app = create_app(lambda: orchestrator, scheduler=scheduler)
    # log_config=None keeps uvicorn from replacing the handlers installed above.
    uvicorn.run(app, host=host, port=port, log_config=None)


__all__ = [
    "ErrorResponse",
    "GENERATE_PATH",
    "GenerateRequest",
    "GenerateResponse",
    "create_app",
    "run_service",
]

"""
FastAPI application: notebook error assistant relay.

Endpoints:
    GET  /  (and /health)           → {"status": "OK"}
    POST /generate  (and /api/generate) → Gemini generateContent payload

Run with ``python -m error_assistant`` or
``uvicorn error_assistant.main:create_app --factory``.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

import httpx
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from error_assistant.gemini_client import GeminiAPIError, GeminiClient, GeminiError
from error_assistant.logging_config import new_request_id, request_id_ctx, setup_logging
from error_assistant.models import (
    ErrorResponse,
    GenerateContentResponse,
    GenerateRequest,
    HealthResponse,
)
from error_assistant.prompt import render_prompt
from error_assistant.sanitizer import sanitize
from error_assistant.settings import Settings, get_settings
from error_assistant.webhook_client import WebhookClient, WebhookError

logger = logging.getLogger("error_assistant.main")

router = APIRouter()


# ── Dependencies ───────────────────────────────────────────────
def get_gemini_client(request: Request) -> GeminiClient:
    return request.app.state.gemini_client


def get_webhook_client(request: Request) -> WebhookClient:
    return request.app.state.webhook_client


# ── Error helpers ──────────────────────────────────────────────
def _error_response(status: int, message: str) -> JSONResponse:
    """Return error body {"message": "..."}"""
    body = ErrorResponse(message=message)
    return JSONResponse(status_code=status, content=body.model_dump())


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    )
    logger.info("Rejected malformed request body: %s", details)
    return _error_response(400, f"Invalid request body: {details}")


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # body-parsing failures FastAPI raises before validation (e.g. non-UTF-8 bytes)
    if exc.status_code == 400:
        logger.info("Rejected unparseable request body: %s", exc.detail)
        message = f"Invalid request body: {exc.detail}"
    else:
        message = str(exc.detail)
    response = _error_response(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def _notify_error(webhook: WebhookClient, error: str) -> None:
    try:
        await webhook.send_error_log(error)
    except WebhookError as exc:
        logger.warning("Error notification failed: %s", exc)


# ── Endpoints ──────────────────────────────────────────────────
@router.get("/", response_model=HealthResponse)
@router.get("/health", response_model=HealthResponse, include_in_schema=False)
async def health_check() -> HealthResponse:
    return HealthResponse()


@router.post(
    "/generate",
    response_model=GenerateContentResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@router.post("/api/generate", response_model=GenerateContentResponse, include_in_schema=False)
async def generate(
    body: GenerateRequest,
    gemini: GeminiClient = Depends(get_gemini_client),
    webhook: WebhookClient = Depends(get_webhook_client),
):
    # 1. Clean the error output and build the prompt
    error_output = sanitize(body.error_output)
    prompt = render_prompt(body.language, error_output, body.code)

    # 2. Token count + usage notification (best effort)
    try:
        total_tokens = await gemini.count_tokens(prompt)
    except GeminiError as exc:
        logger.warning("Token count failed: %s", exc)
    else:
        logger.info(
            "Prompt built",
            extra={"fields": {"language": body.language, "tokens": total_tokens}},
        )
        try:
            await webhook.send_token_info(body.language, total_tokens, error_output)
        except WebhookError as exc:
            logger.warning("Usage notification failed: %s", exc)

    # 3. Generate
    try:
        return await gemini.generate_content(prompt)
    except GeminiAPIError as exc:
        logger.error("Gemini rejected generateContent: %s", exc)
        await _notify_error(webhook, f"Result error: {exc}")
        return _error_response(exc.http_status, str(exc))
    except GeminiError as exc:
        logger.error("generateContent failed: %s", exc)
        await _notify_error(webhook, f"Result error: {exc}")
        return _error_response(500, f"Request error: {exc}")


# ── Middleware: request_id + timing ────────────────────────────
async def request_context_middleware(request: Request, call_next):
    rid = new_request_id()
    request_id_ctx.set(rid)
    t0 = time.perf_counter()
    response = await call_next(request)
    elapsed = round((time.perf_counter() - t0) * 1000, 1)
    response.headers["X-Request-Id"] = rid
    logger.info(
        "%s %s → %s (%.1f ms)",
        request.method, request.url.path, response.status_code, elapsed,
    )
    return response


# ── Application factory ────────────────────────────────────────
def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application. Raises if ``API_KEY`` is not configured."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Own the shared outbound HTTP client."""
        setup_logging(settings.log_level)

        http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                settings.http_read_timeout, connect=settings.http_connect_timeout
            ),
        )
        app.state.gemini_client = GeminiClient(settings, http_client)
        app.state.webhook_client = WebhookClient(http_client, settings.web_hook_url)

        logger.info(
            "Application started (gemini_model=%s, webhook=%s)",
            settings.gemini_model,
            app.state.webhook_client.enabled,
        )
        try:
            yield
        finally:
            await http_client.aclose()
            logger.info("Application shutdown")

    app = FastAPI(
        title="Notebook Error Assistant",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_context_middleware)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.include_router(router)
    return app

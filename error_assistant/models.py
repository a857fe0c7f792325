"""
Pydantic models for request / response / error payloads.

Inbound:   {"errorOutput": "...", "code": "...", "language": "..."}
Outbound:  the Gemini ``generateContent`` payload (candidates list)
Error:     {"message": "..."}

Also holds the wire shapes of the two upstreams: the Gemini REST API
(camelCase fields) and the Discord-compatible chat webhook.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ── Inbound API ────────────────────────────────────────────────
class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    error_output: str = Field(
        ..., alias="errorOutput", description="Captured error output, may contain ANSI codes"
    )
    code: str = Field(..., description="Code that was executed")
    language: str = Field(..., description="Answer language, e.g. 'English' or '한국어'")


class HealthResponse(BaseModel):
    status: str = "OK"


class ErrorResponse(BaseModel):
    message: str


# ── Gemini request bodies ──────────────────────────────────────
class Part(BaseModel):
    text: str


class RequestContent(BaseModel):
    parts: list[Part]


class ContentsBody(BaseModel):
    """Body shared by ``countTokens`` and ``generateContent``."""

    contents: list[RequestContent]

    @classmethod
    def from_prompt(cls, prompt: str) -> ContentsBody:
        return cls(contents=[RequestContent(parts=[Part(text=prompt)])])


# ── Gemini responses ───────────────────────────────────────────
class CountTokensResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_tokens: int = Field(..., alias="totalTokens")


class CandidateContent(BaseModel):
    parts: list[Part]
    role: str


class Candidate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: CandidateContent
    finish_reason: str = Field(..., alias="finishReason")


class GenerateContentResponse(BaseModel):
    candidates: list[Candidate]


class GeminiErrorDetail(BaseModel):
    code: int
    status: str
    message: str


class GeminiErrorEnvelope(BaseModel):
    """``{"error": {"code", "status", "message"}}`` sent with non-2xx statuses."""

    error: GeminiErrorDetail


# ── Webhook ────────────────────────────────────────────────────
class WebhookField(BaseModel):
    name: str
    value: str


class WebhookEmbed(BaseModel):
    fields: list[WebhookField]


class WebhookMessage(BaseModel):
    username: str
    content: str
    embeds: list[WebhookEmbed] = []

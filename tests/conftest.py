"""Shared fixtures and upstream URLs. No real HTTP traffic leaves this process."""

import pytest

from error_assistant.settings import Settings

MODEL_URL = "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash"
COUNT_TOKENS_URL = f"{MODEL_URL}:countTokens"
GENERATE_URL = f"{MODEL_URL}:generateContent"
WEBHOOK_URL = "https://discord.example.com/api/webhooks/123/token"

GENERATION_PAYLOAD = {
    "candidates": [
        {
            "content": {
                "parts": [{"text": "`my_variable` is used before it is defined."}],
                "role": "model",
            },
            "finishReason": "STOP",
        }
    ]
}


def make_settings(**overrides) -> Settings:
    values = {"api_key": "test-key", "web_hook_url": None, "log_level": "warning"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def webhook_settings() -> Settings:
    return make_settings(web_hook_url=WEBHOOK_URL)

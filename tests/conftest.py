import httpx
import pytest

from vitals_gateway.config import Settings

ENV_VARS = (
    "LLM_PROVIDER",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_API_BASE_URL",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "REQUEST_TIMEOUT",
    "HOST",
    "PORT",
    "CORS_ORIGINS",
    "LOG_LEVEL",
    "LOG_DIR",
)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so teardown restores the original state even for unset names
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def settings():
    return Settings(gemini_api_key="test-key", gemini_model="gemini-test")


def gemini_payload(*texts: str) -> dict:
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": t} for t in texts], "role": "model"},
                "finishReason": "STOP",
            }
        ],
        "usageMetadata": {"totalTokenCount": 42},
    }


def mock_transport(payload=None, status_code: int = 200, error: Exception | None = None):
    """MockTransport answering every request with ``payload``; records requests."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if error is not None:
            raise error
        return httpx.Response(status_code, json=payload)

    transport = httpx.MockTransport(handler)
    transport.seen = seen
    return transport

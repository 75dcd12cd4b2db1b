import pytest

from vitals_gateway.config import Settings
from vitals_gateway.main import create_app
from vitals_gateway.services.gemini_client import GeminiClient
from vitals_gateway.services.suggestion import SuggestionClient

pytestmark = pytest.mark.anyio


async def test_lifespan_builds_and_closes_suggestion_client(tmp_path):
    settings = Settings(gemini_api_key="test-key", log_dir=str(tmp_path))
    app = create_app(settings)

    async with app.router.lifespan_context(app):
        client = app.state.suggestion_client
        assert isinstance(client, SuggestionClient)
        assert isinstance(client.backend, GeminiClient)
        assert not client.backend.client.is_closed

    assert client.backend.client.is_closed

    (log_file,) = tmp_path.glob("vitals_gateway_*.log")
    log_text = log_file.read_text(encoding="utf-8")
    assert "Vitals Suggestion Gateway starting up" in log_text
    assert "Vitals Suggestion Gateway shutting down" in log_text
    assert "test-key" not in log_text


async def test_lifespan_without_api_key(tmp_path):
    app = create_app(Settings(log_dir=str(tmp_path)))

    async with app.router.lifespan_context(app):
        assert app.state.suggestion_client.backend is None

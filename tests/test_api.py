import json

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from conftest import gemini_payload, mock_transport
from vitals_gateway.config import Settings
from vitals_gateway.exceptions import UpstreamError
from vitals_gateway.main import create_app
from vitals_gateway.models import SuggestionResult
from vitals_gateway.routers.suggestion import get_suggestion_client
from vitals_gateway.services.suggestion import SuggestionClient

pytestmark = pytest.mark.anyio

PAYLOAD = {"temp": 37.9, "pulse": 88, "spO2": 95, "language": "English"}


@pytest.fixture
async def make_client():
    """Yield a factory building an HTTP client for an app with the given suggestion client."""
    clients = []

    async def _make(settings: Settings, suggestion_client) -> AsyncClient:
        app = create_app(settings)
        app.state.suggestion_client = suggestion_client
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


async def test_suggest_success(make_client, settings):
    backend = SuggestionClient(
        settings,
        transport=mock_transport(gemini_payload("Parts:[{Text: Stay hydrated.\n\n#Rest well.}] Role:model")),
    )
    client = await make_client(settings, backend)

    response = await client.post("/suggest", json=PAYLOAD)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"suggestion": "Text: Stay hydrated.\nRest well."}


async def test_malformed_json_is_400(make_client, settings):
    client = await make_client(settings, SuggestionClient(settings))

    response = await client.post(
        "/suggest",
        content=b'{"temp": 37.9, "pulse":',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.text == "Invalid request payload"


@pytest.mark.parametrize(
    "body",
    [
        {"temp": 37.9, "pulse": 88, "language": "English"},
        {"temp": "warm", "pulse": 88, "spO2": 95, "language": "English"},
        [1, 2, 3],
    ],
)
async def test_invalid_payload_is_400(make_client, settings, body):
    client = await make_client(settings, SuggestionClient(settings))

    response = await client.post("/suggest", json=body)

    assert response.status_code == 400
    assert response.text == "Invalid request payload"


async def test_zero_candidates_is_500(make_client, settings):
    backend = SuggestionClient(settings, transport=mock_transport({"candidates": []}))
    client = await make_client(settings, backend)

    response = await client.post("/suggest", json=PAYLOAD)

    assert response.status_code == 500
    assert response.text == "Failed to get suggestion: no suggestions returned from Gemini"


async def test_missing_api_key_is_500(make_client):
    settings = Settings()
    client = await make_client(settings, SuggestionClient(settings))

    response = await client.post("/suggest", json=PAYLOAD)

    assert response.status_code == 500
    assert response.text.startswith("Failed to get suggestion: ")
    assert "API key not set" in response.text


async def test_upstream_failure_detail_is_appended(make_client, settings):
    backend = SuggestionClient(
        settings, transport=mock_transport(error=httpx.ReadTimeout("read timed out"))
    )
    client = await make_client(settings, backend)

    response = await client.post("/suggest", json=PAYLOAD)

    assert response.status_code == 500
    assert response.text == "Failed to get suggestion: failed to generate content: read timed out"


async def test_dependency_override(settings):
    class FakeSuggestionClient:
        def __init__(self):
            self.readings = []

        async def get_suggestion(self, reading):
            self.readings.append(reading)
            if reading.language == "Klingon":
                raise UpstreamError("failed to generate content: unsupported language")
            return SuggestionResult(text=f"ok in {reading.language}")

    fake = FakeSuggestionClient()
    app = create_app(settings)
    app.dependency_overrides[get_suggestion_client] = lambda: fake

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        ok = await client.post("/suggest", json={**PAYLOAD, "language": "German"})
        failed = await client.post("/suggest", json={**PAYLOAD, "language": "Klingon"})

    assert ok.json() == {"suggestion": "ok in German"}
    assert failed.status_code == 500
    assert failed.text == "Failed to get suggestion: failed to generate content: unsupported language"
    assert fake.readings[0].temperature == 37.9
    assert fake.readings[0].oxygen_saturation == 95.0


async def test_health_reports_provider(make_client, settings):
    client = await make_client(settings, SuggestionClient(settings))

    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "provider": "gemini",
        "model": "gemini-test",
        "api_key_configured": True,
        "version": "0.1.0",
    }


async def test_unknown_route_is_plain_text_404(make_client, settings):
    client = await make_client(settings, SuggestionClient(settings))

    response = await client.get("/nope")

    assert response.status_code == 404
    assert response.text == "Not Found"


async def test_root(make_client, settings):
    client = await make_client(settings, SuggestionClient(settings))

    response = await client.get("/")

    assert response.json()["suggestion"] == "/suggest"


@pytest.mark.parametrize(
    "headers",
    [
        {"Content-Type": "text/plain"},
        {"Content-Type": "application/x-www-form-urlencoded"},
        {},
    ],
)
async def test_json_body_accepted_without_json_content_type(make_client, settings, headers):
    backend = SuggestionClient(settings, transport=mock_transport(gemini_payload("Rest well.")))
    client = await make_client(settings, backend)

    response = await client.post("/suggest", content=json.dumps(PAYLOAD).encode(), headers=headers)

    assert response.status_code == 200
    assert response.json() == {"suggestion": "Rest well."}


@pytest.mark.parametrize(
    "raw_body",
    [
        b'{"temp": NaN, "pulse": 88, "spO2": 95, "language": "English"}',
        b'{"temp": 37.9, "pulse": Infinity, "spO2": 95, "language": "English"}',
        b'{"temp": "37.9", "pulse": 88, "spO2": 95, "language": "English"}',
        b'{"temp": 37.9, "pulse": true, "spO2": 95, "language": "English"}',
        b'{"temp": 37.9, "pulse": 88, "spO2": 95, "language": 7}',
        b"",
    ],
)
async def test_non_numeric_or_non_finite_readings_are_400(make_client, settings, raw_body):
    transport = mock_transport(gemini_payload("should not be called"))
    client = await make_client(settings, SuggestionClient(settings, transport=transport))

    response = await client.post(
        "/suggest", content=raw_body, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.text == "Invalid request payload"
    assert transport.seen == []


async def test_integer_readings_are_accepted(make_client, settings):
    transport = mock_transport(gemini_payload("ok"))
    client = await make_client(settings, SuggestionClient(settings, transport=transport))

    response = await client.post(
        "/suggest", json={"temp": 37, "pulse": 88, "spO2": 95, "language": "English"}
    )

    assert response.status_code == 200
    prompt = json.loads(transport.seen[0].content)["contents"][0]["parts"][0]["text"]
    assert "Body Temperature: 37.0°C" in prompt


async def test_non_object_upstream_body_is_500(make_client, settings):
    backend = SuggestionClient(settings, transport=mock_transport([1, 2]))
    client = await make_client(settings, backend)

    response = await client.post("/suggest", json=PAYLOAD)

    assert response.status_code == 500
    assert response.text == "Failed to get suggestion: response is not a JSON object (list)"

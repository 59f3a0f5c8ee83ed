"""Health endpoint and application wiring."""

from datetime import datetime

from tests.fakes import StaticAIService


async def test_health_without_key(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["hasApiKey"] is False
    datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))


async def test_health_with_placeholder_key(client_factory):
    client = await client_factory(google_api_key="your-fallback-key-here")

    response = await client.get("/api/health")

    assert response.json()["hasApiKey"] is False


async def test_health_with_real_key(client_factory):
    client = await client_factory(ai_service=StaticAIService(), google_api_key="AIza-test-key")

    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["hasApiKey"] is True


async def test_unknown_api_route_is_json_404(client):
    response = await client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


async def test_cors_allows_any_origin(client):
    response = await client.get("/api/health", headers={"Origin": "http://example.com"})

    assert response.headers["access-control-allow-origin"] == "*"

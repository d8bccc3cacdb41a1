"""
Tests for the guild lookup HTTP endpoint.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from wow_guild_cache.application.services import GuildRefreshService
from wow_guild_cache.core.config import Settings
from wow_guild_cache.core.exceptions import APIError, RegionNotSupportedError
from wow_guild_cache.domain.guild.normalizer import normalize_guild
from wow_guild_cache.infrastructure.telemetry import ErrorReporter
from wow_guild_cache.presentation.api import create_app

from .conftest import make_payload

GUILD_URL = "/i/guild/EU/realm1/guildA"


class TestGuildEndpoint:
    """Test cases for GET /i/guild/{region}/{realm}/{name}."""

    @pytest.fixture
    def store(self):
        store = AsyncMock()
        store.lookup.return_value = None
        store.upsert.side_effect = lambda record: record
        return store

    @pytest.fixture
    def upstream(self, guild_payload):
        upstream = AsyncMock()
        upstream.fetch_guild.return_value = guild_payload
        return upstream

    @pytest.fixture
    def reporter(self):
        return ErrorReporter()

    @pytest.fixture
    def app(self, store, upstream, reporter):
        """FastAPI app wired to mocked collaborators."""
        service = GuildRefreshService(store, upstream, reporter)
        return create_app(settings=Settings(), service=service)

    @pytest.fixture
    def client(self, app):
        """Test client running the app lifespan."""
        with TestClient(app) as client:
            yield client

    def test_cache_miss_returns_upstream_guild(self, client, guild_payload):
        """Test a miss answers with the freshly normalized guild."""
        response = client.get(GUILD_URL)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json; charset=utf-8"
        expected = normalize_guild(guild_payload, "EU", "realm1", "guildA").to_response()
        assert response.json() == expected

    def test_guild_is_stored_after_response(self, app, store):
        """Test the refresh is written once background work drains."""
        with TestClient(app) as client:
            response = client.get(GUILD_URL)

        assert response.status_code == 200
        store.upsert.assert_awaited_once()
        assert store.upsert.await_args.args[0].region == "eu"

    def test_cache_hit_survives_upstream_error(self, app, store, upstream, reporter):
        """Test cached data is served while the failed refresh is reported."""
        cached = normalize_guild(make_payload(member_count=42), "EU", "realm1", "guildA")
        store.lookup.return_value = cached
        upstream.fetch_guild.side_effect = APIError(
            "API request failed: 500", status_code=500, body="Internal Server Error"
        )

        with TestClient(app) as client:
            response = client.get(GUILD_URL)

        assert response.status_code == 200
        assert response.json()["memberCount"] == 42
        assert reporter.total_reported == 1
        store.upsert.assert_not_called()

    def test_unsupported_region(self, client, upstream, store, reporter):
        """Test unsupported regions answer 500 with a fixed message."""
        upstream.fetch_guild.side_effect = RegionNotSupportedError("cn")

        response = client.get("/i/guild/CN/realm1/guildA")

        assert response.status_code == 500
        assert response.json() == {"error": "This region is not supported"}
        assert reporter.total_reported == 1
        store.upsert.assert_not_called()

    def test_not_found(self, client, upstream, reporter):
        """Test upstream not-found answers 404 with an empty body."""
        upstream.fetch_guild.side_effect = APIError(
            "failed", status_code=404, body='{"detail":"Not found"}'
        )

        response = client.get(GUILD_URL)

        assert response.status_code == 404
        assert response.content == b""
        assert reporter.total_reported == 0

    def test_unexpected_error_body(self, client, upstream, reporter):
        """Test unexpected failures surface the upstream status and body."""
        upstream.fetch_guild.side_effect = APIError(
            "failed", status_code=404, body='{"detail":"Gone fishing"}'
        )

        response = client.get(GUILD_URL)

        assert response.status_code == 404
        assert response.json() == {
            "error": "Blizzard API error",
            "message": '{"detail":"Gone fishing"}',
        }
        assert reporter.total_reported == 1

    @pytest.mark.parametrize("path", [
        "/i/guild/eu/realm1/guildA",
        "/i/guild/EUR/realm1/guildA",
        "/i/guild/EU/r/guildA",
        "/i/guild/EU/realm1/g",
    ])
    def test_malformed_path_not_found(self, client, upstream, path):
        """Test paths outside the route shape answer 404 before any lookup."""
        response = client.get(path)

        assert response.status_code == 404
        assert response.content == b""
        upstream.fetch_guild.assert_not_called()

    def test_cors_open_to_any_origin(self, client):
        """Test responses are readable cross-origin."""
        response = client.get(GUILD_URL, headers={"Origin": "https://example.com"})

        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.parametrize("path", [GUILD_URL, "/i/guild/eu/realm1/guildA", "/health"])
    def test_cors_header_without_origin(self, client, path):
        """Test every response is open to any caller, even without an Origin."""
        response = client.get(path)

        assert response.headers["access-control-allow-origin"] == "*"

    def test_health(self, client, upstream):
        """Test the health endpoint reports telemetry counts."""
        upstream.fetch_guild.side_effect = RegionNotSupportedError("cn")
        client.get("/i/guild/CN/realm1/guildA")

        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["errors_reported"] == 1

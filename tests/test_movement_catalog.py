"""Tests for fetching the movement dictionary over HTTP."""
import httpx
import pytest

from wod_parser.config import settings
from wod_parser.parsers import parse_text_with_dictionary
from wod_parser.services.movement_catalog import MovementCatalogClient, MovementCatalogError

CATALOG_URL = "https://catalog.test/movements"


def _client(handler, **kwargs):
    """Client wired to an in-memory transport with no backoff delay."""
    kwargs.setdefault("url", CATALOG_URL)
    kwargs.setdefault("max_attempts", 3)
    return MovementCatalogClient(
        transport=httpx.MockTransport(handler),
        min_wait_seconds=0,
        max_wait_seconds=0,
        **kwargs,
    )


class TestFetchMovements:
    """Response envelopes and row validation."""

    @pytest.mark.asyncio
    async def test_bare_list(self, movement_rows):
        client = _client(lambda request: httpx.Response(200, json=movement_rows))

        movements = await client.fetch_movements()

        assert [m.name for m in movements] == ["Thruster", "Pull-up", "Back Squat", "Burpee", "Run"]
        assert movements[0].aliases == ["thrusters", "barbell thruster"]

    @pytest.mark.asyncio
    async def test_movements_envelope(self, movement_rows):
        client = _client(lambda request: httpx.Response(200, json={"movements": movement_rows[:2]}))
        assert len(await client.fetch_movements()) == 2

    @pytest.mark.asyncio
    async def test_follows_pages(self, movement_rows):
        pages = {
            CATALOG_URL: {"results": movement_rows[:3], "next": f"{CATALOG_URL}?page=2"},
            f"{CATALOG_URL}?page=2": {"results": movement_rows[3:], "next": None},
        }
        client = _client(lambda request: httpx.Response(200, json=pages[str(request.url)]))

        movements = await client.fetch_movements()

        assert len(movements) == 5

    @pytest.mark.asyncio
    async def test_skips_invalid_rows(self):
        rows = [{"name": "Row"}, {"common_aliases": ["nameless"]}, "junk"]
        client = _client(lambda request: httpx.Response(200, json=rows))

        movements = await client.fetch_movements()

        assert [m.name for m in movements] == ["Row"]

    @pytest.mark.asyncio
    async def test_sends_api_key(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json=[])

        await _client(handler, api_key="secret").fetch_movements()

        assert seen["auth"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_feeds_text_parser(self, movement_rows):
        client = _client(lambda request: httpx.Response(200, json=movement_rows))

        workout = await parse_text_with_dictionary("21-15-9\nThrusters\nPull-ups", client.fetch_movements)

        assert [m.name for m in workout.movements][-2:] == ["Thruster", "Pull-up"]


class TestFetchErrors:
    """Retries and failure reporting."""

    @pytest.mark.asyncio
    async def test_retries_server_errors(self, movement_rows):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) < 3:
                return httpx.Response(503)
            return httpx.Response(200, json=movement_rows)

        movements = await _client(handler).fetch_movements()

        assert len(calls) == 3
        assert len(movements) == 5

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        with pytest.raises(MovementCatalogError):
            await _client(handler, max_attempts=2).fetch_movements()

        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(404)

        with pytest.raises(MovementCatalogError):
            await _client(handler).fetch_movements()

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_connection_error_retried(self, movement_rows):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=movement_rows)

        movements = await _client(handler).fetch_movements()

        assert len(calls) == 2
        assert len(movements) == 5

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        client = _client(lambda request: httpx.Response(200, content=b"<html>"))

        with pytest.raises(MovementCatalogError, match="invalid JSON"):
            await client.fetch_movements()

    @pytest.mark.asyncio
    async def test_no_url_configured(self, monkeypatch):
        monkeypatch.setattr(settings, "MOVEMENT_CATALOG_URL", None)

        with pytest.raises(MovementCatalogError, match="not configured"):
            await MovementCatalogClient().fetch_movements()

    def test_settings_defaults(self, monkeypatch):
        monkeypatch.setattr(settings, "MOVEMENT_CATALOG_URL", "https://catalog.example/movements")
        monkeypatch.setattr(settings, "MOVEMENT_CATALOG_MAX_ATTEMPTS", 4)

        client = MovementCatalogClient()

        assert client.url == "https://catalog.example/movements"
        assert client.max_attempts == 4

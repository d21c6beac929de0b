"""Tests for NominatimAdapter — HTTP is served by httpx.MockTransport (no network)."""

import httpx
import pytest

from app.adapters.geocoder.nominatim_adapter import NominatimAdapter


class RecordingHandler:
    """Answers Nominatim searches from a query → results table."""

    def __init__(self, answers=None, status_code=200):
        self.answers = answers or {}
        self.status_code = status_code
        self.queries: list[str] = []
        self.user_agents: list[str] = []
        self.country_codes: list[str | None] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        query = request.url.params["q"]
        self.queries.append(query)
        self.user_agents.append(request.headers["User-Agent"])
        self.country_codes.append(request.url.params.get("countrycodes"))
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": "unavailable"})
        return httpx.Response(200, json=self.answers.get(query, []))


def _adapter(handler: RecordingHandler, **kwargs) -> NominatimAdapter:
    return NominatimAdapter(
        user_agent="test-agent", timeout=1.0, transport=httpx.MockTransport(handler), **kwargs
    )


# ─── Lookup ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_resolves_full_address():
    handler = RecordingHandler({"King Fahd Road, Riyadh": [{"lat": "24.7136", "lon": "46.6753"}]})
    point = await _adapter(handler).geocode("King Fahd Road, Riyadh")

    assert point is not None
    assert point.latitude == pytest.approx(24.7136)
    assert point.longitude == pytest.approx(46.6753)
    assert handler.queries == ["King Fahd Road, Riyadh"]
    assert handler.user_agents == ["test-agent"]


@pytest.mark.asyncio
async def test_country_codes_restrict_search():
    handler = RecordingHandler()
    await _adapter(handler, country_codes="sa").geocode("Olaya Street")
    assert handler.country_codes == ["sa"]


@pytest.mark.asyncio
async def test_falls_back_to_address_without_numbers():
    handler = RecordingHandler({"Building King Fahd Road Riyadh": [{"lat": "24.7", "lon": "46.6"}]})
    point = await _adapter(handler).geocode("Building 12, King Fahd Road, Riyadh")

    assert point is not None
    assert handler.queries == ["Building 12, King Fahd Road, Riyadh", "Building King Fahd Road Riyadh"]


@pytest.mark.asyncio
async def test_no_results_returns_none():
    handler = RecordingHandler()
    assert await _adapter(handler).geocode("Nowhere Street") is None


@pytest.mark.asyncio
async def test_http_error_returns_none():
    handler = RecordingHandler(status_code=503)
    assert await _adapter(handler).geocode("King Fahd Road, Riyadh") is None


@pytest.mark.asyncio
async def test_blank_address_is_not_looked_up():
    handler = RecordingHandler()
    assert await _adapter(handler).geocode("   ") is None
    assert handler.queries == []


# ─── Cache behavior ─────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_cache_deduplicates():
    """Same address (any case) should hit Nominatim once."""
    handler = RecordingHandler({"Olaya Street, Riyadh": [{"lat": "24.69", "lon": "46.68"}]})
    adapter = _adapter(handler)

    r1 = await adapter.geocode("Olaya Street, Riyadh")
    r2 = await adapter.geocode("olaya street, riyadh ")

    assert r1 == r2
    assert len(handler.queries) == 1


@pytest.mark.asyncio
async def test_misses_are_cached():
    handler = RecordingHandler()
    adapter = _adapter(handler)

    await adapter.geocode("Nowhere Street")
    await adapter.geocode("Nowhere Street")

    assert handler.queries == ["Nowhere Street"]


# ─── Query building ─────────────────────────────────────────────────


def test_build_queries_drops_numbered_words():
    assert NominatimAdapter._build_queries("Building 12, King Fahd Road, Riyadh") == [
        "Building 12, King Fahd Road, Riyadh",
        "Building King Fahd Road Riyadh",
    ]


def test_build_queries_without_numbers_is_single():
    assert NominatimAdapter._build_queries("King Fahd Road, Riyadh") == ["King Fahd Road, Riyadh"]


def test_build_queries_only_numbers_is_single():
    assert NominatimAdapter._build_queries("12 34") == ["12 34"]

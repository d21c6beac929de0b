"""Nominatim geocoder adapter — implements GeocoderPort."""

from __future__ import annotations

import logging

import httpx

from app.application.ports.geocoder_port import GeocoderPort
from app.config import settings
from app.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"


class NominatimAdapter(GeocoderPort):
    """Nominatim geocoding with an in-memory cache.

    Failures are logged and reported as None, never raised.
    """

    def __init__(
        self,
        user_agent: str | None = None,
        timeout: float | None = None,
        country_codes: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._user_agent = user_agent or settings.geocoder_user_agent
        self._timeout = timeout if timeout is not None else settings.geocoder_timeout
        self._country_codes = country_codes or settings.geocoder_country_codes
        self._transport = transport
        self._cache: dict[str, GeoPoint | None] = {}

    async def geocode(self, address: str) -> GeoPoint | None:
        cache_key = address.strip().lower()
        if not cache_key:
            return None

        if cache_key in self._cache:
            logger.debug("Cache hit for '%s'", address)
            return self._cache[cache_key]

        point = await self._nominatim_lookup(address)
        self._cache[cache_key] = point
        return point

    async def _nominatim_lookup(self, address: str) -> GeoPoint | None:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                for query in self._build_queries(address):
                    params = {"q": query, "format": "json", "limit": 1}
                    if self._country_codes:
                        params["countrycodes"] = self._country_codes
                    response = await client.get(
                        NOMINATIM_URL,
                        params=params,
                        headers={"User-Agent": self._user_agent},
                        timeout=self._timeout,
                    )
                    response.raise_for_status()
                    results = response.json()

                    if results:
                        lat = float(results[0]["lat"])
                        lon = float(results[0]["lon"])
                        logger.info("Nominatim resolved '%s' (q='%s') → (%f, %f)", address, query, lat, lon)
                        return GeoPoint(latitude=lat, longitude=lon)

                logger.info("Nominatim returned no results for '%s'", address)
                return None

        except Exception:
            logger.exception("Nominatim API error for '%s'", address)
            return None

    @staticmethod
    def _build_queries(address: str) -> list[str]:
        """Full address first, then the same address without house/unit numbers."""
        q1 = address.strip()
        words = q1.replace(",", " ").split()
        q2 = " ".join(p for p in words if not any(ch.isdigit() for ch in p))
        queries = [q1]
        if q2 and len(q2.split()) < len(words):
            queries.append(q2)
        return queries

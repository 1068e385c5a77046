"""IP geolocation enrichment.

Geolocation is optional post-hoc enrichment: a failed lookup leaves the
record's location fields unset and never discards the record.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Sequence

import httpx
from pydantic import BaseModel, Field

from tunnelscope.core.errors import EnrichmentError
from tunnelscope.core.logging import debug, warning
from tunnelscope.detection.scoring import ThreatScorer
from tunnelscope.models.record import DNSQueryRecord

UNKNOWN_LOCATION = "Unknown"
PRIVATE_LOCATION = "Private Network"

PRIVATE_PREFIXES = ("192.168.", "10.", "172.")

DEFAULT_ENRICH_LIMIT = 10

DEFAULT_CACHE_SIZE = 1024

LOCAL_LOCATIONS = {
    "127.0.0.1": "Localhost",
    "192.168.1.1": "Local Network",
}


class GeoResult(BaseModel):
    """Location of an address."""

    location: str = Field(..., description="Human-readable location")
    lat: float | None = Field(default=None, description="Latitude")
    lng: float | None = Field(default=None, description="Longitude")

    model_config = {"extra": "forbid", "frozen": True}


class GeolocationProvider(ABC):
    """Abstract base class for geolocation providers."""

    name: str = "geolocation"

    @abstractmethod
    async def get_location(self, ip: str) -> GeoResult:
        """Get the location of an address.

        Raises:
            EnrichmentError: If the lookup cannot be completed
        """
        ...


class IpWhoIsProvider(GeolocationProvider):
    """Geolocation through the public ipwho.is API.

    Private addresses are answered locally. Successful lookups are cached,
    evicting the oldest entry once ``cache_size`` is reached.
    """

    name = "ipwho.is"
    BASE_URL = "https://ipwho.is"

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
        concurrency: int = 4,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ) -> None:
        self._client = client
        self.timeout = timeout
        self._semaphore = asyncio.Semaphore(concurrency)
        self.cache_size = cache_size
        self._cache: dict[str, GeoResult] = {}

    async def get_location(self, ip: str) -> GeoResult:
        if ip in LOCAL_LOCATIONS:
            return GeoResult(location=LOCAL_LOCATIONS[ip])

        if ip in self._cache:
            return self._cache[ip]

        if ip.startswith(PRIVATE_PREFIXES):
            return GeoResult(location=PRIVATE_LOCATION)

        try:
            data = await self._fetch(ip)
        except (httpx.HTTPError, ValueError) as e:
            raise EnrichmentError(ip, str(e) or type(e).__name__) from e

        if not isinstance(data, dict):
            raise EnrichmentError(ip, "unexpected response body")
        if not data.get("success"):
            raise EnrichmentError(ip, str(data.get("message") or "lookup unsuccessful"))

        city = data.get("city") or ""
        country = data.get("country") or ""
        separator = ", " if city and country else ""
        result = GeoResult(
            location=f"{city}{separator}{country}" or UNKNOWN_LOCATION,
            lat=data.get("latitude"),
            lng=data.get("longitude"),
        )
        if self.cache_size > 0:
            if len(self._cache) >= self.cache_size:
                self._cache.pop(next(iter(self._cache)))
            self._cache[ip] = result
        return result

    async def _fetch(self, ip: str) -> object:
        url = f"{self.BASE_URL}/{ip}"
        async with self._semaphore:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url)
        response.raise_for_status()
        return response.json()


async def enrich_records(
    records: Sequence[DNSQueryRecord],
    provider: GeolocationProvider,
    scorer: ThreatScorer | None = None,
    limit: int = DEFAULT_ENRICH_LIMIT,
) -> int:
    """Attach locations to the first ``limit`` records and rescore them.

    Lookups run one after another to stay under provider rate limits.

    Returns:
        Number of records enriched
    """
    scorer = scorer or ThreatScorer()
    enriched = 0

    for record in records[:limit]:
        try:
            geo = await provider.get_location(record.source_ip)
        except EnrichmentError as e:
            warning(e.error.message, ip=record.source_ip)
            continue

        record.apply_enrichment(location=geo.location, lat=geo.lat, lng=geo.lng)
        record.apply_enrichment(threat_score=scorer.score(record))
        enriched += 1

    debug("Geolocation enrichment complete", provider=provider.name, enriched=enriched)
    return enriched

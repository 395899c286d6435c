"""Reverse geocoding service: cache, rate gate, primary/fallback transports.

``ReverseGeocoder`` owns its cache and rate limiter, so every instance is
independent. The application builds one per process with
``build_reverse_geocoder`` and injects it where it is needed.

Concurrent calls for the same uncached coordinate are not coalesced; each
one passes the rate gate and hits the provider on its own.
"""

import asyncio
from collections.abc import Awaitable, Callable

from loguru import logger

from geotag_api.core.config import Settings
from geotag_api.lib.geocoder import (
    MISSING,
    CacheStats,
    CacheStore,
    InternalError,
    NominatimClientTransport,
    NominatimHttpTransport,
    PlaceResult,
    RateLimiter,
    ReverseTransport,
    TransportError,
    normalize,
)

ATTRIBUTION = "© OpenStreetMap contributors"
DETAILED_ATTRIBUTION = "Geocoding data © OpenStreetMap contributors, licensed under ODbL"

DEFAULT_THROTTLE_COOLDOWN = 5.0  # seconds


class ReverseGeocoder:
    """Resolves coordinates to place names, at most one provider call per interval.

    Args:
        primary: Transport tried first.
        fallback: Transport tried once when the primary fails.
        cache: Result cache; a fresh one is created when omitted.
        limiter: Rate gate shared by both transports.
        throttle_cooldown: Seconds to wait after a 429/403 before returning.
        sleep: Coroutine function used for the cooldown.
    """

    def __init__(
        self,
        primary: ReverseTransport,
        fallback: ReverseTransport,
        cache: CacheStore | None = None,
        limiter: RateLimiter | None = None,
        throttle_cooldown: float = DEFAULT_THROTTLE_COOLDOWN,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self._primary = primary
        self._fallback = fallback
        self._cache = cache if cache is not None else CacheStore()
        self._limiter = limiter if limiter is not None else RateLimiter()
        self._throttle_cooldown = throttle_cooldown
        self._sleep = sleep

    @property
    def cache(self) -> CacheStore:
        return self._cache

    @property
    def limiter(self) -> RateLimiter:
        return self._limiter

    async def resolve(self, latitude: float, longitude: float) -> PlaceResult | None:
        """Resolve a coordinate pair to a place.

        Provider failures never raise; they produce None, which is cached so
        the same quantized coordinate is not requested again.

        Args:
            latitude: Latitude in degrees, already validated to -90..90.
            longitude: Longitude in degrees, already validated to -180..180.

        Returns:
            PlaceResult, or None if the coordinate could not be resolved.

        Raises:
            InternalError: If the cache holds something other than a result
                or a negative entry, or a transport breaks its contract.
        """
        key = self._cache.key_for(latitude, longitude)
        cached = self._cache.get(key)
        if cached is not MISSING:
            if cached is not None and not isinstance(cached, PlaceResult):
                msg = f"Cache entry for {key} has unexpected type {type(cached).__name__}"
                raise InternalError(msg)
            logger.debug(f"Reverse geocode cache hit for {key} (negative={cached is None})")
            return cached

        throttled = False
        result: PlaceResult | None = None
        resolved = False

        for transport in (self._primary, self._fallback):
            await self._limiter.acquire()
            try:
                raw = await transport.fetch(latitude, longitude)
            except TransportError as e:
                throttled = throttled or e.is_throttled
                logger.warning(f"Reverse geocode via {transport.name} failed for {key}: {e}")
                continue
            except Exception as e:
                msg = f"Transport {transport.name} raised outside its contract: {e}"
                raise InternalError(msg) from e

            result = normalize(raw, latitude, longitude)
            resolved = True
            break

        self._cache.put(key, result)

        if result is None:
            reason = "no result" if resolved else "all transports failed"
            logger.info(f"Reverse geocode for {key} unresolved ({reason}); cached as negative")
        else:
            logger.info(f"Reverse geocoded {key} to {result.place_name!r}")

        if throttled and result is None and self._throttle_cooldown > 0:
            logger.warning(f"Provider throttled or blocked us; cooling down for {self._throttle_cooldown}s")
            await self._sleep(self._throttle_cooldown)

        return result

    def cache_stats(self) -> CacheStats:
        return self._cache.stats()

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info("Reverse geocode cache cleared")

    @staticmethod
    def attribution() -> str:
        return ATTRIBUTION

    @staticmethod
    def detailed_attribution() -> str:
        return DETAILED_ATTRIBUTION


def build_reverse_geocoder(settings: Settings) -> ReverseGeocoder:
    """Wire a ReverseGeocoder from application settings.

    Args:
        settings: Application settings.

    Returns:
        A ReverseGeocoder with its own cache and rate limiter.
    """
    primary = NominatimClientTransport(
        timeout=settings.geocoder_timeout,
        user_agent=settings.geocoder_user_agent,
        base_url=settings.geocoder_nominatim_base_url,
    )
    fallback = NominatimHttpTransport(
        base_url=settings.geocoder_nominatim_base_url,
        user_agent=settings.geocoder_user_agent,
        email=settings.geocoder_nominatim_email,
    )
    return ReverseGeocoder(
        primary=primary,
        fallback=fallback,
        cache=CacheStore(precision=settings.geocoder_cache_precision),
        limiter=RateLimiter(min_interval=settings.geocoder_min_interval),
        throttle_cooldown=settings.geocoder_throttle_cooldown,
    )

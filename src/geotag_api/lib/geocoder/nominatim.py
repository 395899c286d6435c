"""OpenStreetMap Nominatim reverse geocoding through the geopy client.

This is the primary transport. geopy is synchronous, so each call runs on a
worker thread to keep the event loop free. Nominatim's usage policy limits
clients to 1 req/sec; callers are expected to pass through the rate gate
before calling ``fetch``.
"""

import asyncio
from urllib.parse import urlsplit

from geopy.exc import (
    GeocoderInsufficientPrivileges,
    GeocoderRateLimited,
    GeocoderTimedOut,
    GeopyError,
)
from geopy.geocoders import Nominatim
from loguru import logger

from geotag_api.lib.geocoder.base import ClientLocationResponse, TransportError, transport_error

DEFAULT_BASE_URL = "https://nominatim.openstreetmap.org"
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "geotag-api/1.0"


class NominatimClientTransport:
    """Primary transport backed by ``geopy.geocoders.Nominatim``."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        parts = urlsplit(base_url)
        self._geolocator = Nominatim(
            user_agent=user_agent,
            timeout=timeout,
            domain=parts.netloc + parts.path.rstrip("/"),
            scheme=parts.scheme or "https",
        )

    @property
    def name(self) -> str:
        return "nominatim-client"

    async def fetch(self, latitude: float, longitude: float) -> ClientLocationResponse | None:
        """Reverse geocode a coordinate pair with the geopy client.

        Args:
            latitude: Latitude in degrees.
            longitude: Longitude in degrees.

        Returns:
            ClientLocationResponse, or None if Nominatim had no result.

        Raises:
            TransportError: On transport or service errors.
        """
        try:
            location = await asyncio.to_thread(
                self._geolocator.reverse,
                (latitude, longitude),
                exactly_one=True,
                addressdetails=True,
            )
        except GeocoderRateLimited as e:
            logger.warning("Nominatim client rate limited (HTTP 429)")
            raise transport_error(self.name, "Provider rate limited the request", status_code=429) from e
        except GeocoderInsufficientPrivileges as e:
            logger.warning("Nominatim client request refused (HTTP 403)")
            raise transport_error(self.name, "Provider refused the request", status_code=403) from e
        except GeocoderTimedOut as e:
            logger.warning("Nominatim client timeout")
            raise TransportError(self.name, "Reverse geocoding request timed out", status_code=408) from e
        except GeopyError as e:
            logger.warning(f"Nominatim client error: {e}")
            raise TransportError(self.name, f"Provider error: {e}") from e
        except Exception as e:
            logger.exception("Nominatim client unexpected error")
            raise TransportError(self.name, f"Unexpected error: {e}") from e

        if location is None:
            return None
        return ClientLocationResponse(raw=dict(location.raw or {}))

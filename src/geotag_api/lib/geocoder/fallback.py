"""Direct HTTP request to Nominatim's ``/reverse`` endpoint.

Used when the geopy client fails. Hits the same upstream with fixed query
parameters and headers, so it must also go through the rate gate.
"""

from typing import Any

import httpx
from loguru import logger

from geotag_api.lib.geocoder.base import HttpJsonResponse, TransportError, transport_error
from geotag_api.lib.geocoder.nominatim import DEFAULT_BASE_URL, DEFAULT_USER_AGENT

FALLBACK_TIMEOUT = 10.0


class NominatimHttpTransport:
    """Fallback transport issuing ``GET {base_url}/reverse`` with httpx."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        email: str = "",
        timeout: float = FALLBACK_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._email = email
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "nominatim-http"

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def url(self) -> str:
        return f"{self._base_url}/reverse"

    def _params(self, latitude: float, longitude: float) -> dict[str, str | float | int]:
        params: dict[str, str | float | int] = {
            "format": "json",
            "lat": latitude,
            "lon": longitude,
            "addressdetails": 1,
        }
        if self._email:
            params["email"] = self._email
        return params

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self._user_agent, "Accept": "application/json"}

    async def fetch(self, latitude: float, longitude: float) -> HttpJsonResponse | None:
        """Reverse geocode a coordinate pair with a plain HTTP request.

        Args:
            latitude: Latitude in degrees.
            longitude: Longitude in degrees.

        Returns:
            HttpJsonResponse, or None if the body carried no result.

        Raises:
            TransportError: On timeout, connection failure, non-2xx status,
                or a body that is not a JSON object.
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(
                    self.url,
                    params=self._params(latitude, longitude),
                    headers=self._headers(),
                )
                response.raise_for_status()

            data = response.json()
            return self._parse_response(data)

        except httpx.TimeoutException as e:
            logger.warning("Nominatim HTTP fallback timeout")
            raise TransportError(self.name, "Reverse geocoding request timed out", status_code=408) from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Nominatim HTTP fallback error {e.response.status_code}")
            raise transport_error(
                self.name,
                f"Provider returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.ConnectError as e:
            logger.warning("Nominatim HTTP fallback connection error")
            raise TransportError(self.name, "Connection to geocoding provider failed") from e
        except ValueError as e:
            logger.warning(f"Nominatim HTTP fallback returned a non-JSON body: {e}")
            raise TransportError(self.name, "Provider returned a malformed body") from e
        except TransportError:
            raise
        except Exception as e:
            logger.exception("Nominatim HTTP fallback unexpected error")
            raise TransportError(self.name, f"Unexpected error: {e}") from e

    def _parse_response(self, data: Any) -> HttpJsonResponse | None:
        """Wrap the decoded JSON body.

        Args:
            data: Decoded JSON from the ``/reverse`` endpoint.

        Returns:
            HttpJsonResponse, or None for an empty body or a Nominatim error
            body such as ``{"error": "Unable to geocode"}``.
        """
        if not isinstance(data, dict):
            raise TransportError(self.name, f"Expected a JSON object, got {type(data).__name__}")
        if not data or "error" in data:
            return None
        return HttpJsonResponse(payload=data)

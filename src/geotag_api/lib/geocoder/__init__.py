"""Geocoder library - reverse geocoding against OpenStreetMap Nominatim.

Public API:
    - PlaceResult: Resolved place dataclass
    - ClientLocationResponse / HttpJsonResponse: Raw provider response variants
    - ReverseTransport: Transport protocol
    - NominatimClientTransport: Primary transport (geopy client)
    - NominatimHttpTransport: Fallback transport (direct HTTP)
    - TransportError / ThrottledError / InternalError: Error taxonomy
    - CacheStore / key_for / MISSING: In-process result cache
    - RateLimiter: Global provider rate gate
    - normalize: Raw response to PlaceResult
"""

from geotag_api.lib.geocoder.base import (
    AddressFields,
    ClientLocationResponse,
    HttpJsonResponse,
    InternalError,
    PlaceResult,
    RawProviderResponse,
    ReverseTransport,
    ThrottledError,
    TransportError,
)
from geotag_api.lib.geocoder.cache import MISSING, CacheStats, CacheStore, key_for
from geotag_api.lib.geocoder.fallback import NominatimHttpTransport
from geotag_api.lib.geocoder.nominatim import NominatimClientTransport
from geotag_api.lib.geocoder.normalize import normalize, place_name_for
from geotag_api.lib.geocoder.rate_limit import RateLimiter

__all__ = [
    "MISSING",
    "AddressFields",
    "CacheStats",
    "CacheStore",
    "ClientLocationResponse",
    "HttpJsonResponse",
    "InternalError",
    "NominatimClientTransport",
    "NominatimHttpTransport",
    "PlaceResult",
    "RateLimiter",
    "RawProviderResponse",
    "ReverseTransport",
    "ThrottledError",
    "TransportError",
    "key_for",
    "normalize",
    "place_name_for",
]

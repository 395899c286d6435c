"""In-process cache of reverse-geocoding results keyed by quantized coordinates."""

import threading
from dataclasses import dataclass

from geotag_api.lib.geocoder.base import PlaceResult

DEFAULT_PRECISION = 4

CacheKey = tuple[float, float]
CacheEntry = PlaceResult | None


class _Missing:
    """Marker for a key that has never been resolved."""

    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass
class CacheStats:
    """Diagnostic snapshot of the cache."""

    size: int
    keys: list[str]


def key_for(latitude: float, longitude: float, precision: int = DEFAULT_PRECISION) -> CacheKey:
    """Quantize a coordinate pair into a cache key.

    Coordinates that only differ beyond ``precision`` decimal places share
    a key. Negative zero is folded into zero so both hemispheres' equator
    and meridian map to the same entry.

    Args:
        latitude: Latitude in degrees.
        longitude: Longitude in degrees.
        precision: Number of decimal places to keep.

    Returns:
        The (latitude, longitude) key tuple.
    """
    return (round(latitude, precision) + 0.0, round(longitude, precision) + 0.0)


def format_key(key: CacheKey, precision: int = DEFAULT_PRECISION) -> str:
    return f"{key[0]:.{precision}f},{key[1]:.{precision}f}"


class CacheStore:
    """Thread-safe key/value store of resolved places and negative entries.

    Entries never expire and are never evicted; they live for the lifetime
    of the process.
    """

    def __init__(self, precision: int = DEFAULT_PRECISION) -> None:
        self._precision = precision
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def precision(self) -> int:
        return self._precision

    def key_for(self, latitude: float, longitude: float) -> CacheKey:
        return key_for(latitude, longitude, self._precision)

    def get(self, key: CacheKey) -> CacheEntry | _Missing:
        """Return the cached entry, ``None`` for a negative entry, or MISSING."""
        with self._lock:
            return self._entries.get(key, MISSING)

    def put(self, key: CacheKey, entry: CacheEntry) -> None:
        """Store an entry, overwriting whatever the key held."""
        with self._lock:
            self._entries[key] = entry

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            keys = [format_key(k, self._precision) for k in self._entries]
        return CacheStats(size=len(keys), keys=keys)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

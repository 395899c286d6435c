"""Reverse-geocoding transport interface, result types, and error taxonomy."""

from dataclasses import dataclass, field
from typing import Any, Protocol

# Status codes the provider uses to signal throttling or an outright block.
THROTTLE_STATUS_CODES = frozenset({403, 429})


@dataclass(frozen=True)
class PlaceResult:
    """A resolved, human-readable place for a coordinate pair."""

    place_name: str
    formatted_address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None

    def __post_init__(self) -> None:
        if not self.place_name or not self.place_name.strip():
            msg = "place_name must be a non-empty string"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, str]:
        """Return the camelCase wire shape, omitting absent optional fields."""
        data = {
            "placeName": self.place_name,
            "formattedAddress": self.formatted_address,
            "city": self.city,
            "state": self.state,
            "country": self.country,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class AddressFields:
    """Common normalization input extracted from any raw provider response.

    ``has_result`` is False when the provider answered but had nothing for
    the coordinate (e.g. open sea), which is distinct from a result that
    merely lacks the named fields.
    """

    city: str | None = None
    state: str | None = None
    country: str | None = None
    formatted_address: str | None = None
    has_result: bool = True


def _text(value: Any) -> str | None:
    """Return the provider's string as-is, or None for missing/blank/non-string values."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _address_block(data: dict[str, Any]) -> dict[str, Any]:
    address = data.get("address")
    return address if isinstance(address, dict) else {}


def _locality(address: dict[str, Any]) -> str | None:
    """Pick the locality name from a Nominatim ``address`` block."""
    for key in ("city", "town", "village", "hamlet"):
        name = _text(address.get(key))
        if name:
            return name
    return None


@dataclass(frozen=True)
class ClientLocationResponse:
    """Raw result produced by the geopy client (``Location.raw``)."""

    raw: dict[str, Any] = field(default_factory=dict)

    def fields(self) -> AddressFields:
        if not self.raw:
            return AddressFields(has_result=False)
        address = _address_block(self.raw)
        return AddressFields(
            city=_locality(address),
            state=_text(address.get("state")),
            country=_text(address.get("country")),
            formatted_address=_text(self.raw.get("display_name")),
        )


@dataclass(frozen=True)
class HttpJsonResponse:
    """Raw JSON body from the direct ``/reverse`` HTTP request.

    Top-level ``city``/``state``/``country`` win; Nominatim's nested
    ``address`` object fills in whatever the top level lacks.
    """

    payload: dict[str, Any] = field(default_factory=dict)

    def fields(self) -> AddressFields:
        if not self.payload or "error" in self.payload:
            return AddressFields(has_result=False)
        address = _address_block(self.payload)
        return AddressFields(
            city=_text(self.payload.get("city")) or _locality(address),
            state=_text(self.payload.get("state")) or _text(address.get("state")),
            country=_text(self.payload.get("country")) or _text(address.get("country")),
            formatted_address=_text(self.payload.get("formattedAddress")) or _text(self.payload.get("display_name")),
        )


RawProviderResponse = ClientLocationResponse | HttpJsonResponse


class TransportError(Exception):
    """Raised when a transport fails to complete an exchange with the provider.

    Covers timeouts, connection failures, non-2xx responses and malformed
    bodies. A successful exchange with no match is not an error; transports
    return None for it.

    Args:
        transport_name: Name of the failing transport.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the provider.
    """

    def __init__(self, transport_name: str, message: str, status_code: int | None = None) -> None:
        self.transport_name = transport_name
        self.message = message
        self.status_code = status_code
        super().__init__(f"{transport_name}: {message}")

    @property
    def is_throttled(self) -> bool:
        return self.status_code in THROTTLE_STATUS_CODES


class ThrottledError(TransportError):
    """The provider throttled (429) or blocked (403) the request."""


class InternalError(Exception):
    """An invariant was violated inside the resolver. Always a defect."""


def transport_error(transport_name: str, message: str, status_code: int | None = None) -> TransportError:
    """Build a TransportError, promoting throttling status codes to ThrottledError."""
    cls = ThrottledError if status_code in THROTTLE_STATUS_CODES else TransportError
    return cls(transport_name, message, status_code=status_code)


class ReverseTransport(Protocol):
    """A strategy that performs one reverse-geocode exchange with the provider."""

    @property
    def name(self) -> str:
        """Unique name identifying this transport in logs and errors."""
        ...

    async def fetch(self, latitude: float, longitude: float) -> RawProviderResponse | None:
        """Fetch the raw provider response for a coordinate pair.

        Returns:
            The raw response, or None if the provider had no result.

        Raises:
            TransportError: On transport or service errors.
        """
        ...

"""Unit tests for result types, raw response variants and the error taxonomy."""

import pytest

from geotag_api.lib.geocoder import ClientLocationResponse, HttpJsonResponse, PlaceResult, ThrottledError, TransportError
from geotag_api.lib.geocoder.base import transport_error


class TestPlaceResult:
    """Tests for PlaceResult validation and serialization."""

    def test_requires_place_name(self) -> None:
        with pytest.raises(ValueError, match="place_name"):
            PlaceResult(place_name="")

    def test_rejects_whitespace_name(self) -> None:
        with pytest.raises(ValueError, match="place_name"):
            PlaceResult(place_name="   ")

    def test_to_dict_omits_absent_fields(self) -> None:
        result = PlaceResult(place_name="Pune, MH", city="Pune", state="MH")
        assert result.to_dict() == {"placeName": "Pune, MH", "city": "Pune", "state": "MH"}

    def test_to_dict_full(self) -> None:
        result = PlaceResult(
            place_name="Pune, MH",
            formatted_address="Pune, Maharashtra, India",
            city="Pune",
            state="MH",
            country="India",
        )
        assert result.to_dict()["formattedAddress"] == "Pune, Maharashtra, India"
        assert result.to_dict()["country"] == "India"


class TestRawResponseFields:
    """Each raw variant maps itself into AddressFields."""

    def test_http_top_level_wins_over_nested(self) -> None:
        fields = HttpJsonResponse(payload={"city": "Pune", "address": {"city": "Mumbai", "state": "MH"}}).fields()
        assert fields.city == "Pune"
        assert fields.state == "MH"

    def test_http_formatted_address_key(self) -> None:
        fields = HttpJsonResponse(payload={"formattedAddress": "Somewhere"}).fields()
        assert fields.formatted_address == "Somewhere"

    def test_client_prefers_city_over_village(self) -> None:
        raw = {"address": {"village": "Khed", "city": "Pune"}}
        assert ClientLocationResponse(raw=raw).fields().city == "Pune"

    def test_client_ignores_non_string_values(self) -> None:
        raw = {"display_name": 42, "address": {"country": ["India"]}}
        fields = ClientLocationResponse(raw=raw).fields()
        assert fields.formatted_address is None
        assert fields.country is None
        assert fields.has_result is True

    def test_empty_variants_have_no_result(self) -> None:
        assert ClientLocationResponse().fields().has_result is False
        assert HttpJsonResponse().fields().has_result is False


class TestTransportErrors:
    """Tests for TransportError and its throttling subclass."""

    def test_message_includes_transport(self) -> None:
        err = TransportError("nominatim-http", "Provider returned HTTP 500", status_code=500)
        assert str(err) == "nominatim-http: Provider returned HTTP 500"
        assert err.status_code == 500
        assert err.is_throttled is False

    @pytest.mark.parametrize("status_code", [403, 429])
    def test_throttle_codes_promote(self, status_code: int) -> None:
        err = transport_error("nominatim-http", "blocked", status_code=status_code)
        assert isinstance(err, ThrottledError)
        assert err.is_throttled is True

    def test_other_codes_stay_plain(self) -> None:
        err = transport_error("nominatim-http", "bad gateway", status_code=502)
        assert type(err) is TransportError

    def test_no_status(self) -> None:
        err = transport_error("nominatim-client", "connection refused")
        assert err.status_code is None
        assert err.is_throttled is False

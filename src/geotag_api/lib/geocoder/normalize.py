"""Turn raw provider responses into canonical place results."""

from geotag_api.lib.geocoder.base import AddressFields, PlaceResult, RawProviderResponse


def place_name_for(fields: AddressFields, latitude: float, longitude: float) -> str:
    """Pick the display name for a place, first match wins.

    Order: "City, State", city, state, country, formatted address, then the
    coordinates themselves.
    """
    if fields.city and fields.state:
        return f"{fields.city}, {fields.state}"
    if fields.city:
        return fields.city
    if fields.state:
        return fields.state
    if fields.country:
        return fields.country
    if fields.formatted_address:
        return fields.formatted_address
    return f"{latitude}, {longitude}"


def normalize(raw: RawProviderResponse | None, latitude: float, longitude: float) -> PlaceResult | None:
    """Normalize a raw provider response into a PlaceResult.

    Args:
        raw: Response from either transport, or None when the provider had
            no result.
        latitude: Latitude the caller asked for (used for the last-resort name).
        longitude: Longitude the caller asked for.

    Returns:
        PlaceResult, or None when the response carries no result at all.
    """
    if raw is None:
        return None

    fields = raw.fields()
    if not fields.has_result:
        return None

    return PlaceResult(
        place_name=place_name_for(fields, latitude, longitude),
        formatted_address=fields.formatted_address,
        city=fields.city,
        state=fields.state,
        country=fields.country,
    )

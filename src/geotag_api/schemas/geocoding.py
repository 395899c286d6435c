"""Pydantic v2 schemas for reverse geocoding endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from geotag_api.lib.geocoder import PlaceResult


class PlaceResponse(BaseModel):
    """A resolved place for a coordinate pair."""

    model_config = ConfigDict(populate_by_name=True)

    place_name: str = Field(alias="placeName")
    formatted_address: str | None = Field(default=None, alias="formattedAddress")
    city: str | None = None
    state: str | None = None
    country: str | None = None
    latitude: float
    longitude: float

    @classmethod
    def from_result(cls, result: PlaceResult, latitude: float, longitude: float) -> "PlaceResponse":
        return cls(
            place_name=result.place_name,
            formatted_address=result.formatted_address,
            city=result.city,
            state=result.state,
            country=result.country,
            latitude=latitude,
            longitude=longitude,
        )


class AttributionResponse(BaseModel):
    """Data attribution required by the OpenStreetMap licence."""

    attribution: str
    detailed_attribution: str


class CacheStatsResponse(BaseModel):
    """Response for reverse geocoding cache statistics."""

    size: int
    keys: list[str]

"""Reverse geocoding API endpoints - resolve, attribution, and cache diagnostics."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from geotag_api.core.dependencies import get_reverse_geocoder
from geotag_api.schemas.geocoding import AttributionResponse, CacheStatsResponse, PlaceResponse
from geotag_api.services.reverse_geocoding_service import ReverseGeocoder

geocoding_router = APIRouter(prefix="/geocoding", tags=["geocoding"])


@geocoding_router.get(
    "/reverse",
    response_model=PlaceResponse,
    response_model_by_alias=True,
)
async def reverse_geocode(
    lat: float = Query(..., ge=-90, le=90, description="Latitude (-90 to 90)"),  # noqa: B008
    lng: float = Query(..., ge=-180, le=180, description="Longitude (-180 to 180)"),  # noqa: B008
    geocoder: ReverseGeocoder = Depends(get_reverse_geocoder),  # noqa: B008
) -> PlaceResponse:
    """Resolve a coordinate pair to a human-readable place name."""
    result = await geocoder.resolve(lat, lng)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No place name could be resolved for the given coordinates.",
        )
    return PlaceResponse.from_result(result, lat, lng)


@geocoding_router.get("/attribution", response_model=AttributionResponse)
async def attribution(
    geocoder: ReverseGeocoder = Depends(get_reverse_geocoder),  # noqa: B008
) -> AttributionResponse:
    """Return the OpenStreetMap attribution to display alongside place names."""
    return AttributionResponse(
        attribution=geocoder.attribution(),
        detailed_attribution=geocoder.detailed_attribution(),
    )


@geocoding_router.get("/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(
    geocoder: ReverseGeocoder = Depends(get_reverse_geocoder),  # noqa: B008
) -> CacheStatsResponse:
    """Return the size and keys of the reverse geocoding cache."""
    stats = geocoder.cache_stats()
    return CacheStatsResponse(size=stats.size, keys=stats.keys)


@geocoding_router.delete("/cache", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cache(
    geocoder: ReverseGeocoder = Depends(get_reverse_geocoder),  # noqa: B008
) -> Response:
    """Drop every cached result, including negative entries."""
    geocoder.clear_cache()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

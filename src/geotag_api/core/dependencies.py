"""FastAPI dependency injection for the reverse geocoding service."""

from fastapi import HTTPException, Request, status

from geotag_api.services.reverse_geocoding_service import ReverseGeocoder


def get_reverse_geocoder(request: Request) -> ReverseGeocoder:
    """Return the process-wide ReverseGeocoder built during app startup.

    Raises:
        HTTPException: If the service was not initialized.
    """
    geocoder: ReverseGeocoder | None = getattr(request.app.state, "reverse_geocoder", None)
    if geocoder is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Reverse geocoding service is not initialized.",
        )
    return geocoder

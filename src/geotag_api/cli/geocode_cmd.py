"""Reverse geocoding CLI commands."""

import asyncio
import json

import typer

geocode_app = typer.Typer()


@geocode_app.command("reverse")
def reverse_geocode(
    lat: float = typer.Option(..., "--lat", min=-90, max=90, help="Latitude (-90 to 90)"),  # noqa: B008
    lng: float = typer.Option(..., "--lng", min=-180, max=180, help="Longitude (-180 to 180)"),  # noqa: B008
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),  # noqa: FBT001
) -> None:
    """Resolve a coordinate pair to a place name."""
    asyncio.run(_reverse_geocode(lat, lng, as_json))


async def _reverse_geocode(lat: float, lng: float, as_json: bool) -> None:
    """Async implementation of a single reverse geocode."""
    from geotag_api.core.config import get_settings
    from geotag_api.services.reverse_geocoding_service import build_reverse_geocoder

    geocoder = build_reverse_geocoder(get_settings())
    result = await geocoder.resolve(lat, lng)

    if result is None:
        typer.echo(f"No place found for {lat}, {lng}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False))
    else:
        typer.echo(result.place_name)
    typer.echo(geocoder.attribution(), err=True)

"""``geotag-api`` command line: run the HTTP service or resolve coordinates directly."""

import typer

from geotag_api.cli.geocode_cmd import geocode_app
from geotag_api.core.config import get_settings
from geotag_api.core.logging import setup_logging

app = typer.Typer(name="geotag-api", help="Reverse geocoding for geotagged issue reports")
app.add_typer(geocode_app, name="geocode", help="Resolve coordinates to place names")


@app.callback()
def _main_callback(
    log_level: str | None = typer.Option(None, "--log-level", help="Override LOG_LEVEL for this run"),
) -> None:
    """Set up logging before any subcommand runs."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level, log_dir=settings.log_dir)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Restart on source changes"),
    host: str = typer.Option("0.0.0.0", "--host", help="Interface to listen on"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Port to listen on"),
) -> None:
    """Serve the geocoding API with uvicorn.

    Runs a single worker: the result cache and the provider rate gate live
    in process memory.
    """
    import uvicorn

    uvicorn.run(
        "geotag_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=1,
    )

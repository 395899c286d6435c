"""Loguru sinks for the API server and the CLI.

Everything goes to stderr. Records bound with ``json_output=True`` are
also emitted as JSON lines. With a ``log_dir``, the full stream is kept in
``geotag-api.log`` and provider traffic (transport failures, throttling,
cache misses) is split out into ``geocoder.log``.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"

_GEOCODER_MODULES = ("geotag_api.lib.geocoder", "geotag_api.services.reverse_geocoding_service")


def _is_geocoder_record(record: dict) -> bool:
    return (record["name"] or "").startswith(_GEOCODER_MODULES)


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Replace any existing sinks with the geotag-api set.

    Args:
        log_level: Threshold for every sink, any case.
        log_dir: Directory for the rotating file sinks; created if missing.
            Files rotate daily and are kept for a week.
    """
    level = log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT, serialize=False)
    logger.add(
        sys.stderr,
        level=level,
        serialize=True,
        filter=lambda record: record["extra"].get("json_output", False),
    )

    if not log_dir:
        return

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    for filename, record_filter in (("geotag-api.log", None), ("geocoder.log", _is_geocoder_record)):
        logger.add(
            log_path / filename,
            level=level,
            format=_LOG_FORMAT,
            filter=record_filter,
            rotation="24h",
            retention="7 days",
        )

"""Loads bundled airport reference data into the catalog on first run."""

import logging
from pathlib import Path
from typing import Union

from flight_search.services.catalog import AirportCatalog

logger = logging.getLogger(__name__)

AIRPORT_COLUMNS = ("id", "name", "iata_code", "passengers", "destinations")


def parse_airport_row(line: str) -> dict | None:
    """Parse one CSV line into an airport record, or None if malformed."""
    parts = [part.strip() for part in line.split(",")]
    if len(parts) != len(AIRPORT_COLUMNS):
        return None

    try:
        return {
            "id": int(parts[0]),
            "name": parts[1],
            "iata_code": parts[2],
            "passengers": int(parts[3]),
            "destinations": int(parts[4]),
        }
    except ValueError:
        return None


def parse_airports_csv(text: str) -> list[dict]:
    """Parse airport CSV text. The first line is a header.

    Malformed rows (wrong column count, non-numeric id/passengers/destinations)
    are dropped; they never abort the load.
    """
    lines = text.splitlines()
    if not lines:
        return []

    records = []
    for line_number, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        record = parse_airport_row(line)
        if record is None:
            logger.debug("Skipping malformed airport row %d: %r", line_number, line)
            continue
        records.append(record)

    return records


def read_airports_csv(path: Union[str, Path]) -> list[dict]:
    """Read and parse an airport CSV file.

    Lines are decoded one at a time so a row that is not valid UTF-8 is
    skipped like any other malformed row.
    """
    lines = []
    for line_number, raw in enumerate(Path(path).read_bytes().splitlines(), start=1):
        try:
            lines.append(raw.decode("utf-8"))
        except UnicodeDecodeError:
            logger.debug("Skipping undecodable airport row %d", line_number)
            lines.append("")

    return parse_airports_csv("\n".join(lines))


async def load_reference_data(catalog: AirportCatalog, path: Union[str, Path]) -> int:
    """Seed the catalog from ``path`` if it is empty.

    Returns the number of airports inserted. A missing or unreadable file
    is logged and treated as nothing to load.
    """
    if await catalog.count() > 0:
        return 0

    try:
        records = read_airports_csv(path)
    except OSError:
        logger.warning("Could not read airport reference data from %s", path, exc_info=True)
        return 0

    return await catalog.bulk_load(records)

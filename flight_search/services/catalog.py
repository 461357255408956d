"""Read-only airport catalog backed by the ``airport`` table."""

import logging
from typing import Iterable, Mapping, Optional

from sqlalchemy import func, select

from flight_search.database import Database
from flight_search.models import Airport

logger = logging.getLogger(__name__)


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class AirportCatalog:
    """Queries over airport reference data.

    Code and name matching are case-insensitive. Results of the two search
    predicates are ordered by id so repeated queries return the same order.
    """

    def __init__(self, database: Database):
        self._db = database

    async def find_by_code_prefix(self, prefix: str) -> list[Airport]:
        """Airports whose IATA code starts with ``prefix``."""
        stmt = (
            select(Airport)
            .where(Airport.iata_code.ilike(f"{escape_like(prefix)}%", escape="\\"))
            .order_by(Airport.id)
        )
        return await self._all(stmt)

    async def find_by_name_contains(self, substring: str) -> list[Airport]:
        """Airports whose name contains ``substring`` anywhere."""
        stmt = (
            select(Airport)
            .where(Airport.name.ilike(f"%{escape_like(substring)}%", escape="\\"))
            .order_by(Airport.id)
        )
        return await self._all(stmt)

    async def ranked_destinations(self, exclude_id: int) -> list[Airport]:
        """Every other airport, busiest first, ties broken by id."""
        stmt = (
            select(Airport)
            .where(Airport.id != exclude_id)
            .order_by(Airport.passengers.desc(), Airport.id)
        )
        return await self._all(stmt)

    async def list_all(self) -> list[Airport]:
        return await self._all(select(Airport).order_by(Airport.id))

    async def get(self, airport_id: int) -> Optional[Airport]:
        async with self._db.session() as session:
            return await session.get(Airport, airport_id)

    async def count(self) -> int:
        async with self._db.session() as session:
            result = await session.execute(select(func.count()).select_from(Airport))
            return result.scalar_one()

    async def bulk_load(self, records: Iterable[Mapping]) -> int:
        """Insert reference rows unless the catalog already holds data.

        Rows sharing an id collapse to the last one seen. Returns the number
        of rows inserted (0 when the catalog was already populated).
        """
        async with self._db.session() as session:
            result = await session.execute(select(func.count()).select_from(Airport))
            if result.scalar_one() > 0:
                logger.debug("Airport catalog already populated, skipping bulk load")
                return 0

            by_id: dict[int, Airport] = {}
            for record in records:
                by_id[record["id"]] = Airport(
                    id=record["id"],
                    name=record["name"],
                    iata_code=record["iata_code"],
                    passengers=record["passengers"],
                    destinations=record["destinations"],
                )

            session.add_all(by_id.values())
            await session.commit()

        logger.info("Loaded %d airports into catalog", len(by_id))
        return len(by_id)

    async def _all(self, stmt) -> list[Airport]:
        async with self._db.session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

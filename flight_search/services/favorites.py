"""Persistent set of favorited routes."""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from flight_search.database import Database
from flight_search.models import Favorite

logger = logging.getLogger(__name__)


class FavoriteRouteStore:
    """Stores directional (departure, destination) pairs.

    Adding a pair that is already stored is a no-op, so the table never
    holds two rows for the same route.
    """

    def __init__(self, database: Database):
        self._db = database

    async def add(self, departure_code: str, destination_code: str) -> bool:
        """Store a route. Returns False if it was already a favorite."""
        async with self._db.session() as session:
            existing = await self._find(session, departure_code, destination_code)
            if existing is not None:
                return False

            session.add(Favorite(departure_code=departure_code, destination_code=destination_code))
            try:
                await session.commit()
            except IntegrityError:
                # Another writer stored the same pair first
                await session.rollback()
                return False

        logger.debug("Added favorite %s->%s", departure_code, destination_code)
        return True

    async def remove(self, departure_code: str, destination_code: str) -> bool:
        """Delete a route. Returns False if it was not a favorite."""
        async with self._db.session() as session:
            result = await session.execute(
                delete(Favorite).where(
                    Favorite.departure_code == departure_code,
                    Favorite.destination_code == destination_code,
                )
            )
            await session.commit()

        removed = result.rowcount > 0
        if removed:
            logger.debug("Removed favorite %s->%s", departure_code, destination_code)
        return removed

    async def find(self, departure_code: str, destination_code: str) -> Optional[Favorite]:
        async with self._db.session() as session:
            return await self._find(session, departure_code, destination_code)

    async def contains(self, departure_code: str, destination_code: str) -> bool:
        return await self.find(departure_code, destination_code) is not None

    async def list_all(self) -> list[Favorite]:
        """All favorites in the order they were added."""
        async with self._db.session() as session:
            result = await session.execute(select(Favorite).order_by(Favorite.id))
            return list(result.scalars().all())

    @staticmethod
    async def _find(session, departure_code: str, destination_code: str) -> Optional[Favorite]:
        result = await session.execute(
            select(Favorite)
            .where(
                Favorite.departure_code == departure_code,
                Favorite.destination_code == destination_code,
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

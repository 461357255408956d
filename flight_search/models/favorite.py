"""Favorite route model."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from flight_search.database import Base


def route_key(departure_code: str, destination_code: str) -> str:
    """Key for a directional route, e.g. ``"SFO_LAX"``."""
    return f"{departure_code}_{destination_code}"


class Favorite(Base):
    """A route the user has marked as a favorite.

    Routes are directional: SFO to LAX and LAX to SFO are separate rows.
    Membership is binary, so there is no update path; a route is either
    stored or deleted.
    """

    __tablename__ = "favorite"

    # Each ordered pair can only be stored once
    __table_args__ = (
        UniqueConstraint("departure_code", "destination_code", name="uq_favorite_route"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    departure_code: Mapped[str] = mapped_column(String(3), index=True)
    destination_code: Mapped[str] = mapped_column(String(3))

    @property
    def route_key(self) -> str:
        return route_key(self.departure_code, self.destination_code)

    def __repr__(self) -> str:
        return f"<Favorite {self.departure_code}->{self.destination_code}>"

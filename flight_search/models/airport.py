"""Airport database model."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from flight_search.database import Base


class Airport(Base):
    """Airport reference data, loaded once from the bundled dataset."""

    __tablename__ = "airport"

    # Ids come from the reference data, never generated
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(255))
    iata_code: Mapped[str] = mapped_column(String(3), index=True)
    passengers: Mapped[int] = mapped_column(Integer, default=0)

    # Informational only, not used for ranking
    destinations: Mapped[int] = mapped_column(Integer, default=0)

    @property
    def route_label(self) -> str:
        return f"{self.iata_code} - {self.name}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "iata_code": self.iata_code,
            "passengers": self.passengers,
            "destinations": self.destinations,
            "label": self.route_label,
        }

    def __repr__(self) -> str:
        return f"<Airport {self.iata_code} ({self.id})>"

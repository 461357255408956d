"""Key-value user preference model."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from flight_search.database import Base


class Preference(Base):
    """A single named scalar setting, such as the last search text."""

    __tablename__ = "preference"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, default="")

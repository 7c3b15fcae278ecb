"""City model for persisting imported point features."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Float, Index, LargeBinary, String, func
from sqlalchemy.orm import Mapped, mapped_column

from cities_api.database import Base


class City(Base):
    """A named point location.

    ``cartodb_id`` is assigned by the source dataset, not by the database.
    ``geo`` holds the WKB point; ``lon`` and ``lat`` duplicate it so the
    containment query can use a plain B-tree index.
    """

    __tablename__ = "cities"

    cartodb_id: Mapped[int] = mapped_column(
        BigInteger, primary_key=True, autoincrement=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    place_key: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    capital: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    pclass: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    population: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    geo: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    lon: Mapped[float] = mapped_column(Float, nullable=False)
    lat: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (Index("ix_cities_lat_lon", "lat", "lon"),)

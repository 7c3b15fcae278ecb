"""City repository - data access for cities."""

import logging
from collections.abc import Sequence

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cities_api.exceptions import StoreError
from cities_api.geo.types import Ring
from cities_api.models.city import City as CityModel

logger = logging.getLogger(__name__)

# Largest value a BIGINT column can hold
MAX_ID = 2**63 - 1

# Bound on bind parameters per IN clause (SQLite caps them)
ID_CHUNK_SIZE = 500


async def get_city(db: AsyncSession, city_id: str) -> CityModel | None:
    """Get a city by its ``cartodb_id``.

    The id is accepted as a string; anything that is not an integer matches
    no city.
    """
    try:
        cartodb_id = int(city_id)
    except (TypeError, ValueError):
        return None
    if not 0 <= cartodb_id <= MAX_ID:
        return None

    try:
        result = await db.execute(
            select(CityModel).where(CityModel.cartodb_id == cartodb_id)
        )
    except SQLAlchemyError as e:
        raise StoreError(f"error fetching city {city_id}: {e}") from e
    return result.scalar_one_or_none()


async def find_cities_within(db: AsyncSession, ring: Ring) -> Sequence[CityModel]:
    """Find the cities inside a rectangular polygon ring.

    The ring is the closed ``(lon, lat)`` ring produced by
    ``BoundingBox.to_ring``: its first vertex is the south-west corner and its
    second the south-east one. A west edge greater than the east edge means
    the rectangle wraps across the antimeridian.
    """
    if len(ring) != 5 or ring[0] != ring[-1]:
        raise ValueError("ring must be a closed rectangle of 5 points")

    west, south = ring[0]
    east = ring[1][0]
    north = ring[2][1]

    lat_clause = CityModel.lat.between(south, north)
    if west <= east:
        lon_clause = CityModel.lon.between(west, east)
    else:
        lon_clause = or_(CityModel.lon >= west, CityModel.lon <= east)

    try:
        result = await db.execute(select(CityModel).where(and_(lat_clause, lon_clause)))
    except SQLAlchemyError as e:
        raise StoreError(f"error running within query: {e}") from e
    return result.scalars().all()


async def existing_ids(db: AsyncSession, cartodb_ids: Sequence[int]) -> set[int]:
    """Return which of ``cartodb_ids`` are already stored."""
    found: set[int] = set()
    for start in range(0, len(cartodb_ids), ID_CHUNK_SIZE):
        chunk = cartodb_ids[start : start + ID_CHUNK_SIZE]
        try:
            result = await db.execute(
                select(CityModel.cartodb_id).where(CityModel.cartodb_id.in_(chunk))
            )
        except SQLAlchemyError as e:
            raise StoreError(f"error checking existing ids: {e}") from e
        found.update(result.scalars().all())
    return found


async def import_cities(db: AsyncSession, cities: Sequence[CityModel]) -> int:
    """Insert a batch of cities in a single transaction.

    Either every city is stored or, on the first failure, none is.
    """
    try:
        db.add_all(cities)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"error importing batch of {len(cities)} cities: {e}") from e

    logger.info(f"Imported {len(cities)} cities")
    return len(cities)

"""Cities around a reference city.

The search area is the bounding box of the radius, not the circle itself:
cities in the corners of the box are returned too.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cities_api.geo.bounding_box import compute_bounding_box
from cities_api.geo.types import Coordinate
from cities_api.repositories import city as city_repo
from cities_api.schemas.city import CityResponse
from cities_api.services.lookup import to_response

logger = logging.getLogger(__name__)


async def find_around(
    db: AsyncSession, center: CityResponse, radius_km: int
) -> list[CityResponse]:
    """Find every city within ``radius_km`` kilometres of ``center``.

    A radius of 0 returns only the centre city, without querying the store.
    Cities come back in store order. If any city's geometry fails to decode
    the whole query fails with ``GeometryDecodeError``.
    """
    if radius_km == 0:
        return [center]

    lon, lat = center_of(center)
    box = compute_bounding_box(lon, lat, float(radius_km))
    ring = box.to_ring()

    logger.debug(
        f"Within query around city {center.cartodb_id} radius={radius_km}km box={box}"
    )

    cities = await city_repo.find_cities_within(db, ring)
    return [to_response(city) for city in cities]


def center_of(city: CityResponse) -> Coordinate:
    """Position of a city as a ``Coordinate``."""
    return Coordinate(lon=city.coordinates[0], lat=city.coordinates[1])

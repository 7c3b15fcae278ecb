"""Single city lookup by id."""

from sqlalchemy.ext.asyncio import AsyncSession

from cities_api.geo.codec import decode_point
from cities_api.models.city import City as CityModel
from cities_api.repositories import city as city_repo
from cities_api.schemas.city import CityResponse


async def get_city_by_id(db: AsyncSession, city_id: str) -> CityResponse | None:
    """Fetch a city and decode its location.

    Returns None when no city has this id. Store and geometry failures are
    raised, never turned into "not found".
    """
    city = await city_repo.get_city(db, city_id)
    if city is None:
        return None
    return to_response(city)


def to_response(city: CityModel) -> CityResponse:
    """Convert a stored city to its response shape, decoding the WKB point."""
    coordinate = decode_point(city.geo)
    return CityResponse(
        cartodb_id=city.cartodb_id,
        name=city.name,
        population=city.population,
        coordinates=[coordinate.lon, coordinate.lat],
    )

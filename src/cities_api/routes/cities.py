"""City import and lookup endpoints."""

import logging
import re

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.convertors import Convertor, register_url_convertor

from cities_api.database import get_db
from cities_api.exceptions import (
    INVALID_UINT_PARAM,
    TOO_MANY_VALUES,
    UNKNOWN_PARAMS,
    CityNotFoundError,
    QueryParameterError,
)
from cities_api.schemas.city import (
    CitiesResponse,
    CityResponse,
    ImportRequest,
    ImportResponse,
)
from cities_api.services import importer, lookup, proximity

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cities"])

DIST_PARAM = "dist"
MAX_UINT64 = 2**64 - 1
_UINT_RE = re.compile(r"[0-9]+")


class DigitsConvertor(Convertor):
    """Path segment made only of decimal digits, kept as a string."""

    regex = "[0-9]+"

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return str(value)


register_url_convertor("digits", DigitsConvertor())


def parse_uint_param(values: list[str], key: str) -> int:
    """Parse the values of a query string parameter as one unsigned 64-bit int.

    Raises:
        QueryParameterError: If the parameter is repeated or its value is not
            a base-10 unsigned integer.
    """
    if len(values) != 1:
        raise QueryParameterError(TOO_MANY_VALUES.format(key))

    value = values[0]
    if not _UINT_RE.fullmatch(value):
        raise QueryParameterError(INVALID_UINT_PARAM.format(value, key))

    # int() refuses very long digit strings, so bound the length first
    digits = value.lstrip("0") or "0"
    if len(digits) > len(str(MAX_UINT64)) or int(digits) > MAX_UINT64:
        raise QueryParameterError(INVALID_UINT_PARAM.format(value, key))
    return int(digits)


@router.post(
    "/import",
    response_model=ImportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def import_cities(
    payload: ImportRequest,
    db: AsyncSession = Depends(get_db),
) -> ImportResponse:
    """Import a GeoJSON feature collection of cities."""
    imported = await importer.import_features(db, payload)
    return ImportResponse(imported=imported)


@router.get("/id/{city_id:digits}", response_model=CityResponse | CitiesResponse)
async def get_city(
    city_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> CityResponse | CitiesResponse:
    """Get a city, or the cities around it when ``dist`` (km) is given.

    Without ``dist`` the city itself is returned. With ``dist`` the response is
    always a collection, even for ``dist=0``.
    """
    city = await lookup.get_city_by_id(db, city_id)
    if city is None:
        raise CityNotFoundError(city_id)

    params = request.query_params
    if any(key != DIST_PARAM for key in params.keys()):
        raise QueryParameterError(UNKNOWN_PARAMS)

    if DIST_PARAM not in params:
        return city

    dist = parse_uint_param(params.getlist(DIST_PARAM), DIST_PARAM)
    cities = await proximity.find_around(db, city, dist)
    return CitiesResponse(cities=cities)

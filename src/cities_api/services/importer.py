"""Bulk import of GeoJSON city features."""

import logging
from collections import Counter
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from cities_api.exceptions import GeometryEncodeError, UnprocessableImportError
from cities_api.geo.codec import encode_geometry
from cities_api.models.city import City as CityModel
from cities_api.repositories import city as city_repo
from cities_api.schemas.city import Feature, ImportRequest

logger = logging.getLogger(__name__)


def _ensure_utc(dt: datetime | None, default: datetime) -> datetime:
    """Ensure datetime is timezone-aware (UTC), falling back to ``default``."""
    if dt is None:
        return default
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def feature_to_model(feature: Feature, now: datetime) -> CityModel:
    """Build a city row from one feature.

    Raises:
        UnprocessableImportError: If the geometry cannot be encoded.
    """
    props = feature.properties
    try:
        geo = encode_geometry(feature.geometry.model_dump())
    except GeometryEncodeError as e:
        raise UnprocessableImportError(
            f"feature {props.cartodb_id}: {e.message}"
        ) from e

    return CityModel(
        cartodb_id=props.cartodb_id,
        name=props.name,
        place_key=props.place_key,
        capital=props.capital,
        pclass=props.pclass,
        population=props.population,
        geo=geo,
        lon=feature.geometry.coordinates[0],
        lat=feature.geometry.coordinates[1],
        created_at=_ensure_utc(props.created_at, now),
        updated_at=_ensure_utc(props.updated_at, now),
    )


async def import_features(db: AsyncSession, request: ImportRequest) -> int:
    """Store every feature of ``request`` as a city.

    The batch is all-or-nothing: the first invalid feature or store failure
    aborts it. Ids repeated inside the batch or already stored are rejected.
    """
    ids = [feature.properties.cartodb_id for feature in request.features]
    duplicates = sorted(i for i, n in Counter(ids).items() if n > 1)
    if duplicates:
        raise UnprocessableImportError(f"duplicate cartodb_id in batch: {duplicates}")

    already_stored = await city_repo.existing_ids(db, ids)
    if already_stored:
        raise UnprocessableImportError(
            f"cities already exist with cartodb_id: {sorted(already_stored)}"
        )

    now = datetime.now(UTC)
    cities = [feature_to_model(feature, now) for feature in request.features]

    logger.info(f"Importing batch of {len(cities)} cities")
    return await city_repo.import_cities(db, cities)

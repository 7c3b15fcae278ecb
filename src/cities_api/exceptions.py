"""Exception hierarchy for the Cities API.

Each exception carries the HTTP status it maps to. The handlers registered in
``cities_api.main`` are the only code that turns these into responses.
"""

NOT_FOUND_ID = "City with id {} not found"
INVALID_UINT_PARAM = "Invalid uint query string value '{}' for parameter '{}'"
TOO_MANY_VALUES = "Too many values for parameter '{}'"
UNKNOWN_PARAMS = "Unknown query string parameters"
UNPROCESSABLE_ENTITY = "Unprocessable entity: {}"
INTERNAL_ERROR = "Internal server error"


class CitiesError(Exception):
    """Base class for all errors raised by the service."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        """Message safe to send to the client."""
        return self.message


class QueryParameterError(CitiesError):
    """Malformed or conflicting query string parameters."""

    status_code = 400


class CityNotFoundError(CitiesError):
    """No city is stored under the requested id."""

    status_code = 404

    def __init__(self, city_id: str):
        super().__init__(NOT_FOUND_ID.format(city_id))
        self.city_id = city_id


class UnprocessableImportError(CitiesError):
    """The import payload could not be turned into cities."""

    status_code = 422

    def __init__(self, detail: str):
        super().__init__(UNPROCESSABLE_ENTITY.format(detail))
        self.detail = detail


class InternalError(CitiesError):
    """Failures whose detail is logged but never echoed to the client."""

    @property
    def public_message(self) -> str:
        return INTERNAL_ERROR


class StoreError(InternalError):
    """The backing store failed to answer a request."""


class GeometryDecodeError(InternalError):
    """Stored geometry bytes are not a valid WKB point."""


class GeometryEncodeError(InternalError):
    """A geometry could not be encoded to WKB."""

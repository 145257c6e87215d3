from typing import Optional

DEFAULT_ERROR_MESSAGE = "GeoServer Response Error"


class GeoServerClientError(Exception):
    """Base error for client failures."""


class GeoServerConnectionError(GeoServerClientError):
    """The server could not be reached (refused, timed out, broken transport)."""


class GeoServerResponseError(GeoServerClientError):
    def __init__(
        self,
        message: Optional[str] = None,
        geoserver_output: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        self.message = message or DEFAULT_ERROR_MESSAGE
        super().__init__(self.message)
        # raw response text, useful for debugging
        self.geoserver_output = geoserver_output
        self.status_code = status_code
        self.method = method
        self.url = url

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.status_code} {self.method} {self.url}: {self.message}"


class GeoServerConflictError(GeoServerResponseError):
    """
    Request rejected for a known domain reason: the resource already exists,
    dependent objects block a deletion, or the resource is protected.
    """


class GeoServerParseError(GeoServerClientError):
    """Response body (or a fetched representation) lacks the expected shape."""


__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "GeoServerClientError",
    "GeoServerConnectionError",
    "GeoServerResponseError",
    "GeoServerConflictError",
    "GeoServerParseError",
]

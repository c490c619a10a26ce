"""Exceptions raised by the geocoding client."""


class GeocodingError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(GeocodingError, ValueError):
    """Raised before any network activity for an unsupported format, request
    parameter or API key."""


class TransportError(GeocodingError):
    """Raised when the HTTP round trip fails: connection error, timeout or a
    non-success status code."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(GeocodingError, ValueError):
    """Raised when a response body does not match the expected JSON/XML shape."""


class ServiceStatusError(GeocodingError):
    """Raised by ``GeocodeResponse.raise_for_status`` for a failing service status."""

    def __init__(self, status: str, error_message: str | None = None):
        message = f"Geocoding service returned {status}"
        if error_message:
            message = f"{message}: {error_message}"
        super().__init__(message)
        self.status = status
        self.error_message = error_message

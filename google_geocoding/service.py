"""Geocoding service using the Google Maps Geocoding API"""

import abc
import logging
import math
from decimal import Decimal
from urllib.parse import quote, unquote_plus

import httpx

from . import parsing
from .config import GeocodingEndpoint, settings
from .errors import InvalidArgumentError, TransportError
from .models import GeocodeResponse, RequestParam, ResponseFormat

logger = logging.getLogger(__name__)


class GeocodingClient(abc.ABC):
    """
    Capability interface for geocoding clients.

    ``*_raw`` methods return the response body untouched; the other forms
    return a parsed GeocodeResponse. Every blocking method has an awaitable
    ``*_async`` twin with the same contract.
    """

    @property
    @abc.abstractmethod
    def api_key(self) -> str:
        raise NotImplementedError

    @abc.abstractmethod
    def geocode_raw(self, address: str, response_format: ResponseFormat | str) -> str:
        raise NotImplementedError

    @abc.abstractmethod
    def geocode(self, address: str, response_format: ResponseFormat | str = ResponseFormat.JSON) -> GeocodeResponse:
        raise NotImplementedError

    @abc.abstractmethod
    def reverse_geocode_raw(self, latitude: float, longitude: float, response_format: ResponseFormat | str) -> str:
        raise NotImplementedError

    @abc.abstractmethod
    def reverse_geocode(
        self, latitude: float, longitude: float, response_format: ResponseFormat | str = ResponseFormat.JSON
    ) -> GeocodeResponse:
        raise NotImplementedError

    @abc.abstractmethod
    async def geocode_raw_async(self, address: str, response_format: ResponseFormat | str) -> str:
        raise NotImplementedError

    @abc.abstractmethod
    async def geocode_async(
        self, address: str, response_format: ResponseFormat | str = ResponseFormat.JSON
    ) -> GeocodeResponse:
        raise NotImplementedError

    @abc.abstractmethod
    async def reverse_geocode_raw_async(
        self, latitude: float, longitude: float, response_format: ResponseFormat | str
    ) -> str:
        raise NotImplementedError

    @abc.abstractmethod
    async def reverse_geocode_async(
        self, latitude: float, longitude: float, response_format: ResponseFormat | str = ResponseFormat.JSON
    ) -> GeocodeResponse:
        raise NotImplementedError

    @abc.abstractmethod
    def from_json(self, text: str) -> GeocodeResponse:
        raise NotImplementedError

    @abc.abstractmethod
    def from_xml(self, text: str) -> GeocodeResponse:
        raise NotImplementedError


class Geocoder(GeocodingClient):
    """
    Google Maps geocoding client.

    Holds nothing but an immutable API key and configuration, so a single
    instance can be shared between threads and tasks. Each request opens
    its own HTTP client and closes it before returning.
    """

    def __init__(
        self,
        api_key: str,
        timeout: float | None = None,
        endpoint: GeocodingEndpoint | None = None,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize geocoder

        Args:
            api_key: Google Maps API key, appended to every request
            timeout: Request timeout in seconds (defaults to GEOCODING_TIMEOUT)
            endpoint: Wire constants, mostly useful to target a fixture server
            transport: httpx transport used by blocking calls
            async_transport: httpx transport used by async calls
        """
        if not isinstance(api_key, str) or not api_key.strip():
            raise InvalidArgumentError("Google Maps API key required")

        self._api_key = api_key
        self.timeout = timeout if timeout is not None else settings.GEOCODING_TIMEOUT
        self.endpoint = endpoint or GeocodingEndpoint(base_url=settings.GEOCODING_BASE_URL)
        self._transport = transport
        self._async_transport = async_transport

    @classmethod
    def from_settings(cls, **kwargs) -> "Geocoder":
        """Build a geocoder from GOOGLE_MAPS_API_KEY"""
        if not settings.GOOGLE_MAPS_API_KEY:
            raise InvalidArgumentError(
                "Google Maps API key required. Set GOOGLE_MAPS_API_KEY environment variable"
            )
        return cls(settings.GOOGLE_MAPS_API_KEY, **kwargs)

    @property
    def api_key(self) -> str:
        return self._api_key

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.endpoint.base_url!r}, timeout={self.timeout})"

    # Request building

    def build_request_url(
        self, response_format: ResponseFormat | str, request_param: RequestParam | str, value: str
    ) -> str:
        """
        Assemble the request URL.

        Order is fixed: base endpoint, format segment, parameter key, value,
        key parameter, API key. The value is trimmed and URL-decoded first,
        then re-encoded so the result is always a valid URI.
        """
        response_format = parsing.coerce_format(response_format)
        request_param = _coerce_param(request_param)
        if not isinstance(value, str):
            raise InvalidArgumentError(f"Request value must be a string, got {type(value).__name__}")

        if response_format is ResponseFormat.XML:
            format_segment = self.endpoint.xml_path
        else:
            format_segment = self.endpoint.json_path

        if request_param is RequestParam.LATLNG:
            param_segment = self.endpoint.latlng_param
        else:
            param_segment = self.endpoint.address_param

        decoded = unquote_plus(value.strip())

        return (
            f"{self.endpoint.base_url}"
            f"{format_segment}"
            f"{param_segment}"
            f"{quote(decoded, safe=',')}"
            f"{self.endpoint.key_param}"
            f"{quote(self._api_key, safe='')}"
        )

    @staticmethod
    def format_latlng(latitude: float, longitude: float) -> str:
        """Render ``"lat,lng"`` with ``.`` as decimal separator and no exponent"""
        return f"{_format_coordinate(latitude)},{_format_coordinate(longitude)}"

    # Blocking API

    def geocode_raw(self, address: str, response_format: ResponseFormat | str) -> str:
        url = self.build_request_url(response_format, RequestParam.ADDRESS, address)
        return self._get(url)

    def geocode(self, address: str, response_format: ResponseFormat | str = ResponseFormat.JSON) -> GeocodeResponse:
        """
        Convert address to coordinates (forward geocoding)

        Args:
            address: Address string to geocode
            response_format: Wire format to request; the matching parser is used

        Returns:
            GeocodeResponse with status and matched results
        """
        response_format = parsing.coerce_format(response_format)
        return parsing.parse(self.geocode_raw(address, response_format), response_format)

    def reverse_geocode_raw(self, latitude: float, longitude: float, response_format: ResponseFormat | str) -> str:
        url = self.build_request_url(response_format, RequestParam.LATLNG, self.format_latlng(latitude, longitude))
        return self._get(url)

    def reverse_geocode(
        self, latitude: float, longitude: float, response_format: ResponseFormat | str = ResponseFormat.JSON
    ) -> GeocodeResponse:
        """
        Convert coordinates to address (reverse geocoding)

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees
            response_format: Wire format to request; the matching parser is used

        Returns:
            GeocodeResponse with status and matched results
        """
        response_format = parsing.coerce_format(response_format)
        return parsing.parse(self.reverse_geocode_raw(latitude, longitude, response_format), response_format)

    # Async API

    async def geocode_raw_async(self, address: str, response_format: ResponseFormat | str) -> str:
        url = self.build_request_url(response_format, RequestParam.ADDRESS, address)
        return await self._get_async(url)

    async def geocode_async(
        self, address: str, response_format: ResponseFormat | str = ResponseFormat.JSON
    ) -> GeocodeResponse:
        response_format = parsing.coerce_format(response_format)
        text = await self.geocode_raw_async(address, response_format)
        return parsing.parse(text, response_format)

    async def reverse_geocode_raw_async(
        self, latitude: float, longitude: float, response_format: ResponseFormat | str
    ) -> str:
        url = self.build_request_url(response_format, RequestParam.LATLNG, self.format_latlng(latitude, longitude))
        return await self._get_async(url)

    async def reverse_geocode_async(
        self, latitude: float, longitude: float, response_format: ResponseFormat | str = ResponseFormat.JSON
    ) -> GeocodeResponse:
        response_format = parsing.coerce_format(response_format)
        text = await self.reverse_geocode_raw_async(latitude, longitude, response_format)
        return parsing.parse(text, response_format)

    # Parsing

    def from_json(self, text: str) -> GeocodeResponse:
        return parsing.from_json(text)

    def from_xml(self, text: str) -> GeocodeResponse:
        return parsing.from_xml(text)

    # Transport

    def _get(self, url: str) -> str:
        logger.debug(f"Geocoding request: GET {self._redact(url)}")
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(url)
                response.raise_for_status()
                return response.text
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise self._transport_error(e) from e

    async def _get_async(self, url: str) -> str:
        logger.debug(f"Geocoding request (async): GET {self._redact(url)}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._async_transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise self._transport_error(e) from e

    def _transport_error(self, error: httpx.HTTPError | httpx.InvalidURL) -> TransportError:
        status_code = None
        if isinstance(error, httpx.HTTPStatusError):
            status_code = error.response.status_code
            message = f"Geocoding service responded with HTTP {status_code}"
        else:
            message = f"Failed to reach geocoding service: {self._redact(str(error))}"
        logger.error(message)
        return TransportError(message, status_code=status_code)

    def _redact(self, text: str) -> str:
        return text.replace(quote(self._api_key, safe=""), "***").replace(self._api_key, "***")


def _coerce_param(request_param: RequestParam | str) -> RequestParam:
    try:
        return RequestParam(request_param)
    except ValueError:
        raise InvalidArgumentError(f"Unsupported param type {request_param!r}") from None


def _format_coordinate(value: float) -> str:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Coordinate must be a number, got {value!r}") from None
    if not math.isfinite(value):
        raise InvalidArgumentError(f"Coordinate must be finite, got {value!r}")
    return format(Decimal(repr(value)), "f")

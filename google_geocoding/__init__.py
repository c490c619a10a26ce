"""Google Maps geocoding client package"""

from .config import GeocodingEndpoint, Settings, settings
from .errors import GeocodingError, InvalidArgumentError, ParseError, ServiceStatusError, TransportError
from .models import (
    AddressComponent,
    GeocodeResponse,
    GeocodeResult,
    GeoPoint,
    Geometry,
    PlusCode,
    RequestParam,
    ResponseFormat,
    Viewport,
)
from .parsing import from_json, from_xml
from .service import Geocoder, GeocodingClient

__all__ = [
    "AddressComponent",
    "GeocodeResponse",
    "GeocodeResult",
    "Geocoder",
    "GeocodingClient",
    "GeocodingEndpoint",
    "GeocodingError",
    "GeoPoint",
    "Geometry",
    "InvalidArgumentError",
    "ParseError",
    "PlusCode",
    "RequestParam",
    "ResponseFormat",
    "ServiceStatusError",
    "Settings",
    "TransportError",
    "Viewport",
    "from_json",
    "from_xml",
    "settings",
]

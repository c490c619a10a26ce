"""Pydantic models for geocoding"""

from enum import Enum

from pydantic import BaseModel, Field

from .errors import ServiceStatusError


class ResponseFormat(str, Enum):
    """Wire encoding requested from the service"""

    JSON = "json"
    XML = "xml"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


class RequestParam(str, Enum):
    """Which query parameter carries the lookup value"""

    ADDRESS = "address"
    LATLNG = "latlng"


class GeoPoint(BaseModel):
    """Geographic coordinates (ranges are not enforced)"""

    lat: float
    lng: float

    @property
    def latitude(self) -> float:
        return self.lat

    @property
    def longitude(self) -> float:
        return self.lng

    def as_tuple(self) -> tuple[float, float]:
        return self.lat, self.lng


class Viewport(BaseModel):
    northeast: GeoPoint
    southwest: GeoPoint


class Geometry(BaseModel):
    location: GeoPoint
    location_type: str | None = None
    viewport: Viewport | None = None
    bounds: Viewport | None = None


class AddressComponent(BaseModel):
    """Structured address component"""

    long_name: str
    short_name: str
    types: list[str] = Field(default_factory=list)


class PlusCode(BaseModel):
    global_code: str | None = None
    compound_code: str | None = None


class GeocodeResult(BaseModel):
    """A single match returned by the service"""

    formatted_address: str
    geometry: Geometry
    address_components: list[AddressComponent] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)
    place_id: str | None = None
    partial_match: bool = False
    plus_code: PlusCode | None = None
    postcode_localities: list[str] = Field(default_factory=list)

    def component(self, component_type: str) -> AddressComponent | None:
        """Return the first address component tagged with ``component_type``"""
        for component in self.address_components:
            if component_type in component.types:
                return component
        return None


class GeocodeResponse(BaseModel):
    """Complete geocoding response (status plus zero or more results)"""

    status: str
    results: list[GeocodeResult] = Field(default_factory=list)
    error_message: str | None = None
    plus_code: PlusCode | None = None

    @property
    def ok(self) -> bool:
        return self.status == "OK"

    @property
    def first(self) -> GeocodeResult | None:
        return self.results[0] if self.results else None

    def raise_for_status(self) -> "GeocodeResponse":
        """
        Raise ServiceStatusError unless the service reported OK or ZERO_RESULTS.

        Returns the response itself so calls can be chained.
        """
        if self.status not in ("OK", "ZERO_RESULTS"):
            raise ServiceStatusError(self.status, self.error_message)
        return self

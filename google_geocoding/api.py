"""Geocoding endpoints"""

from fastapi import APIRouter, Depends, HTTPException, Query

from .config import settings
from .errors import InvalidArgumentError, ParseError, TransportError
from .models import GeocodeResponse, ResponseFormat
from .service import Geocoder, GeocodingClient

router = APIRouter(prefix="/geocoding", tags=["geocoding"])

# Global geocoder (created on first request)
_geocoder = None


def get_geocoder() -> GeocodingClient:
    """Get geocoder instance"""
    global _geocoder
    if _geocoder is None:
        if not settings.GOOGLE_MAPS_API_KEY:
            raise HTTPException(
                status_code=503,
                detail="Geocoding service not configured. GOOGLE_MAPS_API_KEY required."
            )
        _geocoder = Geocoder.from_settings()
    return _geocoder


def _to_http_error(error: Exception) -> HTTPException:
    if isinstance(error, InvalidArgumentError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, TransportError):
        return HTTPException(status_code=502, detail=f"Failed to reach geocoding service: {error}")
    return HTTPException(status_code=502, detail=f"Unreadable geocoding response: {error}")


@router.get("/forward", response_model=GeocodeResponse)
async def geocode_address(
    address: str = Query(..., description="Address to geocode", min_length=1),
    format: ResponseFormat = Query(ResponseFormat.JSON, description="Wire format requested upstream"),
    geocoder: GeocodingClient = Depends(get_geocoder),
):
    """
    Forward geocoding: Convert address to coordinates

    Example: /geocoding/forward?address=1600%20Amphitheatre%20Parkway
    """
    try:
        return await geocoder.geocode_async(address, format)
    except (InvalidArgumentError, TransportError, ParseError) as e:
        raise _to_http_error(e) from e


@router.get("/reverse", response_model=GeocodeResponse)
async def reverse_geocode(
    lat: float = Query(..., description="Latitude in decimal degrees"),
    lon: float = Query(..., description="Longitude in decimal degrees"),
    format: ResponseFormat = Query(ResponseFormat.JSON, description="Wire format requested upstream"),
    geocoder: GeocodingClient = Depends(get_geocoder),
):
    """
    Reverse geocoding: Convert coordinates to address

    Example: /geocoding/reverse?lat=40.714224&lon=-73.961452
    """
    try:
        return await geocoder.reverse_geocode_async(lat, lon, format)
    except (InvalidArgumentError, TransportError, ParseError) as e:
        raise _to_http_error(e) from e

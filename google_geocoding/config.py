import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load .env file
load_dotenv()

DEFAULT_BASE_URL = "https://maps.googleapis.com/maps/api/geocode/"


class Settings:
    # Google Maps API
    GOOGLE_MAPS_API_KEY: str = os.getenv("GOOGLE_MAPS_API_KEY", "")

    # Geocoding endpoint
    GEOCODING_BASE_URL: str = os.getenv("GEOCODING_BASE_URL", DEFAULT_BASE_URL)
    GEOCODING_TIMEOUT: float = float(os.getenv("GEOCODING_TIMEOUT", "10"))


class GeocodingEndpoint(BaseModel):
    """Wire contract with the geocoding service.

    The pieces are concatenated verbatim, so each one carries its own
    separator (``?``, ``=``, ``&``).
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BASE_URL
    json_path: str = "json?"
    xml_path: str = "xml?"
    address_param: str = "address="
    latlng_param: str = "latlng="
    key_param: str = "&key="


settings = Settings()

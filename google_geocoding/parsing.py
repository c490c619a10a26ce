"""
Response parsing for geocoding payloads.

Both wire formats end up validated by the same GeocodeResponse model:
JSON goes straight through pydantic, XML is first folded into the
equivalent mapping (repeated elements become lists under their JSON names).
"""

import logging
import xml.etree.ElementTree as ET

from pydantic import ValidationError

from .errors import InvalidArgumentError, ParseError
from .models import GeocodeResponse, ResponseFormat

logger = logging.getLogger(__name__)

XML_ROOT_TAG = "GeocodeResponse"

# Repeated XML elements and the JSON list each one maps to
XML_LIST_TAGS = {
    "result": "results",
    "type": "types",
    "address_component": "address_components",
    "postcode_locality": "postcode_localities",
}


def from_json(text: str) -> GeocodeResponse:
    """Deserialize a JSON body into a GeocodeResponse"""
    try:
        return GeocodeResponse.model_validate_json(text)
    except ValidationError as e:
        logger.error(f"Failed to parse JSON geocode response: {e}")
        raise ParseError(f"Invalid JSON geocode response: {e}") from e


def from_xml(text: str) -> GeocodeResponse:
    """Deserialize an XML body into a GeocodeResponse"""
    try:
        root = ET.fromstring(text.encode("utf-8"))
    except ET.ParseError as e:
        logger.error(f"Failed to parse XML geocode response: {e}")
        raise ParseError(f"Malformed XML geocode response: {e}") from e

    if root.tag != XML_ROOT_TAG:
        message = f"Unexpected XML root element <{root.tag}>, expected <{XML_ROOT_TAG}>"
        logger.error(f"Failed to parse XML geocode response: {message}")
        raise ParseError(message)

    try:
        return GeocodeResponse.model_validate(_element_to_dict(root))
    except ValidationError as e:
        logger.error(f"Failed to parse XML geocode response: {e}")
        raise ParseError(f"Invalid XML geocode response: {e}") from e


def parse(text: str, response_format: ResponseFormat | str) -> GeocodeResponse:
    """Dispatch to the parser matching ``response_format``"""
    response_format = coerce_format(response_format)
    if response_format is ResponseFormat.XML:
        return from_xml(text)
    return from_json(text)


def coerce_format(response_format: ResponseFormat | str) -> ResponseFormat:
    try:
        return ResponseFormat(response_format)
    except ValueError:
        raise InvalidArgumentError(f"Unsupported format type {response_format!r}") from None


def _element_to_dict(element: ET.Element) -> dict:
    data: dict = {}
    for child in element:
        if len(child):
            value = _element_to_dict(child)
        else:
            value = (child.text or "").strip()

        list_key = XML_LIST_TAGS.get(child.tag)
        if list_key:
            data.setdefault(list_key, []).append(value)
        else:
            data[child.tag] = value
    return data

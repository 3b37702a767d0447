"""
VIN decoder using NHTSA vPIC API (free, no auth required).

Decodes a validated VIN to make/model/year/engine details. The DecodeVin
endpoint returns a flat list of {Variable, Value} pairs whose contents vary
by vehicle type, so any attribute that is missing or blank falls back to
the UNKNOWN placeholder instead of failing the decode.
"""

import logging
from typing import Any

from vinlookup.config import settings
from vinlookup.errors import DecodeError, MalformedResponseError, UpstreamError
from vinlookup.schemas.vehicle import UNKNOWN, VehicleAttributes
from vinlookup.utils.http import fetch_json
from vinlookup.utils.vin import VinCode

logger = logging.getLogger(__name__)

# vPIC variable name -> VehicleAttributes field
DECODE_FIELDS: dict[str, str] = {
    "Make": "make",
    "Model": "model",
    "Model Year": "model_year",
    "Body Class": "body_class",
    "Engine Number of Cylinders": "engine_cylinders",
    "Displacement (in Liters)": "engine_displacement_l",
    "Fuel Type - Primary": "fuel_type_primary",
    "Plant Country": "plant_country",
}


def _clean(val: Any) -> str:
    if val is None:
        return UNKNOWN
    text = str(val).strip()
    return text or UNKNOWN


def parse_decode_response(vin: str, data: Any) -> VehicleAttributes:
    """
    Map a vPIC DecodeVin response onto VehicleAttributes.

    Raises MalformedResponseError when the envelope is wrong (no Results
    list) or a row names its Variable with something other than a string;
    individual missing variables become UNKNOWN.
    """
    if not isinstance(data, dict) or not isinstance(data.get("Results"), list):
        raise MalformedResponseError("Decode response has no Results list")

    values: dict[str, Any] = {}
    for row in data["Results"]:
        if not isinstance(row, dict) or "Variable" not in row:
            continue
        variable = row["Variable"]
        if not isinstance(variable, str):
            raise MalformedResponseError(f"Decode row has a non-string Variable: {variable!r}")
        values.setdefault(variable, row.get("Value"))

    error_code = _clean(values.get("Error Code"))
    if error_code not in (UNKNOWN, "0"):
        # Partial decodes are still useful; surface the upstream note in the logs only
        logger.warning(f"NHTSA decode warning for {vin}: {_clean(values.get('Error Text'))}")

    return VehicleAttributes(
        vin=vin,
        **{field: _clean(values.get(variable)) for variable, field in DECODE_FIELDS.items()},
    )


async def decode_vin(vin: VinCode) -> VehicleAttributes:
    """Decode a VIN using NHTSA vPIC API. Raises DecodeError on any upstream failure."""
    url = settings.decode_api_url.format(vin=vin)
    try:
        data = await fetch_json(url)
        return parse_decode_response(vin, data)
    except UpstreamError as e:
        logger.error(f"NHTSA decode failed for VIN {vin}: {e.message}")
        raise DecodeError(vin, e) from e

"""
VIN API routes.

Provides VIN -> vehicle info, full resolution (vehicle + recalls) and
bulk CSV decoding using the NHTSA free APIs.
"""

import logging

from fastapi import APIRouter, HTTPException, Query, Request

from vinlookup.errors import DecodeError
from vinlookup.schemas.vehicle import BatchResult, ResolutionOutcome, VehicleAttributes
from vinlookup.services.batch import resolve_batch
from vinlookup.services.resolver import decode_error_info, resolve_vin
from vinlookup.services.vin_decoder import decode_vin
from vinlookup.utils.vin import InvalidVin, check_vin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vin", tags=["vin"])


@router.get("/decode", response_model=VehicleAttributes)
async def decode_vin_endpoint(
    vin: str = Query(..., description="17-character VIN to decode"),
):
    """Decode a VIN to make/model/year/engine using NHTSA vPIC API (free, no auth)."""
    checked = check_vin(vin)
    if isinstance(checked, InvalidVin):
        raise HTTPException(status_code=422, detail=checked.reason)

    try:
        return await decode_vin(checked)
    except DecodeError as e:
        raise HTTPException(status_code=502, detail=decode_error_info(e).model_dump()) from e


@router.get("/resolve", response_model=ResolutionOutcome)
async def resolve_vin_endpoint(
    vin: str = Query(..., description="VIN to decode and check for open recalls"),
):
    """
    Decode a VIN and look up its recalls.

    Always 200: the body's `status` says whether the lookup fully succeeded,
    decoded without recall data ("partial"), or failed.
    """
    return await resolve_vin(vin)


@router.post("/batch", response_model=BatchResult)
async def batch_decode_endpoint(request: Request):
    """
    Decode up to 50 VINs from raw CSV text (comma and/or newline separated).

    Recalls are not looked up in bulk mode.
    """
    body = await request.body()
    text = body.decode("utf-8", errors="replace")
    return await resolve_batch(text)

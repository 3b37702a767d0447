"""
Recall proxy route.

Thin forwarding shim to the NHTSA recall API for browser clients that
cannot call it directly. The upstream status and JSON body are relayed
verbatim.
"""

import logging

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from vinlookup.config import settings
from vinlookup.errors import UpstreamError
from vinlookup.utils.http import fetch_json_with_status
from vinlookup.utils.vin import normalize_vin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["recalls"])


@router.get("/recalls")
async def proxy_recalls(
    vin: str | None = Query(None, description="VIN to look up"),
    make: str | None = Query(None),
    model: str | None = Query(None),
    year: str | None = Query(None),
    model_year: str | None = Query(None, alias="modelYear"),
):
    """Forward a recall query (by VIN, or by make/model/year) to NHTSA."""
    vin = normalize_vin(vin)
    year = (year or model_year or "").strip()

    if vin:
        url, params = settings.recall_by_vin_url, {"vin": vin}
    elif make and model and year:
        url, params = settings.recall_by_vehicle_url, {"make": make.strip(), "model": model.strip(), "modelYear": year}
    else:
        return JSONResponse(status_code=400, content={"error": "vin or make, model and year query params are required"})

    logger.info(f"Fetching recalls from: {url} {params}")
    try:
        data, status_code = await fetch_json_with_status(url, params=params, timeout=settings.request_timeout)
    except UpstreamError as e:
        logger.error(f"Error fetching recalls: {e.message}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch recalls from NHTSA"})

    return JSONResponse(status_code=status_code, content=data)

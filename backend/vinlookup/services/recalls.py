"""
NHTSA recall lookups.

Two query strategies are supported: by VIN (most specific) and by
year/make/model. lookup_recalls() applies the fallback policy: the VIN query
first, then exactly one year/make/model query using the decoded vehicle.
A successful empty list means "no open recalls"; a RecallLookupError means
the recall state is unknown. The two are never conflated.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any

from vinlookup.config import settings
from vinlookup.errors import DecodeError, MalformedResponseError, RecallLookupError, UpstreamError
from vinlookup.schemas.vehicle import RecallAttempt, RecallRecord, VehicleAttributes
from vinlookup.utils.http import fetch_json
from vinlookup.utils.vin import VinCode

logger = logging.getLogger(__name__)


def _text(val: Any) -> str | None:
    if val is None:
        return None
    text = str(val).strip()
    return text or None


def _parse_record(item: Any) -> RecallRecord:
    if not isinstance(item, dict):
        raise MalformedResponseError("Recall entry is not an object")
    return RecallRecord(
        campaign_number=_text(item.get("NHTSACampaignNumber")) or "",
        report_received_date=_text(item.get("ReportReceivedDate")) or "",
        component=_text(item.get("Component")) or "",
        summary=_text(item.get("Summary")) or "",
        consequence=_text(item.get("Consequence")),
        manufacturer_recall_number=_text(item.get("ManufacturerRecallNo")),
        initiator=_text(item.get("RecallInitiator")),
    )


def parse_recall_response(data: Any) -> list[RecallRecord]:
    """
    Parse a recall response body into RecallRecords.

    The recall API has returned both "results" and "Results" over time;
    either key is accepted.
    """
    if not isinstance(data, dict):
        raise MalformedResponseError("Recall response is not an object")
    results = data.get("results", data.get("Results"))
    if not isinstance(results, list):
        raise MalformedResponseError("Recall response has no results list")
    return [_parse_record(item) for item in results]


async def recalls_by_vin(vin: VinCode) -> list[RecallRecord]:
    """Fetch recalls for a single VIN. Raises UpstreamError subclasses on failure."""
    data = await fetch_json(settings.recall_by_vin_url, params={"vin": vin})
    return parse_recall_response(data)


async def recalls_by_vehicle(make: str, model: str, year: str) -> list[RecallRecord]:
    """Fetch recalls by year/make/model. Make and model are sent lower-cased."""
    params = {
        "make": make.strip().lower(),
        "model": model.strip().lower(),
        settings.recall_year_param: year.strip(),
    }
    data = await fetch_json(settings.recall_by_vehicle_url, params=params)
    return parse_recall_response(data)


def _attempt(strategy: str, error: UpstreamError) -> RecallAttempt:
    return RecallAttempt(strategy=strategy, kind=error.kind, message=error.message, status_code=error.status_code)


async def lookup_recalls(
    vin: VinCode,
    vehicle: Awaitable[VehicleAttributes],
    cancel: asyncio.Event | None = None,
) -> tuple[list[RecallRecord], str]:
    """
    Resolve recalls for a VIN, falling back to year/make/model.

    `vehicle` is awaited only if the VIN query fails, so the caller can pass
    an in-flight decode task and let the VIN query run alongside it.

    Returns (recalls, strategy) where strategy is "vin" or "vehicle".
    Raises RecallLookupError when no strategy produced an answer.
    """
    try:
        return await recalls_by_vin(vin), "vin"
    except UpstreamError as e:
        first = _attempt("vin", e)
        logger.info(f"Recall lookup by VIN failed for {vin} ({e.message}), trying year/make/model")

    if cancel is not None and cancel.is_set():
        raise RecallLookupError(vin, [first], message="Recall lookup cancelled before year/make/model fallback")

    try:
        attrs = await vehicle
    except DecodeError as e:
        raise RecallLookupError(
            vin, [first], message=f"Recall lookup by VIN failed and decode failed ({e.cause.message})"
        ) from e

    if not attrs.has_year_make_model:
        raise RecallLookupError(
            vin, [first], message="Recall lookup by VIN failed and year/make/model is unknown"
        )

    try:
        recalls = await recalls_by_vehicle(attrs.make, attrs.model, attrs.model_year)
    except UpstreamError as e:
        logger.warning(f"Recall lookup by year/make/model also failed for {vin}: {e.message}")
        raise RecallLookupError(vin, [first, _attempt("vehicle", e)]) from e

    return recalls, "vehicle"

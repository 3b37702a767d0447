"""
Single-VIN resolution: validate, decode, and look up recalls.

Decode and the recall-by-VIN query are issued concurrently. Only the
year/make/model fallback waits for decode. The result is always one of the
tagged ResolutionOutcome variants; nothing is raised for upstream failures.
"""

import asyncio
import logging

from vinlookup.errors import DecodeError, RecallLookupError
from vinlookup.schemas.vehicle import (
    ErrorInfo,
    ResolutionFailure,
    ResolutionOutcome,
    ResolutionPartial,
    ResolutionSuccess,
)
from vinlookup.services.recalls import lookup_recalls
from vinlookup.services.vin_decoder import decode_vin
from vinlookup.utils.vin import InvalidVin, check_vin

logger = logging.getLogger(__name__)


def decode_error_info(error: DecodeError) -> ErrorInfo:
    """Convert a DecodeError into the serializable form used in outcomes."""
    return ErrorInfo(kind=error.kind, message=error.cause.message, status_code=error.cause.status_code)


async def resolve_vin(raw: str, cancel: asyncio.Event | None = None) -> ResolutionOutcome:
    """Resolve one raw VIN string into a ResolutionOutcome."""
    checked = check_vin(raw)
    if isinstance(checked, InvalidVin):
        return ResolutionFailure(vin=checked.raw, error=ErrorInfo(kind="invalid_vin", message=checked.reason))

    vin = checked
    decode_task = asyncio.create_task(decode_vin(vin))
    recall_task = asyncio.create_task(lookup_recalls(vin, decode_task, cancel=cancel))

    try:
        try:
            vehicle = await decode_task
        except DecodeError as e:
            return ResolutionFailure(vin=vin, error=decode_error_info(e))

        try:
            recalls, source = await recall_task
        except RecallLookupError as e:
            logger.warning(f"Recalls unavailable for {vin}: {e.message}")
            return ResolutionPartial(
                vehicle=vehicle,
                recall_error=ErrorInfo(kind="recalls_unavailable", message=e.message, attempts=e.attempts),
            )
    finally:
        # Neither task outlives this call
        for task in (recall_task, decode_task):
            if not task.done():
                task.cancel()
        await asyncio.gather(recall_task, decode_task, return_exceptions=True)

    return ResolutionSuccess(vehicle=vehicle, recalls=recalls, recall_source=source)

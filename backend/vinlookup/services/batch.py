"""
Bulk VIN decoding for CSV submissions.

Tokens are capped and validated before any request goes out, then the
valid VINs are decoded in parallel behind a semaphore. Recalls are not
looked up in bulk mode. Every VIN yields its own typed item, so one failed
decode never fails the batch.
"""

import asyncio
import logging

from vinlookup.config import settings
from vinlookup.errors import DecodeError
from vinlookup.schemas.vehicle import BatchItemFailure, BatchItemSuccess, BatchResult, ErrorInfo
from vinlookup.services.resolver import decode_error_info
from vinlookup.services.vin_decoder import decode_vin
from vinlookup.utils.vin import InvalidVin, VinCode, check_vin, split_tokens, summarize_invalid

logger = logging.getLogger(__name__)


async def _decode_item(
    vin: VinCode,
    semaphore: asyncio.Semaphore,
    cancel: asyncio.Event | None,
) -> BatchItemSuccess | BatchItemFailure:
    async with semaphore:
        if cancel is not None and cancel.is_set():
            return BatchItemFailure(vin=vin, error=ErrorInfo(kind="cancelled", message="Batch cancelled"))
        try:
            vehicle = await decode_vin(vin)
        except DecodeError as e:
            return BatchItemFailure(vin=vin, error=decode_error_info(e))
    return BatchItemSuccess(vin=vin, vehicle=vehicle)


async def resolve_batch(
    raw_text: str,
    max_vins: int | None = None,
    concurrency: int | None = None,
    cancel: asyncio.Event | None = None,
) -> BatchResult:
    """
    Decode every valid VIN found in raw CSV text.

    1. Split on commas/newlines, trim, upper-case, drop empties.
    2. Keep only the first `max_vins` tokens (default settings.batch_max_vins).
    3. Partition into valid/invalid; invalid tokens are summarized, not fatal.
    4. Decode unique valid VINs with at most `concurrency` requests in flight.
    """
    max_vins = max_vins or settings.batch_max_vins
    concurrency = max(1, concurrency or settings.batch_concurrency)

    tokens = split_tokens(raw_text)
    considered = tokens[:max_vins]
    if len(tokens) > max_vins:
        logger.info(f"Batch truncated from {len(tokens)} to {max_vins} tokens")

    invalid: list[str] = []
    valid: list[VinCode] = []
    for token in considered:
        checked = check_vin(token)
        if isinstance(checked, InvalidVin):
            invalid.append(checked.raw)
        elif checked not in valid:
            valid.append(checked)

    items: list[BatchItemSuccess | BatchItemFailure] = []
    if valid:
        semaphore = asyncio.Semaphore(concurrency)
        # gather preserves argument order, so items line up with `valid` however they complete
        items = list(await asyncio.gather(*(_decode_item(vin, semaphore, cancel) for vin in valid)))
        failures = sum(1 for i in items if isinstance(i, BatchItemFailure))
        logger.info(f"Batch decoded {len(items) - failures}/{len(items)} VINs ({len(invalid)} invalid tokens)")

    return BatchResult(
        tokens_received=len(tokens),
        tokens_considered=len(considered),
        truncated=len(tokens) > max_vins,
        invalid_vins=invalid,
        invalid_summary=summarize_invalid(invalid, settings.batch_invalid_examples),
        items=items,
    )

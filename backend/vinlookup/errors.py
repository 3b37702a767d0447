"""
Error taxonomy for upstream lookups.

Transport-level failures are raised by vinlookup.utils.http as one of the
UpstreamError subclasses. The decode and recall services wrap those into
DecodeError / RecallLookupError so callers can tell which lookup failed.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vinlookup.schemas.vehicle import RecallAttempt


class UpstreamError(Exception):
    """Base class for failures talking to an upstream JSON service."""

    kind = "upstream"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(UpstreamError):
    """Transport failure: no response was received."""

    kind = "network"


class UpstreamStatusError(UpstreamError):
    """The upstream answered with a non-2xx HTTP status."""

    kind = "upstream_status"

    def __init__(self, status_code: int, message: str | None = None):
        super().__init__(message or f"Upstream returned HTTP {status_code}", status_code=status_code)


class MalformedResponseError(UpstreamError):
    """A response arrived but could not be parsed into the expected shape."""

    kind = "malformed_response"


class DecodeError(Exception):
    """The decode service could not produce vehicle attributes for a VIN."""

    def __init__(self, vin: str, cause: UpstreamError):
        super().__init__(f"Decode failed for {vin}: {cause.message}")
        self.vin = vin
        self.cause = cause

    @property
    def kind(self) -> str:
        return self.cause.kind


class RecallLookupError(Exception):
    """Every recall lookup strategy failed, so the recall list is unknown."""

    def __init__(self, vin: str, attempts: list["RecallAttempt"], message: str | None = None):
        self.vin = vin
        self.attempts = attempts
        self.message = message or "Recall lookup failed: " + "; ".join(
            f"{a.strategy}: {a.message}" for a in attempts
        )
        super().__init__(self.message)

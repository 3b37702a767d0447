"""
Pydantic schemas for VIN decode, recall lookup and resolution outcomes.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# Placeholder for any vehicle attribute the decode service omits or leaves blank
UNKNOWN = "N/A"

ErrorKind = Literal[
    "invalid_vin",
    "network",
    "upstream_status",
    "malformed_response",
    "recalls_unavailable",
    "cancelled",
]


class VehicleAttributes(BaseModel):
    """Flat vehicle description decoded from a VIN."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    vin: str
    make: str = UNKNOWN
    model: str = UNKNOWN
    model_year: str = UNKNOWN
    body_class: str = UNKNOWN
    engine_cylinders: str = UNKNOWN
    engine_displacement_l: str = UNKNOWN
    fuel_type_primary: str = UNKNOWN
    plant_country: str = UNKNOWN

    @property
    def has_year_make_model(self) -> bool:
        """True when make, model and year are all known, i.e. a YMM query can be built."""
        return all(v != UNKNOWN for v in (self.make, self.model, self.model_year))


class RecallRecord(BaseModel):
    """One safety recall campaign."""

    model_config = ConfigDict(frozen=True)

    campaign_number: str
    report_received_date: str
    component: str
    summary: str
    consequence: str | None = None
    manufacturer_recall_number: str | None = None
    initiator: str | None = None


class RecallAttempt(BaseModel):
    """A failed recall lookup strategy, kept so callers can see why recalls are unknown."""

    model_config = ConfigDict(frozen=True)

    strategy: Literal["vin", "vehicle"]
    kind: str
    message: str
    status_code: int | None = None


class ErrorInfo(BaseModel):
    """Serializable description of why a lookup did not succeed."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    status_code: int | None = None
    attempts: list[RecallAttempt] = Field(default_factory=list)


# --- Single VIN resolution ---


class ResolutionSuccess(BaseModel):
    """Vehicle decoded and recall list known (possibly empty: no open recalls)."""

    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    vehicle: VehicleAttributes
    recalls: list[RecallRecord] = Field(default_factory=list)
    recall_source: Literal["vin", "vehicle"] = "vin"


class ResolutionPartial(BaseModel):
    """Vehicle decoded but recalls are unknown because every lookup strategy failed."""

    model_config = ConfigDict(frozen=True)

    status: Literal["partial"] = "partial"
    vehicle: VehicleAttributes
    recalls: None = None
    recall_error: ErrorInfo


class ResolutionFailure(BaseModel):
    """The VIN was rejected or could not be decoded."""

    model_config = ConfigDict(frozen=True)

    status: Literal["failure"] = "failure"
    vin: str
    error: ErrorInfo


ResolutionOutcome = Annotated[
    ResolutionSuccess | ResolutionPartial | ResolutionFailure,
    Field(discriminator="status"),
]


# --- Bulk (CSV) resolution ---


class BatchItemSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["ok"] = "ok"
    vin: str
    vehicle: VehicleAttributes


class BatchItemFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["error"] = "error"
    vin: str
    error: ErrorInfo

    def as_row(self) -> dict[str, str]:
        """Placeholder row for table renderers that expect one row per VIN."""
        return {"vin": self.vin, "make": "Error", "model": "-", "modelYear": "-"}


BatchItem = Annotated[BatchItemSuccess | BatchItemFailure, Field(discriminator="status")]


class BatchResult(BaseModel):
    """Outcome of one CSV submission. Decode only; recalls are not fetched in bulk."""

    tokens_received: int = 0
    tokens_considered: int = 0
    truncated: bool = False
    invalid_vins: list[str] = Field(default_factory=list)
    invalid_summary: str | None = None
    items: list[BatchItem] = Field(default_factory=list)

    @property
    def succeeded(self) -> list[BatchItemSuccess]:
        return [i for i in self.items if isinstance(i, BatchItemSuccess)]

    @property
    def failed(self) -> list[BatchItemFailure]:
        return [i for i in self.items if isinstance(i, BatchItemFailure)]

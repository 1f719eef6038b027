"""
Medicine data models.

MedicineRecord is the structured payload attached to assistant messages and
rendered as a medicine card. Records either come verbatim from the local
sample store or are normalized from a generative provider's JSON payload.
"""

import uuid
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


# Point price estimates are widened into a range by these factors
PRICE_RANGE_LOW_FACTOR = 0.8
PRICE_RANGE_HIGH_FACTOR = 1.2


class ScheduleClass(str, Enum):
    """Regulatory dispensing category. Values are rendered verbatim."""

    OTC = "OTC"
    PRESCRIPTION = "Prescription"
    SCHEDULE_H = "Schedule H"
    SCHEDULE_H1 = "Schedule H1"
    SCHEDULE_X = "Schedule X"

    @classmethod
    def parse(cls, value: Any) -> "ScheduleClass":
        """Map free text from a provider onto a schedule class (unknown -> Prescription)."""
        if isinstance(value, cls):
            return value
        text = " ".join(str(value or "").replace("-", " ").split()).lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        if text in ("over the counter", "otc drug"):
            return cls.OTC
        if text in ("h1", "schedule h 1"):
            return cls.SCHEDULE_H1
        if text == "h":
            return cls.SCHEDULE_H
        if text == "x":
            return cls.SCHEDULE_X
        return cls.PRESCRIPTION


class Availability(str, Enum):
    """Market availability. Values are rendered verbatim."""

    WIDELY_AVAILABLE = "Widely Available"
    AVAILABLE = "Available"
    LIMITED = "Limited"
    PRESCRIPTION_ONLY = "Prescription Only"

    @classmethod
    def parse(cls, value: Any) -> "Availability":
        """Map free text from a provider onto an availability value (unknown -> Available)."""
        if isinstance(value, cls):
            return value
        text = " ".join(str(value or "").split()).lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        return cls.AVAILABLE


class RecordModel(BaseModel):
    """Base for medicine models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=False,
    )

    def to_wire(self) -> Dict[str, Any]:
        """Serialize with camelCase keys and verbatim enum strings."""
        return self.model_dump(mode="json", by_alias=True)


class Alternative(RecordModel):
    name: str
    manufacturer: str = ""
    price_range: Optional[str] = None


class PriceRange(RecordModel):
    min: float = 0
    max: float = 0
    unit: str = "unit"

    @model_validator(mode="after")
    def _check_bounds(self) -> "PriceRange":
        if self.min > self.max:
            raise ValueError(f"price range min ({self.min}) exceeds max ({self.max})")
        return self

    @classmethod
    def from_point_estimate(cls, amount: float, unit: str = "unit") -> "PriceRange":
        """Widen a single price estimate into a range around it."""
        return cls(
            min=round(amount * PRICE_RANGE_LOW_FACTOR, 2),
            max=round(amount * PRICE_RANGE_HIGH_FACTOR, 2),
            unit=unit,
        )


class MedicineRecord(RecordModel):
    """Structured medicine information shown on a medicine card."""

    id: str
    name: str
    manufacturer: str = ""
    composition_text: str = Field(default="", alias="composition")
    uses: List[str] = Field(default_factory=list)
    mechanism_of_action: Optional[str] = None
    schedule_class: ScheduleClass = Field(default=ScheduleClass.PRESCRIPTION, alias="schedule")
    side_effects: List[str] = Field(default_factory=list)
    precautions: List[str] = Field(default_factory=list)
    contraindications: List[str] = Field(default_factory=list)
    alternatives: List[Alternative] = Field(default_factory=list)
    price_range: PriceRange = Field(default_factory=PriceRange)
    availability: Availability = Availability.AVAILABLE
    dosage_forms: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None

    # Extra detail supplied by generative providers
    generic_name: Optional[str] = None
    category: Optional[str] = None
    dosage: Dict[str, str] = Field(default_factory=dict)
    storage: Optional[str] = None
    interactions: List[str] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "MedicineRecord":
        """
        Normalize a medicine payload into a MedicineRecord.

        Accepts the provider schema (composition list, warnings, price point
        estimate) as well as the record schema itself (priceRange, precautions).

        Raises:
            ValueError: If the payload is not a mapping, has no name, or a
                field has the wrong shape (e.g. a number where a list belongs)
        """
        if not isinstance(payload, dict):
            raise ValueError("medicine payload must be a JSON object")

        name = str(payload.get("name") or "").strip()
        if not name:
            raise ValueError("medicine payload has no name")

        composition = payload.get("composition", "")
        if isinstance(composition, list):
            composition = " + ".join(str(part).strip() for part in composition if part)

        precautions = payload.get("precautions")
        if not precautions:
            precautions = payload.get("warnings") or []

        return cls(
            id=str(payload.get("id") or uuid.uuid4().hex[:8]),
            name=name,
            manufacturer=str(payload.get("manufacturer") or ""),
            composition_text=str(composition or ""),
            uses=_text_list(payload.get("uses")),
            mechanism_of_action=payload.get("mechanismOfAction") or None,
            schedule_class=ScheduleClass.parse(payload.get("schedule")),
            side_effects=_text_list(payload.get("sideEffects")),
            precautions=_text_list(precautions),
            contraindications=_text_list(payload.get("contraindications")),
            alternatives=_alternatives(payload.get("alternatives")),
            price_range=_price_range(payload),
            availability=Availability.parse(payload.get("availability")),
            dosage_forms=_text_list(payload.get("dosageForms")),
            image_url=payload.get("imageUrl") or None,
            generic_name=payload.get("genericName") or None,
            category=payload.get("category") or None,
            dosage={
                str(k): str(v) for k, v in (payload.get("dosage") or {}).items() if v
            } if isinstance(payload.get("dosage"), dict) else {},
            storage=payload.get("storage") or None,
            interactions=_text_list(payload.get("interactions")),
        )


def _text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"expected a list of strings, got {type(value).__name__}")
    return [str(item) for item in value if item is not None and str(item).strip()]


def _price_range(payload: Dict[str, Any]) -> PriceRange:
    explicit = payload.get("priceRange")
    if isinstance(explicit, dict):
        return PriceRange.model_validate(explicit)

    price = payload.get("price")
    if isinstance(price, dict) and price.get("amount") is not None:
        amount = price["amount"]
        if isinstance(amount, bool) or not isinstance(amount, (int, float, str)):
            raise ValueError(f"price amount must be a number, got {type(amount).__name__}")
        return PriceRange.from_point_estimate(
            float(amount), unit=str(price.get("unit") or "unit")
        )
    return PriceRange()


def _alternatives(value: Any) -> List[Alternative]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"alternatives must be a list, got {type(value).__name__}")
    return [
        Alternative.model_validate(alt)
        for alt in value
        if isinstance(alt, dict) and alt.get("name")
    ]


class LookupErrorKind(str, Enum):
    """Failure categories a lookup can end in."""

    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    PARSE = "parse"


class LookupResult(BaseModel):
    """
    Outcome of resolving one medicine name.

    found=False with no error is a normal negative result; found=False with
    an error describes a failed lookup.
    """

    model_config = ConfigDict(frozen=True)

    found: bool
    medicine: Optional[MedicineRecord] = None
    suggestion: Optional[str] = None
    disclaimer: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[LookupErrorKind] = None
    source: Optional[str] = None

    @classmethod
    def hit(cls, medicine: MedicineRecord, **kwargs) -> "LookupResult":
        return cls(found=True, medicine=medicine, **kwargs)

    @classmethod
    def miss(cls, suggestion: Optional[str] = None, **kwargs) -> "LookupResult":
        return cls(found=False, suggestion=suggestion, **kwargs)

    @classmethod
    def failure(cls, kind: LookupErrorKind, error: str, **kwargs) -> "LookupResult":
        return cls(found=False, error=error, error_kind=kind, **kwargs)

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_wire(self) -> Dict[str, Any]:
        """Response envelope of the medicine lookup endpoint."""
        body: Dict[str, Any] = {
            "found": self.found,
            "medicine": self.medicine.to_wire() if self.medicine else None,
        }
        if self.suggestion:
            body["suggestion"] = self.suggestion
        if self.disclaimer:
            body["disclaimer"] = self.disclaimer
        if self.error:
            body["error"] = self.error
        return body

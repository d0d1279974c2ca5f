"""Session DTOs shared across application layers."""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple

Role = Literal["consumer", "technician", "admin"]
EquipmentCondition = Literal["excellent", "good", "fair", "poor"]

ROLES: Tuple[str, ...] = ("consumer", "technician", "admin")
EQUIPMENT_CONDITIONS: Tuple[str, ...] = ("excellent", "good", "fair", "poor")


@dataclass(frozen=True)
class Equipment:
    name: str
    brand: str
    model: str
    condition: EquipmentCondition = "good"
    purchase_date: Optional[str] = None

    def __post_init__(self):
        if self.condition not in EQUIPMENT_CONDITIONS:
            raise ValueError(f"Unknown equipment condition: {self.condition!r}")

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Equipment":
        condition = payload.get("condition") or "good"
        if condition not in EQUIPMENT_CONDITIONS:
            condition = "good"
        return cls(
            name=str(payload.get("name") or ""),
            brand=str(payload.get("brand") or ""),
            model=str(payload.get("model") or ""),
            condition=condition,
            purchase_date=payload.get("purchase_date") or None,
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "brand": self.brand,
            "model": self.model,
            "condition": self.condition,
            "purchase_date": self.purchase_date or "",
        }


@dataclass(frozen=True)
class Identity:
    id: str
    role: str
    name: str = ""
    email: str = ""
    picture_url: Optional[str] = None
    location: str = ""
    phone: str = ""
    equipment: Tuple[Equipment, ...] = field(default_factory=tuple)

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0] if self.name else ""

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Identity":
        if not isinstance(payload, dict) or not payload.get("id"):
            raise ValueError("User payload has no id")
        raw_equipment = payload.get("equipment") or []
        return cls(
            id=str(payload["id"]),
            role=str(payload.get("role") or "consumer"),
            name=payload.get("name") or "",
            email=payload.get("email") or "",
            picture_url=payload.get("picture") or None,
            location=payload.get("location") or "",
            phone=payload.get("phone") or "",
            equipment=tuple(Equipment.from_payload(item) for item in raw_equipment if isinstance(item, dict)),
        )


def is_consumer(identity: Optional[Identity]) -> bool:
    return identity is not None and identity.role == "consumer"

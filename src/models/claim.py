from sqlalchemy import String, DateTime, Float, JSON, event
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.orm.attributes import flag_modified
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from models.base import Base
from utils.vocab_enums import ClaimStatusEnum


def generate_object_id() -> str:
    """Generate a 24 character hexadecimal identifier for claims and damages."""
    return uuid.uuid4().hex[:24]


class Claim(Base):
    """
    Represents an insurance claim and the damages reported against it.

    Damages are stored inline on the claim row as an ordered JSON list. Each
    damage has an id that is only unique within its claim. The total amount
    is derived from the damage prices by a before-save hook, see
    `calculate_total_amount` below.
    """
    __tablename__ = "claims"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=generate_object_id)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default=ClaimStatusEnum.PENDING.value, index=True)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    damages: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Not persisted. Set by every damage mutation, cleared by the save hook.
    damages_modified = False

    def _set_damages(self, damages: List[Dict[str, Any]]) -> None:
        self.damages = damages
        # JSON columns don't track in-place changes
        flag_modified(self, "damages")
        self.damages_modified = True

    def add_damage(self, part: str, severity: str, image_url: str, price: float) -> Dict[str, Any]:
        """
        Append a damage with a freshly generated id.

        Returns:
            dict: The stored damage.
        """
        damage = {
            "id": generate_object_id(),
            "part": part,
            "severity": severity,
            "image_url": image_url,
            "price": price,
        }
        self._set_damages([*(self.damages or []), damage])
        return damage

    def find_damage(self, damage_id: str) -> Optional[Dict[str, Any]]:
        for damage in self.damages or []:
            if damage["id"] == damage_id:
                return damage
        return None

    def update_damage(self, damage_id: str, **changes: Any) -> Optional[Dict[str, Any]]:
        """
        Replace the given fields of a damage, leaving the others untouched.

        Returns:
            dict: The updated damage, or None if the claim has no damage with that id.
        """
        current = self.find_damage(damage_id)
        if current is None:
            return None
        updated = {**current, **changes, "id": damage_id}
        self._set_damages([updated if damage["id"] == damage_id else damage for damage in self.damages])
        return updated

    def remove_damage(self, damage_id: str) -> bool:
        if self.find_damage(damage_id) is None:
            return False
        self._set_damages([damage for damage in self.damages if damage["id"] != damage_id])
        return True

    def has_damage_with_severity(self, severity: str) -> bool:
        return any(damage["severity"] == severity for damage in self.damages or [])

    def recalculate_total_amount(self) -> None:
        self.total_amount = float(sum(damage["price"] for damage in self.damages or []))

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "totalAmount": self.total_amount,
            "damages": [damage_to_dict(damage) for damage in self.damages or []],
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


def damage_to_dict(damage: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": damage["id"],
        "part": damage["part"],
        "severity": damage["severity"],
        "imageUrl": damage["image_url"],
        "price": damage["price"],
    }


@event.listens_for(Claim, "before_insert")
@event.listens_for(Claim, "before_update")
def calculate_total_amount(mapper, connection, target: Claim) -> None:
    """
    Recompute the claim total right before the row is written.

    Only runs when the damages list was changed through one of the damage
    methods since the claim was loaded or created. A total written directly
    on the claim survives a save that does not touch damages.
    """
    if target.damages_modified:
        target.recalculate_total_amount()
        target.damages_modified = False

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, Dict, Optional
from utils.vocab_enums import DamageSeverityEnum


class CreateDamageDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    part: str = Field(..., min_length=1, max_length=255)
    severity: DamageSeverityEnum
    image_url: str = Field(..., alias="imageUrl")
    price: float = Field(..., ge=0)


class UpdateDamageRequest(BaseModel):
    """Partial damage update. Only the fields present in the request are applied."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid", allow_inf_nan=False)

    part: Optional[str] = Field(None, min_length=1, max_length=255)
    severity: Optional[DamageSeverityEnum] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    price: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = [name for name in self.model_fields_set if getattr(self, name) is None]
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(sorted(nulls))}")
        return self

    def changes(self) -> Dict[str, Any]:
        """Fields sent by the caller, keyed by attribute name, enums as plain values."""
        return self.model_dump(mode="json", exclude_unset=True)

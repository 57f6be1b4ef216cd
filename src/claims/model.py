from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, Dict, List, Optional
from damages.model import CreateDamageDto
from utils.vocab_enums import ClaimStatusEnum


class CreateClaimDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    title: str = Field(..., min_length=1, max_length=255)
    description: str
    damages: List[CreateDamageDto] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        """Whitespace-only titles count as empty"""
        if isinstance(v, str):
            return v.strip()
        return v


class UpdateClaimRequest(BaseModel):
    """
    Partial claim update (PATCH semantics).

    `model_fields_set` tells which fields the caller actually sent; anything
    omitted is left unchanged on the claim. `description` may be cleared by
    sending null, the other fields may not.
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid", allow_inf_nan=False)

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[ClaimStatusEnum] = None
    total_amount: Optional[float] = Field(None, alias="totalAmount")

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = [
            name for name in self.model_fields_set
            if name != "description" and getattr(self, name) is None
        ]
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(sorted(nulls))}")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)

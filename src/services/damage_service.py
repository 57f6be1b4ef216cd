"""Damage operations on a claim. Damages can only change while the claim is PENDING."""
from sqlalchemy.orm import Session

from damages.model import CreateDamageDto, UpdateDamageRequest
from models.claim import Claim
from services.claim_service import load_claim, save_claim
from utils.errors import InvalidOperationError, NotFoundError
from utils.logging_utils import get_logger
from utils.vocab_enums import ClaimStatusEnum

logger = get_logger(__name__)


class DamageService:
    def __init__(self, db_session: Session):
        self.db_session = db_session

    def add_damage(self, claim_id: str, dto: CreateDamageDto) -> Claim:
        claim = self._load_editable_claim(claim_id)
        damage = claim.add_damage(
            part=dto.part,
            severity=dto.severity.value,
            image_url=dto.image_url,
            price=dto.price,
        )
        claim = save_claim(self.db_session, claim)
        logger.info("Added damage %s to claim %s (total %s)", damage["id"], claim.id, claim.total_amount)
        return claim

    def update_damage(self, claim_id: str, damage_id: str, request: UpdateDamageRequest) -> Claim:
        claim = self._load_editable_claim(claim_id)
        if claim.update_damage(damage_id, **request.changes()) is None:
            raise NotFoundError(f"Damage with ID {damage_id} not found")

        claim = save_claim(self.db_session, claim)
        logger.info("Updated damage %s on claim %s (total %s)", damage_id, claim.id, claim.total_amount)
        return claim

    def delete_damage(self, claim_id: str, damage_id: str) -> Claim:
        claim = self._load_editable_claim(claim_id)
        if not claim.remove_damage(damage_id):
            raise NotFoundError(f"Damage with ID {damage_id} not found in claim {claim_id}")

        claim = save_claim(self.db_session, claim)
        logger.info("Deleted damage %s from claim %s (total %s)", damage_id, claim.id, claim.total_amount)
        return claim

    def _load_editable_claim(self, claim_id: str) -> Claim:
        claim = load_claim(self.db_session, claim_id)
        if claim.status != ClaimStatusEnum.PENDING.value:
            logger.warning("Rejected damage change on claim %s with status %s", claim.id, claim.status)
            raise InvalidOperationError(
                f"Damages can only be managed when claim status is PENDING. Current status: {claim.status}"
            )
        return claim

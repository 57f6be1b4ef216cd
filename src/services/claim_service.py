"""
Claim lifecycle operations.

Status transitions:
    PENDING   -> IN_REVIEW, FINISHED (guarded)
    IN_REVIEW -> PENDING, FINISHED (guarded)
    FINISHED  -> nothing, the claim is read-only from then on

The FINISHED guard is the list of finish strategies (see finish_strategies.py).
"""
import re
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from claims.model import CreateClaimDto, UpdateClaimRequest
from models.claim import Claim
from services.finish_strategies import ClaimValidationStrategy, default_finish_strategies, run_finish_strategies
from utils.errors import InvalidOperationError, NotFoundError
from utils.logging_utils import get_logger, log_structured, LogLevel
from utils.vocab_enums import ClaimStatusEnum

logger = get_logger(__name__)

OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


def is_valid_object_id(value) -> bool:
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None


def load_claim(db_session: Session, claim_id: str) -> Claim:
    """
    Fetch a claim by id.

    Raises:
        NotFoundError: The id is not 24 hex characters (no query is issued)
            or no claim has that id.
    """
    if not is_valid_object_id(claim_id):
        logger.warning("Invalid claim id format: %s", claim_id)
        raise NotFoundError("Invalid ID format")

    claim = db_session.get(Claim, claim_id.lower())
    if not claim:
        raise NotFoundError(f"Claim with ID {claim_id} not found")
    return claim


def save_claim(db_session: Session, claim: Claim) -> Claim:
    """Commit the claim (firing the total amount hook) and reload it."""
    try:
        db_session.add(claim)
        db_session.commit()
    except SQLAlchemyError:
        db_session.rollback()
        raise
    db_session.refresh(claim)
    return claim


class ClaimService:
    def __init__(self, db_session: Session, finish_strategies: Optional[List[ClaimValidationStrategy]] = None):
        self.db_session = db_session
        self.finish_strategies = finish_strategies if finish_strategies is not None else default_finish_strategies()

    def create(self, dto: CreateClaimDto) -> Claim:
        """New claims always start PENDING; the total comes from the initial damages."""
        claim = Claim(
            title=dto.title,
            description=dto.description,
            status=ClaimStatusEnum.PENDING.value,
            total_amount=0.0,
            damages=[],
        )
        for damage in dto.damages:
            claim.add_damage(
                part=damage.part,
                severity=damage.severity.value,
                image_url=damage.image_url,
                price=damage.price,
            )

        claim = save_claim(self.db_session, claim)
        log_structured(logger, LogLevel.INFO, "Claim created",
                       claim_id=claim.id, damages=len(claim.damages), total_amount=claim.total_amount)
        return claim

    def get_by_id(self, claim_id: str) -> Claim:
        return load_claim(self.db_session, claim_id)

    def list(self) -> List[Claim]:
        return self.db_session.query(Claim).order_by(Claim.created_at, Claim.id).all()

    def update(self, claim_id: str, request: UpdateClaimRequest) -> Claim:
        """
        Apply a partial update to a claim.

        Raises:
            NotFoundError: Unknown or malformed claim id.
            InvalidOperationError: The claim is already FINISHED, or the request
                moves it to FINISHED and a finish strategy rejects it. Strategies
                see the claim as stored, before any field of this request is applied.
        """
        claim = load_claim(self.db_session, claim_id)

        if claim.status == ClaimStatusEnum.FINISHED.value:
            logger.warning("Rejected update of finished claim %s", claim.id)
            raise InvalidOperationError("Cannot modify a finished claim")

        changes = request.changes()
        if changes.get("status") == ClaimStatusEnum.FINISHED.value:
            run_finish_strategies(claim, self.finish_strategies)

        if "title" in changes:
            claim.title = changes["title"]
        if "description" in changes:
            claim.description = changes["description"]
        if "status" in changes:
            claim.status = changes["status"]
        if "total_amount" in changes:
            # Not overwritten by the hook since damages are untouched here
            claim.total_amount = changes["total_amount"]

        claim = save_claim(self.db_session, claim)
        log_structured(logger, LogLevel.INFO, "Claim updated",
                       claim_id=claim.id, fields=sorted(changes), status=claim.status)
        return claim

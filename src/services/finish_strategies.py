"""
Rules a claim must satisfy before it can move to FINISHED.

Each rule is a strategy exposing `validate(claim)`, which raises
`InvalidOperationError` when the claim is not eligible. `ClaimService` runs
them in order and stops at the first failure.
"""
from abc import ABC, abstractmethod
from typing import List

from models.claim import Claim
from utils.errors import InvalidOperationError
from utils.logging_utils import get_logger
from utils.vocab_enums import DamageSeverityEnum

logger = get_logger(__name__)

MIN_HIGH_SEVERITY_DESCRIPTION_LENGTH = 100


class ClaimValidationStrategy(ABC):
    @abstractmethod
    def validate(self, claim: Claim) -> None:
        ...


class HighSeverityDescriptionStrategy(ClaimValidationStrategy):
    """Claims with a HIGH severity damage need a description longer than 100 characters."""

    def validate(self, claim: Claim) -> None:
        if not claim.has_damage_with_severity(DamageSeverityEnum.HIGH.value):
            return
        if not claim.description or len(claim.description) <= MIN_HIGH_SEVERITY_DESCRIPTION_LENGTH:
            logger.info("Claim %s has HIGH severity damage and a short description", claim.id)
            raise InvalidOperationError(
                "Claims with HIGH severity damages require a description exceeding "
                f"{MIN_HIGH_SEVERITY_DESCRIPTION_LENGTH} characters to be Finished."
            )


def default_finish_strategies() -> List[ClaimValidationStrategy]:
    return [HighSeverityDescriptionStrategy()]


def run_finish_strategies(claim: Claim, strategies: List[ClaimValidationStrategy]) -> None:
    for strategy in strategies:
        strategy.validate(claim)

"""Lambda handler for creating a claim, optionally with its initial damages."""
from claims.model import CreateClaimDto
from services.claim_service import ClaimService
from utils import response
from utils.lambda_utils import standard_lambda_handler
from utils.logging_utils import get_logger

logger = get_logger(__name__)


@standard_lambda_handler(requires_body=True, body_model=CreateClaimDto)
def lambda_handler(event: dict, _context=None, db_session=None, body: CreateClaimDto = None) -> dict:
    """
    Handles POST /claims.

    Args:
        event (dict): API Gateway event with the claim in its body.
        _context (dict): Lambda execution context (unused).
        db_session (Session): SQLAlchemy session (provided by decorator).
        body (CreateClaimDto): Validated request body (provided by decorator).

    Returns:
        dict: 201 with the stored claim.
    """
    claim = ClaimService(db_session).create(body)
    return response.api_response(201, data=claim.to_dict(), success_message="Claim created successfully", event=event)

"""
Lambda handler for updating claim information.

Only the fields present in the body are changed. Finished claims are
read-only, and moving a claim to FINISHED has to pass the finish rules.
"""
from claims.model import UpdateClaimRequest
from services.claim_service import ClaimService
from utils import response
from utils.lambda_utils import extract_path_param, standard_lambda_handler
from utils.logging_utils import get_logger

logger = get_logger(__name__)


@standard_lambda_handler(requires_body=True, body_model=UpdateClaimRequest)
def lambda_handler(event: dict, _context=None, db_session=None, body: UpdateClaimRequest = None) -> dict:
    """
    Handles PATCH /claims/{claim_id}.

    Args:
        event (dict): API Gateway event containing the claim ID and the fields to change.
        _context (dict): Lambda execution context (unused).
        db_session (Session): SQLAlchemy session (provided by decorator).
        body (UpdateClaimRequest): Validated request body (provided by decorator).

    Returns:
        dict: 200 with the updated claim, 404 for an unknown claim, 400 when a
        business rule rejects the update.
    """
    success, result = extract_path_param(event, "claim_id")
    if not success:
        return result

    claim = ClaimService(db_session).update(result, body)
    return response.api_response(200, data=claim.to_dict(), success_message="Claim updated successfully", event=event)

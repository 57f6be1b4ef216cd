"""
Lambda handler for retrieving a single claim with its damages.
"""
from services.claim_service import ClaimService
from utils import response
from utils.lambda_utils import extract_path_param, standard_lambda_handler
from utils.logging_utils import get_logger

logger = get_logger(__name__)


@standard_lambda_handler()
def lambda_handler(event, context, db_session):
    """
    Handles GET /claims/{claim_id}.

    A claim_id that is not 24 hex characters gets the same 404 as an unknown one.
    """
    success, result = extract_path_param(event, "claim_id")
    if not success:
        return result

    claim = ClaimService(db_session).get_by_id(result)
    return response.api_response(200, data=claim.to_dict(), event=event)

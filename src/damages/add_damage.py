"""Lambda handler for adding a damage to a pending claim."""
from damages.model import CreateDamageDto
from services.damage_service import DamageService
from utils import response
from utils.lambda_utils import extract_path_param, standard_lambda_handler
from utils.logging_utils import get_logger

logger = get_logger(__name__)


@standard_lambda_handler(requires_body=True, body_model=CreateDamageDto)
def lambda_handler(event, context, db_session, body: CreateDamageDto):
    """
    Handles POST /claims/{claim_id}/damages.

    Parameters:
        event (dict): API Gateway event with the claim ID and the damage in the body.
        context (dict): Lambda execution context.
        db_session (Session): SQLAlchemy session (provided by decorator).
        body (CreateDamageDto): Validated damage (provided by decorator).

    Returns:
        dict: 200 with the whole claim, including the new damage and total.
    """
    success, claim_id = extract_path_param(event, "claim_id")
    if not success:
        return claim_id

    claim = DamageService(db_session).add_damage(claim_id, body)
    return response.api_response(200, data=claim.to_dict(), success_message="Damage added successfully", event=event)

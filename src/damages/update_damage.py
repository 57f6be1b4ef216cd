from damages.model import UpdateDamageRequest
from services.damage_service import DamageService
from utils import response
from utils.lambda_utils import extract_path_param, standard_lambda_handler
from utils.logging_utils import get_logger

# Configure logging
logger = get_logger(__name__)


@standard_lambda_handler(requires_body=True, body_model=UpdateDamageRequest)
def lambda_handler(event, context, db_session, body: UpdateDamageRequest):
    """
    Updates the given properties of a damage (PATCH /claims/{claim_id}/damages/{damage_id}).

    Returns:
        dict: 200 with the claim and its recalculated total.
    """
    success, claim_id = extract_path_param(event, "claim_id")
    if not success:
        return claim_id

    success, damage_id = extract_path_param(event, "damage_id")
    if not success:
        return damage_id

    claim = DamageService(db_session).update_damage(claim_id, damage_id, body)
    return response.api_response(200, data=claim.to_dict(), success_message="Damage updated successfully.", event=event)

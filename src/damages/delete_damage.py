from services.damage_service import DamageService
from utils import response
from utils.lambda_utils import extract_path_param, standard_lambda_handler
from utils.logging_utils import get_logger

# Configure logging
logger = get_logger(__name__)


@standard_lambda_handler()
def lambda_handler(event, context, db_session):
    """
    Removes a damage from a pending claim (DELETE /claims/{claim_id}/damages/{damage_id}).

    Returns:
        dict: 200 with the remaining claim, whose total no longer includes the damage.
    """
    success, claim_id = extract_path_param(event, "claim_id")
    if not success:
        return claim_id

    success, damage_id = extract_path_param(event, "damage_id")
    if not success:
        return damage_id

    claim = DamageService(db_session).delete_damage(claim_id, damage_id)
    return response.api_response(200, data=claim.to_dict(), success_message="Damage deleted successfully.", event=event)

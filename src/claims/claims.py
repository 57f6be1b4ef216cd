"""
Single entry point routing every /claims request to its handler.

Used when the whole API is deployed as one Lambda function behind a
proxy integration; each handler can still be deployed on its own.
"""
from claims import create_claim, get_claim, get_claims, update_claim
from damages import add_damage, delete_damage, update_damage
from misc import preflight
from utils import response
from utils.logging_utils import get_logger

logger = get_logger(__name__)

# (method, has claim_id, has damage_id) -> handler
ROUTES = {
    ("GET", False, False): get_claims.lambda_handler,
    ("POST", False, False): create_claim.lambda_handler,
    ("GET", True, False): get_claim.lambda_handler,
    ("PATCH", True, False): update_claim.lambda_handler,
    ("POST", True, False): add_damage.lambda_handler,
    ("PATCH", True, True): update_damage.lambda_handler,
    ("DELETE", True, True): delete_damage.lambda_handler,
}


def lambda_handler(event, context, **kwargs):
    """Main Lambda function router"""
    method = (event.get("httpMethod") or "").upper()
    if method == "OPTIONS":
        return preflight.lambda_handler(event, context)

    path = event.get("pathParameters") or {}
    key = (method, bool(path.get("claim_id")), bool(path.get("damage_id")))

    handler = ROUTES.get(key)
    if handler is None:
        logger.warning("No route for %s %s", method, event.get("path"))
        return response.api_response(405, error_details="Invalid request", event=event)

    return handler(event, context, **kwargs)

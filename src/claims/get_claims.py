from services.claim_service import ClaimService
from utils.lambda_utils import standard_lambda_handler
from utils import response
from utils.logging_utils import get_logger

logger = get_logger(__name__)


@standard_lambda_handler()
def lambda_handler(event, context, db_session):
    claims = ClaimService(db_session).list()
    logger.info("Returning %d claims", len(claims))

    if not claims:
        return response.api_response(200, message="No claims found", data=[], event=event)

    return response.api_response(200, data=[claim.to_dict() for claim in claims], event=event)

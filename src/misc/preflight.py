import json
from datetime import datetime

from utils.logging_utils import get_logger
from utils.response import cors_headers, request_origin_from, resolve_cors_origin

logger = get_logger(__name__)


def lambda_handler(event, context):
    """
    Handles CORS preflight (OPTIONS) requests for API Gateway.
    """
    origin = request_origin_from(event)
    path = event.get('path', 'unknown path')

    # "*" when the origin is unknown or not allowed
    access_control_origin = resolve_cors_origin(origin)
    logger.info("Preflight request from %s for %s, allowing %s", origin, path, access_control_origin or "*")

    return {
        "statusCode": 200,
        "headers": {
            **cors_headers(access_control_origin),
            "Access-Control-Allow-Headers": "Content-Type,Authorization,X-Amz-Date,X-Api-Key,X-Amz-Security-Token",
            "Access-Control-Max-Age": "7200",
        },
        "body": json.dumps({
            "path": path,
            "timestamp": datetime.now().isoformat(),
            "origin_allowed": access_control_origin is not None if origin else True,
        })
    }

"""
Response Utility to Standardize API Responses

All handlers return API Gateway proxy responses built here, so every endpoint
shares the same JSON envelope and CORS headers.

Usage Example:
    ```
    from utils.response import api_response

    response = api_response(200, data=claim.to_dict(), success_message="Claim retrieved successfully")
    # {
    #     "statusCode": 200,
    #     "headers": {...},
    #     "body": '{"status": "OK", "code": 200, "message": "Claim retrieved successfully", "data": {...}}'
    # }
    ```
"""

from typing import Any, Dict, List, Optional, Union
from .models import APIResponse
from utils.logging_utils import get_logger
import os
import json

logger = get_logger(__name__)

# Predefined status code mappings
STATUS_MESSAGES: Dict[int, str] = {
    200: "OK",
    201: "Created",
    204: "No Content",
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    500: "Internal Server Error",
}

ALLOWED_METHODS = "GET,OPTIONS,POST,PATCH,DELETE"
LOCAL_PORTS = ["3000", "4200", "5173", "8000", "8080", ""]


def allowed_origins() -> List[str]:
    """
    Origins allowed to call the API.

    FRONTEND_ORIGIN is always allowed. Outside of prod (ENV != "prod") local
    development servers are allowed as well.
    """
    origins: List[str] = []
    frontend_origin = os.getenv("FRONTEND_ORIGIN")
    if frontend_origin:
        origins.append(frontend_origin)
    if os.getenv("ENV", "dev").lower() != "prod":
        for port in LOCAL_PORTS:
            suffix = f":{port}" if port else ""
            origins.append(f"http://localhost{suffix}")
            origins.append(f"http://127.0.0.1{suffix}")
    return origins


def resolve_cors_origin(request_origin: Optional[str], fallback: Optional[str] = None) -> Optional[str]:
    """Echo the request origin back if it's allowed, otherwise use the fallback."""
    if request_origin and request_origin in allowed_origins():
        return request_origin
    return fallback


def request_origin_from(event: Optional[Dict[str, Any]]) -> Optional[str]:
    if not event or not isinstance(event, dict):
        return None
    headers = event.get("headers") or {}
    return headers.get("origin") or headers.get("Origin")


def cors_headers(access_control_origin: Optional[str]) -> Dict[str, str]:
    origin = access_control_origin or "*"
    return {
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true" if origin != "*" else "false",
    }


def api_response(
    status_code: int,
    message: Optional[str] = None,
    data: Optional[Union[Dict[str, Any], List[Any]]] = None,
    error_details: Optional[str] = None,
    success_message: Optional[str] = None,
    event: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Generates a standardized API response for HTTP endpoints.

    Args:
        status_code (int): HTTP status code.
        message (Optional[str]): Custom response message, defaults to the standard status text.
        data (Optional[Union[Dict, List]]): Payload data. Lists are wrapped as {"results": [...]}.
        error_details (Optional[str]): Reason for an error response.
        success_message (Optional[str]): Informative message for 2xx responses.
        event (Optional[Dict]): Incoming event, used to resolve the CORS origin.

    Returns:
        Dict[str, Any]: API Gateway proxy response.
    """
    if status_code not in STATUS_MESSAGES:
        raise ValueError(f"Invalid status code: {status_code}")

    if 200 <= status_code < 300 and success_message:
        response_message = success_message
    else:
        response_message = message or STATUS_MESSAGES[status_code]

    if isinstance(data, list):
        data = {"results": data}

    response = APIResponse(
        status=STATUS_MESSAGES[status_code],
        code=status_code,
        message=response_message,
        data=data,
        error_details=error_details,
    )

    try:
        body = response.to_json()
    except (TypeError, ValueError) as e:
        logger.error("Failed to serialize response: %s", e)
        status_code = 500
        body = json.dumps({"status": STATUS_MESSAGES[500], "code": 500, "message": STATUS_MESSAGES[500]})

    fallback = os.getenv("FRONTEND_ORIGIN") or "http://localhost:4200"
    headers = {
        "Content-Type": "application/json",
        **cors_headers(resolve_cors_origin(request_origin_from(event), fallback)),
    }
    logger.debug("Returning response: %s", body)
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": body,
    }

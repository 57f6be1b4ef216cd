"""
Lambda Handler Utilities

This module provides the standard pattern for the API Lambda handlers:
- Database session management
- Request body parsing and pydantic validation
- Translation of domain exceptions into API responses

Handlers only implement the happy path and raise `NotFoundError` or
`InvalidOperationError` from the services; the decorator turns them into
404 and 400 responses.
"""

import json
import inspect
from functools import wraps
from typing import Any, Callable, Dict, Optional, Tuple, Type, Union

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError

from database.database import get_db_session
from utils import response
from utils.errors import ClaimsError
from utils.logging_utils import get_logger

# Configure logging
logger = get_logger(__name__)

HandlerFunction = Callable[..., Dict[str, Any]]


def _reject_constant(name: str) -> Any:
    """`NaN` and `Infinity` are not valid JSON numbers."""
    raise ValueError(f"Invalid JSON constant: {name}")


def standard_lambda_handler(
    requires_body: bool = False,
    body_model: Optional[Type[BaseModel]] = None,
) -> Callable[[HandlerFunction], HandlerFunction]:
    """
    Decorator for standardizing Lambda handlers with common error handling patterns.

    Args:
        requires_body: Whether the endpoint requires a JSON object body
        body_model: Pydantic model the body is validated against. The handler
            then receives the model instance as `body` instead of a dict.

    Returns:
        Decorated handler function with standardized error handling
    """
    def decorator(handler_func: HandlerFunction) -> HandlerFunction:
        @wraps(handler_func)
        def wrapper(event: Dict[str, Any], context: Any = None, **kwargs) -> Dict[str, Any]:
            function_name = handler_func.__module__
            http_method = event.get('httpMethod', 'UNKNOWN')
            path = event.get('path', 'UNKNOWN')
            logger.info(f"Request started: {http_method} {path} -> {function_name}")

            # Tests pass their own session in
            db_session = kwargs.pop('db_session', None)
            session_created = False

            try:
                if db_session is None:
                    db_session = get_db_session()
                    session_created = True
                    logger.debug(f"{function_name}: Created new database session")

                body = None
                if requires_body or body_model is not None:
                    try:
                        body = json.loads(event.get("body") or "{}", parse_constant=_reject_constant)
                    except ValueError:
                        logger.warning(f"{function_name}: Invalid JSON in request body")
                        return response.api_response(400, error_details="Invalid JSON in request body", event=event)

                    if not isinstance(body, dict):
                        return response.api_response(400, error_details="Request body must be a JSON object", event=event)

                    if body_model is not None:
                        body = body_model.model_validate(body)

                handler_params = {
                    'event': event,
                    'context': context,
                    'db_session': db_session,
                    'body': body,
                }
                handler_params.update(kwargs)

                # Only pass what the handler asks for
                sig = inspect.signature(handler_func)
                filtered_params = {}
                for param_name, param in sig.parameters.items():
                    if param_name in handler_params:
                        filtered_params[param_name] = handler_params[param_name]
                    elif param_name == '_context':
                        filtered_params[param_name] = context
                    elif param.kind == inspect.Parameter.VAR_KEYWORD:
                        for k, v in handler_params.items():
                            filtered_params.setdefault(k, v)

                result = handler_func(**filtered_params)

                status_code = result.get("statusCode", 0)
                logger.info(f"Request completed: {http_method} {path} -> {function_name} (Status: {status_code})")
                return result

            except ValidationError as e:
                errors = [
                    f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}"
                    for error in e.errors()
                ]
                logger.warning(f"{function_name}: Request validation failed: {errors}")
                return response.api_response(
                    400,
                    message="Validation failed",
                    error_details="Request validation failed",
                    data={"validation_errors": errors},
                    event=event,
                )

            except ClaimsError as e:
                logger.info(f"{function_name}: {type(e).__name__}: {e.message}")
                return response.api_response(e.status_code, error_details=e.message, event=event)

            except SQLAlchemyError as db_error:
                logger.error(f"{function_name}: Database error: {str(db_error)}")
                if db_session is not None:
                    db_session.rollback()
                return response.api_response(500, message="Database error", error_details=str(db_error), event=event)

            except Exception as e:
                logger.exception(f"{function_name}: Unexpected error in Lambda handler: {str(e)}")
                return response.api_response(500, message="Internal Server Error", error_details=str(e), event=event)

            finally:
                if session_created and db_session is not None:
                    try:
                        db_session.close()
                        logger.debug(f"{function_name}: Closed database session")
                    except SQLAlchemyError as e:
                        logger.error(f"{function_name}: Error closing database session: {str(e)}")

        return wrapper
    return decorator


def extract_path_param(event: Dict[str, Any], param_name: str) -> Tuple[bool, Union[str, Dict[str, Any]]]:
    """
    Extract a path parameter from the event.

    The value is not format-checked here; malformed ids are reported as
    not found by the services.

    Args:
        event: API Gateway event
        param_name: Name of the path parameter

    Returns:
        Tuple containing success flag and either the parameter value or an error response
    """
    path_params = event.get("pathParameters") or {}
    param_value = path_params.get(param_name)

    if not param_value:
        logger.warning(f"Missing required path parameter: {param_name}")
        return False, response.api_response(
            400,
            message="Bad Request",
            error_details=f"Missing required path parameter: {param_name}",
            event=event,
        )

    return True, param_value

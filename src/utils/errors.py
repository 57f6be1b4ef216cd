"""
Domain exceptions raised by the claim and damage services.

Handlers translate them into API responses through `standard_lambda_handler`,
using the `status_code` carried by each exception class.
"""


class ClaimsError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ClaimsError):
    """Malformed id, missing claim or missing damage."""
    status_code = 404


class InvalidOperationError(ClaimsError):
    """Business rule violation, e.g. modifying a finished claim."""
    status_code = 400

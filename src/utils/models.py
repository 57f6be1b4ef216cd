"""
Models for Standardized API Responses

Every handler answers with the same envelope so the frontend can read
`data` and `error_details` without caring which endpoint it called.

Example Usage:
    ```
    from utils.models import APIResponse

    response = APIResponse(
        status="Not Found",
        code=404,
        message="Not Found",
        error_details="Claim with ID 65a1f0c2e4b0a1b2c3d4e5f6 not found"
    )

    print(response.to_json())
    # {"status": "Not Found", "code": 404, "message": "Not Found",
    #  "error_details": "Claim with ID 65a1f0c2e4b0a1b2c3d4e5f6 not found"}
    ```
"""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel


class APIResponse(BaseModel):
    """
    Standardized API response model.

    Attributes:
        status (str): Human-readable status message (e.g., "OK", "Bad Request").
        code (int): HTTP status code.
        message (str): A descriptive message explaining the response.
        data (Optional[Union[Dict, List]]): Response payload (if applicable).
        error_details (Optional[str]): Reason for a failed request (if applicable).
    """

    status: str
    code: int
    message: str
    data: Optional[Union[Dict[str, Any], List[Any]]] = None
    error_details: Optional[str] = None

    def to_json(self) -> str:
        """JSON body without `None` values."""
        return self.model_dump_json(exclude_none=True)

"""Request and response schemas for the admin API"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, field_validator
from pydantic import ValidationError as PydanticValidationError

INVALID_REQUEST = "Invalid request"
BODY_NOT_OBJECT = "Request body must be a JSON object"

# Expected JSON type per field, used in 400 messages
FIELD_TYPES = {
    "force": "a boolean",
    "message": "a string",
}


class DeployRequest(BaseModel):
    """Body of POST /deploy"""

    model_config = ConfigDict(extra="ignore")

    force: Optional[StrictBool] = None
    message: Optional[StrictStr] = None

    @field_validator("force", "message", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # Only an absent field falls back to the default
        if value is None:
            raise ValueError("must not be null")
        return value


class InvalidRequest(Exception):
    """Request body failed validation"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"error": INVALID_REQUEST, "message": self.message}


def parse_deploy_request(body: Any) -> DeployRequest:
    """
    Validate a raw POST /deploy body

    Args:
        body: Decoded JSON body (None when empty)

    Returns:
        DeployRequest

    Raises:
        InvalidRequest: If the body is not an object or a field has the wrong type
    """
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise InvalidRequest(BODY_NOT_OBJECT)

    try:
        return DeployRequest.model_validate(body)
    except PydanticValidationError as e:
        field = str(e.errors()[0]["loc"][0])
        raise InvalidRequest(f"{field} must be {FIELD_TYPES.get(field, 'valid')}")

from typing import Any

from pydantic import BaseModel, Field

from app.schemas.validation import ValidationError


class RegisterResponse(BaseModel):
    success: bool = True
    data: dict[str, Any] = Field(default_factory=dict)
    message: str = "User registered successfully"
    errors: list[ValidationError] = Field(default_factory=list)

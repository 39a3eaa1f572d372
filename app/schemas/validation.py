from pydantic import BaseModel


class ValidationError(BaseModel):
    """Individual validation error"""
    field: str
    code: str  # required, min_length, email, pattern, date, min_age, choice, file_type, numeric, max
    message: str


class ValidationErrorResponse(BaseModel):
    """Body of a 400 response from a validated route"""
    errors: list[ValidationError]

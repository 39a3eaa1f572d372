import asyncio
from datetime import date
from types import MappingProxyType

from app.core.request_context import UploadedFile, ValidationContext
from app.core.validation import validate_fields


def years_before(today: date, years: int) -> date:
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        # Feb 29 on a non-leap target year
        return today.replace(year=today.year - years, day=28)


def make_context(fields: dict | None = None, filename: str | None = None, content: bytes = b"data") -> ValidationContext:
    uploaded = None
    if filename is not None:
        uploaded = UploadedFile(filename=filename, content_type=None, size=len(content), content=content)
    return ValidationContext(fields=MappingProxyType(dict(fields or {})), file=uploaded)


def run_validation(field_names, ctx: ValidationContext) -> list[dict]:
    errors = asyncio.run(validate_fields(field_names, ctx))
    return [e.model_dump() for e in errors]


def valid_registration_form(**overrides) -> dict:
    form = {
        "username": "jdoe42",
        "email": "user@example.com",
        "password": "Passw0rd!",
        "dob": years_before(date.today(), 30).isoformat(),
        "fileType": "image",
    }
    form.update(overrides)
    return {k: v for k, v in form.items() if v is not None}

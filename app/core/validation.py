from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Sequence

from fastapi import Request

from app.core.field_rules import FieldName, FieldRule, known_fields, resolve_field, rules_for
from app.core.request_context import ValidationContext, context_from_request
from app.schemas.validation import ValidationError

logger = logging.getLogger(__name__)


class UnknownFieldError(ValueError):
    def __init__(self, names: Sequence[str]):
        self.names = list(names)
        super().__init__(
            f"Unknown validation field(s): {self.names}. Known fields: {list(known_fields())}"
        )


class RequestValidationFailed(Exception):
    """Raised by a validator dependency; rendered as a 400 by the app's handler."""

    def __init__(self, errors: list[ValidationError]):
        self.errors = errors
        super().__init__(f"{len(errors)} validation error(s)")


def _field_key(name: str | FieldName) -> str:
    return name.value if isinstance(name, FieldName) else str(name)


async def _run_field(field: str, rules: tuple[FieldRule, ...], ctx: ValidationContext) -> list[ValidationError]:
    """
    Runs every rule of one field and returns each failure in rule order.
    Rules that depend on an earlier one pass when its precondition fails.
    """
    value = ctx.value(field)
    errors: list[ValidationError] = []
    for rule in rules:
        try:
            ok = rule.check(value, ctx)
        except Exception:
            logger.exception("Rule %s for field %s raised; reporting it as a field error", rule.code, field)
            ok = False
        if not ok:
            errors.append(ValidationError(field=field, code=rule.code, message=rule.message))
    return errors


async def validate_fields(field_names: Iterable[str | FieldName], ctx: ValidationContext) -> list[ValidationError]:
    """
    Validates the requested fields concurrently and waits for all of them.
    Errors come back in the order the fields were requested.
    """
    keys = [_field_key(name) for name in field_names]
    results = await asyncio.gather(*(_run_field(key, rules_for(key), ctx) for key in keys))

    errors: list[ValidationError] = []
    for field_errors in results:
        errors.extend(field_errors)
    return errors


def build_validator(field_names: Sequence[str | FieldName], *, strict: bool = False):
    """
    Usage:
      ctx: ValidationContext = Depends(build_validator(["username", "email"]))

    Unknown field names have no rules. With strict=True they raise
    UnknownFieldError here instead of being skipped on every request.
    """
    keys = [_field_key(name) for name in field_names]
    unknown = [key for key in keys if resolve_field(key) is None]
    if unknown:
        if strict:
            raise UnknownFieldError(unknown)
        logger.warning("Validator built with unknown fields %s; they will not be validated", unknown)

    async def _dep(request: Request) -> ValidationContext:
        ctx = await context_from_request(request)
        errors = await validate_fields(keys, ctx)
        if errors:
            logger.info(
                "Validation failed for %s %s: fields=%s",
                request.method,
                request.url.path,
                sorted({e.field for e in errors}),
            )
            raise RequestValidationFailed(errors)
        return ctx

    return _dep

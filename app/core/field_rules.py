from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping

from email_validator import EmailNotValidError, validate_email

from app.core.request_context import ValidationContext


class FieldName(str, Enum):
    USERNAME = "username"
    EMAIL = "email"
    PASSWORD = "password"
    DOB = "dob"
    ROLE = "role"
    FILE = "file"
    FILE_SIZE = "fileSize"


Check = Callable[[str, ValidationContext], bool]


@dataclass(frozen=True)
class FieldRule:
    code: str
    message: str
    check: Check


ALLOWED_FILE_TYPES = ("png", "jpg", "jpeg", "pdf")
ALLOWED_ROLES = ("admin", "user")
MIN_USERNAME_LENGTH = 5
MIN_AGE_YEARS = 18
MAX_FILE_SIZE_MB = 10

PASSWORD_RE = re.compile(r"(?=.*[a-zA-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}", re.ASCII)
DATE_RE = re.compile(r"(\d{4})([-/])(\d{2})\2(\d{2})", re.ASCII)
NUMERIC_RE = re.compile(r"[+-]?(\d*\.)?\d+", re.ASCII)


# ---- checks ----

def _not_empty(value: str, ctx: ValidationContext) -> bool:
    return value != ""


def _min_length(n: int) -> Check:
    def _check(value: str, ctx: ValidationContext) -> bool:
        return len(value) >= n
    return _check


def _is_email(value: str, ctx: ValidationContext) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _matches(pattern: re.Pattern) -> Check:
    def _check(value: str, ctx: ValidationContext) -> bool:
        return pattern.fullmatch(value) is not None
    return _check


def parse_date(value: str) -> date | None:
    """
    Accepts YYYY-MM-DD or YYYY/MM/DD.
    Returns None when the text is not a real calendar date.
    """
    m = DATE_RE.fullmatch(value)
    if not m:
        return None
    year, _, month, day = m.groups()
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def _is_date(value: str, ctx: ValidationContext) -> bool:
    return parse_date(value) is not None


def age_on(birth: date, today: date) -> int:
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age


def _min_age(years: int) -> Check:
    def _check(value: str, ctx: ValidationContext) -> bool:
        birth = parse_date(value)
        # an unparseable date is reported by the date rule
        if birth is None:
            return True
        return age_on(birth, date.today()) >= years
    return _check


def _is_in(choices: tuple[str, ...]) -> Check:
    def _check(value: str, ctx: ValidationContext) -> bool:
        return value in choices
    return _check


def _file_attached(value: str, ctx: ValidationContext) -> bool:
    return ctx.file is not None


def file_extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower()


def _file_type(allowed: tuple[str, ...]) -> Check:
    def _check(value: str, ctx: ValidationContext) -> bool:
        # a missing file is reported by the required rule
        if ctx.file is None:
            return True
        return file_extension(ctx.file.filename) in allowed
    return _check


def _is_numeric(value: str, ctx: ValidationContext) -> bool:
    return NUMERIC_RE.fullmatch(value) is not None


def _at_most(limit: float) -> Check:
    # plain number compare, no unit conversion
    def _check(value: str, ctx: ValidationContext) -> bool:
        # a non-numeric value is reported by the numeric rule
        if not _is_numeric(value, ctx):
            return True
        return float(value) <= limit
    return _check


# ---- registry ----

FIELD_RULES: Mapping[FieldName, tuple[FieldRule, ...]] = MappingProxyType({
    FieldName.USERNAME: (
        FieldRule("required", "Username is required", _not_empty),
        FieldRule(
            "min_length",
            f"Username must be at least {MIN_USERNAME_LENGTH} characters long",
            _min_length(MIN_USERNAME_LENGTH),
        ),
    ),
    FieldName.EMAIL: (
        FieldRule("required", "Email is required", _not_empty),
        FieldRule("email", "Invalid email address", _is_email),
    ),
    FieldName.PASSWORD: (
        FieldRule("required", "Password is required", _not_empty),
        FieldRule(
            "pattern",
            "Password must contain at least one letter, one number, and one special character",
            _matches(PASSWORD_RE),
        ),
    ),
    FieldName.DOB: (
        FieldRule("required", "Date of Birth is required", _not_empty),
        FieldRule("date", "Invalid Date of Birth format", _is_date),
        FieldRule("min_age", f"Must be at least {MIN_AGE_YEARS} years old", _min_age(MIN_AGE_YEARS)),
    ),
    FieldName.ROLE: (
        FieldRule("required", "Role is required", _not_empty),
        FieldRule("choice", "Invalid role", _is_in(ALLOWED_ROLES)),
    ),
    FieldName.FILE: (
        FieldRule("required", "File is required", _file_attached),
        FieldRule("file_type", "Invalid file type", _file_type(ALLOWED_FILE_TYPES)),
    ),
    FieldName.FILE_SIZE: (
        FieldRule("required", "File size is required", _not_empty),
        FieldRule("numeric", "File size must be a number", _is_numeric),
        FieldRule("max", f"File size should be less than {MAX_FILE_SIZE_MB} MB", _at_most(MAX_FILE_SIZE_MB)),
    ),
})


def resolve_field(name: str | FieldName) -> FieldName | None:
    try:
        return FieldName(name)
    except ValueError:
        return None


def rules_for(name: str | FieldName) -> tuple[FieldRule, ...]:
    """Ordered rules for a field; unknown names get no rules."""
    field = resolve_field(name)
    if field is None:
        return ()
    return FIELD_RULES[field]


def known_fields() -> tuple[str, ...]:
    return tuple(f.value for f in FIELD_RULES)

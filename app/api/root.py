from fastapi import APIRouter

from app.api.register import REGISTER_FIELDS
from app.core.field_rules import known_fields, rules_for

router = APIRouter()


@router.get("/")
def root():
    """Service descriptor, including which fields /register validates and how."""
    return {
        "name": "Registration Service",
        "docs": "/docs",
        "health": "/health",
        "register": {
            "path": "/register",
            "method": "POST",
            "content_type": "multipart/form-data",
            "validated_fields": [f.value for f in REGISTER_FIELDS],
        },
        "rules": {name: [r.code for r in rules_for(name)] for name in known_fields()},
    }

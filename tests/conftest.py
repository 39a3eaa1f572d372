import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from app.core.request_context import ValidationContext
from app.core.validation import RequestValidationFailed, build_validator
from app.main import request_validation_failed_handler


@pytest.fixture()
def make_client():
    """
    Builds a throwaway app with one POST /check route guarded by a validator:
      client = make_client(["role", "fileSize"])
    """
    def _make(field_names, **kwargs) -> TestClient:
        test_app = FastAPI()
        test_app.add_exception_handler(RequestValidationFailed, request_validation_failed_handler)

        @test_app.post("/check")
        def check(ctx: ValidationContext = Depends(build_validator(field_names, **kwargs))):
            return {"ok": True, "fields": dict(ctx.fields)}

        return TestClient(test_app)

    return _make

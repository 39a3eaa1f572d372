import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from app.core.field_rules import FieldName
from app.core.request_context import ValidationContext
from app.core.validation import build_validator
from app.schemas.register import RegisterResponse
from app.schemas.validation import ValidationErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["register"])

# role and fileSize have rules but are not required on this route
REGISTER_FIELDS = (
    FieldName.USERNAME,
    FieldName.EMAIL,
    FieldName.PASSWORD,
    FieldName.DOB,
    FieldName.FILE,
)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_200_OK,
    responses={400: {"model": ValidationErrorResponse}},
)
def register(
    username: str | None = Form(None),
    email: str | None = Form(None),
    password: str | None = Form(None),
    dob: str | None = Form(None),
    role: str | None = Form(None),
    fileType: str | None = Form(None),
    file: UploadFile | None = File(None),
    ctx: ValidationContext = Depends(build_validator(REGISTER_FIELDS, strict=True)),
):
    """
    Accepts the registration form once every field in REGISTER_FIELDS passed.
    Persisting the user is not implemented; the response is a fixed payload.
    """
    if ctx.file is not None:
        logger.info(
            "Registration upload received: filename=%s content_type=%s size=%d fileType=%s",
            ctx.file.filename,
            ctx.file.content_type,
            ctx.file.size,
            fileType,
        )

    return RegisterResponse()

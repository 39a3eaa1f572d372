from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from fastapi import Request
from starlette.datastructures import UploadFile


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    content_type: str | None
    size: int
    content: bytes = field(repr=False)


@dataclass(frozen=True)
class ValidationContext:
    """
    Read-only view of one request's submitted form:
      fields: {"username": "...", "email": "...", ...}  (strings only)
      file:   the part named "file", if one was attached
    """
    fields: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    file: UploadedFile | None = None

    def value(self, name: str) -> str:
        # missing fields behave like empty ones
        return self.fields.get(name, "")


async def read_upload(upload: UploadFile) -> UploadedFile:
    content = await upload.read()
    await upload.seek(0)
    return UploadedFile(
        filename=upload.filename or "",
        content_type=upload.content_type,
        size=len(content),
        content=content,
    )


async def context_from_request(request: Request, file_field: str = "file") -> ValidationContext:
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        return ValidationContext()

    form = await request.form()

    fields: dict[str, str] = {}
    for key, value in form.multi_items():
        # first value wins, file parts are handled below
        if isinstance(value, str) and key not in fields:
            fields[key] = value

    upload = form.get(file_field)
    uploaded = None
    # an empty file input still arrives as a part with no filename
    if isinstance(upload, UploadFile) and upload.filename:
        uploaded = await read_upload(upload)

    return ValidationContext(fields=MappingProxyType(fields), file=uploaded)

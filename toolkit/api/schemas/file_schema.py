# toolkit/api/schemas/file_schema.py
from __future__ import annotations

from pydantic import BaseModel, Field

from toolkit.infrastructure.storage.file_storage import UploadedFile


class UploadFileResponse(BaseModel):
    new_file_name: str = Field(min_length=1, max_length=255)
    original_file_name: str = Field(min_length=1, max_length=255)
    file_size_bytes: int = Field(ge=0)

    @classmethod
    def from_uploaded(cls, f: UploadedFile) -> "UploadFileResponse":
        return cls(
            new_file_name=f.new_file_name,
            original_file_name=f.original_file_name,
            file_size_bytes=f.file_size_bytes,
        )


class UploadFilesResponse(BaseModel):
    files: list[UploadFileResponse]

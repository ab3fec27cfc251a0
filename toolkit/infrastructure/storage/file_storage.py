# toolkit/infrastructure/storage/file_storage.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, BinaryIO


@dataclass(frozen=True)
class UploadedFile:
    new_file_name: str
    original_file_name: str
    file_size_bytes: int


class FileStorage(Protocol):
    def save(
        self,
        *,
        fileobj: BinaryIO,
        stored_name: str,
        original_name: str,
    ) -> UploadedFile:
        """Persiste o conteúdo inteiro de ``fileobj`` e devolve o descritor do arquivo gravado."""
        raise NotImplementedError

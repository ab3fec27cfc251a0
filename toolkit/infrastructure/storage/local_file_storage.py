# toolkit/infrastructure/storage/local_file_storage.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

import structlog

from toolkit.core.exceptions import DirectoryCreateError, InvalidFileNameError, PersistenceError
from toolkit.infrastructure.storage.file_storage import FileStorage, UploadedFile

logger = structlog.get_logger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1MB


def create_dir_if_not_exist(path: str | os.PathLike, mode: int = 0o755) -> Path:
    """Cria o diretório e todos os ancestrais que faltarem. Idempotente."""
    target = Path(path).expanduser()
    try:
        target.mkdir(mode=mode, parents=True, exist_ok=True)
    except OSError as e:
        # inclui o caso em que o caminho existe mas não é diretório
        raise DirectoryCreateError(str(target), str(e)) from e
    return target


def is_safe_basename(name: str) -> bool:
    """Aceita apenas nomes simples (sem diretórios)."""
    if not isinstance(name, str) or not name:
        return False
    if name in (".", ".."):
        return False
    if "/" in name or "\\" in name or "\x00" in name:
        return False
    return name == Path(name).name


@dataclass(frozen=True)
class LocalFileStorageConfig:
    base_path: str


class LocalFileStorage(FileStorage):
    def __init__(self, *, config: LocalFileStorageConfig) -> None:
        raw = (str(config.base_path) if config.base_path else "").strip()
        if not raw:
            raise DirectoryCreateError(raw, "diretório de destino não informado")

        self._base = create_dir_if_not_exist(raw).resolve()

        if not self._base.is_dir():
            raise DirectoryCreateError(str(self._base), "não é um diretório")

    def _abs_path_from_stored(self, stored_name: str) -> Path:
        if not is_safe_basename(stored_name):
            raise InvalidFileNameError(stored_name)

        abs_path = (self._base / stored_name).resolve()

        # anti path traversal
        base_str = str(self._base)
        abs_str = str(abs_path)
        if not abs_str.startswith(base_str + os.sep):
            raise InvalidFileNameError(stored_name)

        return abs_path

    def save(
        self,
        *,
        fileobj: BinaryIO,
        stored_name: str,
        original_name: str,
    ) -> UploadedFile:
        abs_path = self._abs_path_from_stored(stored_name)

        size = 0
        try:
            with open(abs_path, "wb") as out:
                while True:
                    chunk = fileobj.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    out.write(chunk)
                    size += len(chunk)
                out.flush()
                os.fsync(out.fileno())
        except OSError as e:
            self._remove_partial(abs_path)
            raise PersistenceError(str(abs_path), str(e)) from e

        logger.debug("file_persisted", path=str(abs_path), size_bytes=size)

        return UploadedFile(
            new_file_name=stored_name,
            original_file_name=original_name,
            file_size_bytes=size,
        )

    @staticmethod
    def _remove_partial(abs_path: Path) -> None:
        try:
            abs_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("file_remove_failed", path=str(abs_path), error=str(e))

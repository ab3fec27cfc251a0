# toolkit/services/upload_service.py
from __future__ import annotations

import os
from typing import Callable

import structlog
from werkzeug.datastructures import FileStorage as WzFileStorage
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.formparser import parse_form_data
from werkzeug.wrappers import Request

from toolkit.config.tools_config import ToolsConfig
from toolkit.core.exceptions import (
    DisallowedFileTypeError,
    InvalidMultipartError,
    NoFileUploadedError,
    TooManyFilesError,
    UploadError,
    UploadTooLargeError,
)
from toolkit.core.sniffer import SNIFF_LEN, detect_content_type, is_allowed_type
from toolkit.infrastructure.security.random_string import random_string
from toolkit.infrastructure.storage.file_storage import FileStorage, UploadedFile
from toolkit.infrastructure.storage.local_file_storage import LocalFileStorage, LocalFileStorageConfig

logger = structlog.get_logger(__name__)

RANDOM_NAME_LENGTH = 25

StorageFactory = Callable[[str], FileStorage]


def _local_storage(upload_dir: str) -> FileStorage:
    return LocalFileStorage(config=LocalFileStorageConfig(base_path=upload_dir))


def _close(parts: list[WzFileStorage]) -> None:
    for part in parts:
        part.close()


def file_extension(name: str) -> str:
    """Extensão a partir do último ponto do nome base (``a.tar.gz`` -> ``.gz``)."""
    base = name.replace("\\", "/").rsplit("/", 1)[-1]
    idx = base.rfind(".")
    return base[idx:] if idx >= 0 else ""


class UploadService:
    def __init__(self, *, config: ToolsConfig, storage_factory: StorageFactory = _local_storage) -> None:
        self._config = config
        self._storage_factory = storage_factory

    # -------------------------
    # API pública
    # -------------------------

    def upload_files(self, request: Request, upload_dir: str | os.PathLike, *, rename: bool = True) -> list[UploadedFile]:
        """Grava todos os arquivos do multipart em ``upload_dir``.

        Deve ser chamado antes de qualquer acesso a ``request.form`` /
        ``request.files``: o corpo é lido direto do ambiente WSGI, com o limite
        de ``max_upload_bytes``.

        Falha no primeiro arquivo problemático; o erro leva em ``uploaded`` os
        arquivos já gravados até ali.
        """
        parts = self._collect_parts(request)
        return self._store_all(parts, os.fspath(upload_dir), rename=rename)

    def upload_one_file(self, request: Request, upload_dir: str | os.PathLike, *, rename: bool = True) -> UploadedFile:
        parts = self._collect_parts(request)
        if len(parts) != 1:
            # recusa antes de gravar qualquer coisa
            _close(parts)
            if not parts:
                raise NoFileUploadedError()
            raise TooManyFilesError(len(parts))

        return self._store_all(parts, os.fspath(upload_dir), rename=rename)[0]

    # -------------------------
    # Helpers
    # -------------------------

    def _collect_parts(self, request: Request) -> list[WzFileStorage]:
        max_bytes = self._config.max_upload_bytes

        length = request.content_length
        if length is not None and length > max_bytes:
            logger.warning("upload_rejected", reason="too_large", content_length=length, max_bytes=max_bytes)
            raise UploadTooLargeError(max_bytes)

        if request.mimetype != "multipart/form-data":
            raise InvalidMultipartError()

        try:
            _, _, files = parse_form_data(
                request.environ,
                max_content_length=max_bytes,
                silent=False,
            )
        except RequestEntityTooLarge as e:
            logger.warning("upload_rejected", reason="too_large", max_bytes=max_bytes)
            raise UploadTooLargeError(max_bytes) from e
        except ValueError as e:
            raise InvalidMultipartError(f"Multipart inválido: {e}") from e

        # partes sem filename são campos comuns de formulário
        return [f for _, f in files.items(multi=True) if f is not None and f.filename]

    def _store_all(self, parts: list[WzFileStorage], upload_dir: str, *, rename: bool) -> list[UploadedFile]:
        out: list[UploadedFile] = []
        if not parts:
            return out

        try:
            storage = self._storage_factory(upload_dir)

            for part in parts:
                self._check_type(part)

                stored_name = self._assign_name(part.filename, rename=rename)
                uploaded = storage.save(
                    fileobj=part.stream,
                    stored_name=stored_name,
                    original_name=part.filename,
                )
                out.append(uploaded)

                logger.info(
                    "upload_accepted",
                    original_name=uploaded.original_file_name,
                    stored_name=uploaded.new_file_name,
                    size_bytes=uploaded.file_size_bytes,
                )
        except UploadError as e:
            e.uploaded = list(out)
            logger.warning("upload_failed", error=str(e), uploaded_count=len(out))
            raise
        finally:
            _close(parts)

        return out

    def _check_type(self, part: WzFileStorage) -> None:
        stream = part.stream
        head = stream.read(SNIFF_LEN)
        # o conteúdo inteiro ainda precisa ser copiado
        stream.seek(0)

        content_type = detect_content_type(head)
        if not is_allowed_type(content_type, self._config.allowed_mime_types):
            logger.warning("upload_rejected", reason="file_type", content_type=content_type, original_name=part.filename)
            raise DisallowedFileTypeError(content_type)

    @staticmethod
    def _assign_name(original_name: str, *, rename: bool) -> str:
        if not rename:
            return original_name
        return f"{random_string(RANDOM_NAME_LENGTH)}{file_extension(original_name)}"

# toolkit/tools.py
from __future__ import annotations

import os
from typing import Any, TypeVar

import httpx
from werkzeug.wrappers import Request, Response

from toolkit.config.settings import Settings
from toolkit.config.tools_config import ToolsConfig
from toolkit.core.alphabet import Alphabet
from toolkit.core.slug import slugify
from toolkit.infrastructure.http.remote_json import push_json_to_remote
from toolkit.infrastructure.security.random_string import random_string
from toolkit.infrastructure.storage.download import download_static_file
from toolkit.infrastructure.storage.file_storage import UploadedFile
from toolkit.infrastructure.storage.local_file_storage import create_dir_if_not_exist
from toolkit.services.json_service import Headers, JsonService
from toolkit.services.upload_service import UploadService

T = TypeVar("T")


class Tools:
    """Ponto único de acesso aos helpers, todos sob o mesmo ``ToolsConfig``."""

    def __init__(self, config: ToolsConfig | None = None) -> None:
        self.config = config or ToolsConfig()
        self._uploads = UploadService(config=self.config)
        self._json = JsonService(config=self.config)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Tools":
        return cls(ToolsConfig.from_settings(settings))

    # strings

    def random_string(self, n: int, alphabet: Alphabet = Alphabet.ALL) -> str:
        return random_string(n, alphabet)

    def slugify(self, s: str) -> str:
        return slugify(s)

    # arquivos

    def create_dir_if_not_exist(self, path: str | os.PathLike) -> None:
        create_dir_if_not_exist(path)

    def upload_files(self, request: Request, upload_dir: str | os.PathLike, rename: bool = True) -> list[UploadedFile]:
        return self._uploads.upload_files(request, upload_dir, rename=rename)

    def upload_one_file(self, request: Request, upload_dir: str | os.PathLike, rename: bool = True) -> UploadedFile:
        return self._uploads.upload_one_file(request, upload_dir, rename=rename)

    def download_static_file(
        self,
        request: Request,
        directory: str | os.PathLike,
        file_name: str,
        display_name: str,
    ) -> Response:
        return download_static_file(request, directory, file_name, display_name)

    # JSON

    def read_json(self, request: Request, target: type[T]) -> T:
        return self._json.read_json(request, target)

    def write_json(self, data: Any, status: int = 200, headers: Headers | None = None) -> Response:
        return self._json.write_json(data, status=status, headers=headers)

    def error_json(self, err: BaseException | str, status: int = 400, headers: Headers | None = None) -> Response:
        return self._json.error_json(err, status=status, headers=headers)

    def push_json_to_remote(self, uri: str, data: Any, client: httpx.Client | None = None) -> tuple[httpx.Response, int]:
        return push_json_to_remote(uri, data, client)

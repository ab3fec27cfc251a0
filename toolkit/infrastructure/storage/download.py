# toolkit/infrastructure/storage/download.py
from __future__ import annotations

import os
from pathlib import Path

import structlog
from werkzeug.security import safe_join
from werkzeug.utils import send_file
from werkzeug.wrappers import Request, Response

from toolkit.core.exceptions import NotFoundError

logger = structlog.get_logger(__name__)


def _quote_filename(name: str) -> str:
    return name.replace("\\", "\\\\").replace('"', '\\"')


def download_static_file(
    request: Request,
    directory: str | os.PathLike,
    file_name: str,
    display_name: str,
) -> Response:
    """Serve ``directory/file_name`` forçando download com o nome ``display_name``."""
    joined = safe_join(os.fspath(directory), file_name)
    if joined is None:
        raise NotFoundError("Arquivo não encontrado.")

    abs_path = Path(joined)
    if not abs_path.exists() or not abs_path.is_file():
        raise NotFoundError("Arquivo não encontrado.")

    response = send_file(
        abs_path,
        request.environ,
        mimetype="application/octet-stream",
        as_attachment=True,
        download_name=display_name,
        conditional=True,
        etag=True,
        last_modified=True,
    )
    # o werkzeug omite as aspas quando o nome é um token simples;
    # nomes não-ASCII ficam com o filename* gerado por ele
    if display_name.isascii():
        response.headers["Content-Disposition"] = f'attachment; filename="{_quote_filename(display_name)}"'

    logger.info("file_download", file_name=file_name, display_name=display_name)
    return response

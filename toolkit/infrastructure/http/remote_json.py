# toolkit/infrastructure/http/remote_json.py
from __future__ import annotations

from typing import Any

import httpx
import structlog

from toolkit.core.exceptions import RemotePushError
from toolkit.core.json_encoding import encode_json

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


def push_json_to_remote(uri: str, data: Any, client: httpx.Client | None = None) -> tuple[httpx.Response, int]:
    """Envia ``data`` como JSON via POST e devolve a resposta e o status.

    Sem ``client``, usa um ``httpx.Client`` temporário com timeout padrão.
    """
    body = encode_json(data)

    headers = {"Content-Type": "application/json"}

    owns_client = client is None
    http = client or httpx.Client(timeout=DEFAULT_TIMEOUT_SECONDS)
    try:
        response = http.post(uri, content=body, headers=headers)
        # garante o corpo disponível depois de fechar o client
        response.read()
    except httpx.HTTPError as e:
        logger.warning("remote_push_failed", uri=uri, error=str(e))
        raise RemotePushError(uri, str(e)) from e
    finally:
        if owns_client:
            http.close()

    logger.info("remote_push", uri=uri, status_code=response.status_code)
    return response, response.status_code

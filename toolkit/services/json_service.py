# toolkit/services/json_service.py
from __future__ import annotations

import json
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, TypeVar

import structlog
from pydantic import TypeAdapter, ValidationError
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.wrappers import Request, Response

from toolkit.config.tools_config import ToolsConfig
from toolkit.core.envelope import JSONResponse
from toolkit.core.exceptions import (
    EmptyBodyError,
    JSONDecodeFailedError,
    JSONSerializationError,
    JSONTooLargeError,
    MultipleJSONValuesError,
    UnknownJSONFieldError,
)
from toolkit.core.json_encoding import encode_json
from toolkit.core.json_errors import classify_json_error, format_loc
from toolkit.core.json_fields import find_unknown_field

logger = structlog.get_logger(__name__)

T = TypeVar("T")

READ_CHUNK = 64 * 1024
_JSON_WS = " \t\n\r"

Headers = Mapping[str, Any]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"constante JSON inválida: {name}")


_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def _skip_ws(text: str, idx: int) -> int:
    while idx < len(text) and text[idx] in _JSON_WS:
        idx += 1
    return idx


class JsonService:
    response_class = Response

    def __init__(self, *, config: ToolsConfig) -> None:
        self._config = config

    # -------------------------
    # Leitura
    # -------------------------

    def read_json(self, request: Request, target: type[T]) -> T:
        """Lê exatamente um valor JSON do corpo e valida contra ``target``.

        ``target`` pode ser um modelo pydantic ou qualquer tipo aceito por
        ``TypeAdapter``. Toda falha vira uma única subclasse de ``JSONError``.
        """
        max_bytes = self._config.max_json_bytes
        try:
            body = self._read_limited(request)
            return self._decode(body, target)
        except (ValueError, RequestEntityTooLarge) as e:
            err = classify_json_error(e, max_bytes=max_bytes)
            logger.info("json_decode_failed", error=type(err).__name__, detail=str(err))
            raise err from e

    def _read_limited(self, request: Request) -> bytes:
        max_bytes = self._config.max_json_bytes

        length = request.content_length
        if length is not None and length > max_bytes:
            raise JSONTooLargeError(max_bytes)

        stream = request.stream
        chunks: list[bytes] = []
        total = 0
        while True:
            chunk = stream.read(min(READ_CHUNK, max_bytes + 1 - total))
            if not chunk:
                break
            chunks.append(chunk)
            total += len(chunk)
            if total > max_bytes:
                raise JSONTooLargeError(max_bytes)
        return b"".join(chunks)

    def _decode(self, body: bytes, target: type[T]) -> T:
        text = body.decode("utf-8")

        start = _skip_ws(text, 0)
        if start == len(text):
            raise EmptyBodyError()

        value, end = _DECODER.raw_decode(text, start)

        try:
            result = _adapter(target).validate_json(text[start:end], strict=True)
        except ValidationError as e:
            err = classify_json_error(e, max_bytes=self._config.max_json_bytes)
            # sintaxe e tipo vencem a chave desconhecida; a falha genérica perde
            if isinstance(err, JSONDecodeFailedError):
                self._check_unknown_fields(value, target)
            raise err from e

        self._check_unknown_fields(value, target)

        # qualquer coisa depois do primeiro valor, inclusive outro JSON completo
        if _skip_ws(text, end) != len(text):
            raise MultipleJSONValuesError()

        return result

    def _check_unknown_fields(self, value: Any, target: Any) -> None:
        if self._config.allow_unknown_json_fields:
            return
        unknown = find_unknown_field(value, target)
        if unknown is not None:
            raise UnknownJSONFieldError(format_loc(unknown))

    # -------------------------
    # Escrita
    # -------------------------

    def write_json(self, data: Any, status: int = 200, headers: Headers | None = None) -> Response:
        # serializa antes de montar a resposta
        try:
            body = encode_json(data)
        except JSONSerializationError as e:
            logger.error("json_serialization_failed", error=str(e))
            raise

        response = self.response_class(body, status=status)
        for key, value in (headers or {}).items():
            if isinstance(value, str):
                response.headers[key] = value
            else:
                response.headers.setlist(key, list(value))
        response.headers["Content-Type"] = "application/json"
        return response

    def error_json(self, err: BaseException | str, status: int = 400, headers: Headers | None = None) -> Response:
        payload = JSONResponse(error=True, message=str(err))
        return self.write_json(payload.to_payload(), status=status, headers=headers)

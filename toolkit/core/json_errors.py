# toolkit/core/json_errors.py
"""Unifica as falhas de leitura de JSON em uma única categoria.

A ordem de prioridade é: sintaxe, tipo, corpo vazio, chave desconhecida,
tamanho e, por fim, a falha genérica. Uma mesma falha pode se encaixar em
mais de uma categoria; vale a primeira.
"""
from __future__ import annotations

import json
from typing import Any, Iterable

from pydantic import ValidationError
from werkzeug.exceptions import RequestEntityTooLarge

from toolkit.core.exceptions import (
    EmptyBodyError,
    JSONDecodeFailedError,
    JSONError,
    JSONTooLargeError,
    JSONTypeMismatchError,
    MalformedJSONError,
    UnknownJSONFieldError,
)

_TYPE_MISMATCH_SUFFIXES = ("_type", "_parsing")
_TYPE_MISMATCH_ERRORS = {"int_from_float", "is_instance_of", "model_attributes_type"}


def format_loc(loc: Iterable[Any]) -> str:
    return ".".join(str(p) for p in loc)


def _is_type_mismatch(error_type: str) -> bool:
    return error_type in _TYPE_MISMATCH_ERRORS or error_type.endswith(_TYPE_MISMATCH_SUFFIXES)


def _classify_validation_error(exc: ValidationError) -> JSONError:
    errors = exc.errors()

    for err in errors:
        if err["type"] == "json_invalid":
            return MalformedJSONError()

    for err in errors:
        if _is_type_mismatch(err["type"]):
            return JSONTypeMismatchError(field=format_loc(err["loc"]) or None)

    for err in errors:
        if err["type"] == "extra_forbidden":
            return UnknownJSONFieldError(format_loc(err["loc"]))

    first = errors[0] if errors else None
    if first is None:
        return JSONDecodeFailedError(str(exc))
    where = format_loc(first["loc"])
    message = f"{where}: {first['msg']}" if where else first["msg"]
    return JSONDecodeFailedError(f"JSON inválido: {message}")


def classify_json_error(exc: BaseException, *, max_bytes: int) -> JSONError:
    if isinstance(exc, JSONError):
        return exc

    # sintaxe
    if isinstance(exc, json.JSONDecodeError):
        if not exc.doc.strip():
            return EmptyBodyError()
        return MalformedJSONError(offset=exc.pos)
    if isinstance(exc, UnicodeDecodeError):
        return MalformedJSONError(offset=exc.start)

    # tipo / chave desconhecida (vindos da validação)
    if isinstance(exc, ValidationError):
        return _classify_validation_error(exc)

    if isinstance(exc, RequestEntityTooLarge):
        return JSONTooLargeError(max_bytes)

    # NaN / Infinity recusados pelo parser
    if isinstance(exc, ValueError):
        return MalformedJSONError()

    return JSONDecodeFailedError(str(exc))

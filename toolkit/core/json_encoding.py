# toolkit/core/json_encoding.py
from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError, to_jsonable_python

from toolkit.core.exceptions import JSONSerializationError


def encode_json(data: Any) -> bytes:
    """Serializa ``data`` em JSON UTF-8 compacto.

    Modelos pydantic passam por ``model_dump(mode="json")``. Valores sem
    representação JSON (objetos arbitrários, NaN, Infinity) levantam
    ``JSONSerializationError``; nenhum corpo parcial é produzido.
    """
    try:
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json")
        plain = to_jsonable_python(data)
        text = json.dumps(plain, allow_nan=False, ensure_ascii=False, separators=(",", ":"))
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise JSONSerializationError(str(e)) from e
    return text.encode("utf-8")

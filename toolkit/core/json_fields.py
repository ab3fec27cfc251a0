# toolkit/core/json_fields.py
from __future__ import annotations

import dataclasses
import types
from collections.abc import Mapping, Sequence
from typing import Any, Union

from pydantic import BaseModel
from typing_extensions import Annotated, NotRequired, Required, get_args, get_origin, get_type_hints, is_typeddict

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, Sequence)
_MAPPING_ORIGINS = (dict, Mapping)
_WRAPPER_ORIGINS = (Annotated, Required, NotRequired)


def _is_model(tp: Any) -> bool:
    return isinstance(tp, type) and not is_typeddict(tp) and issubclass(tp, BaseModel)


def _is_object_type(tp: Any) -> bool:
    """Tipos validados a partir de um objeto JSON com chaves declaradas."""
    if not isinstance(tp, type):
        return False
    return is_typeddict(tp) or dataclasses.is_dataclass(tp) or _is_model(tp)


def _declared_keys(tp: type) -> dict[str, Any]:
    keys: dict[str, Any] = {}

    if _is_model(tp):
        for name, info in tp.model_fields.items():
            keys[name] = info.annotation
            if info.alias:
                keys[info.alias] = info.annotation
            if isinstance(info.validation_alias, str):
                keys[info.validation_alias] = info.annotation
        return keys

    hints = get_type_hints(tp, include_extras=True)
    if is_typeddict(tp):
        return dict(hints)

    for field in dataclasses.fields(tp):
        keys[field.name] = hints.get(field.name, Any)
    return keys


def _allows_extra(tp: type) -> bool:
    if _is_model(tp):
        return tp.model_config.get("extra") == "allow"
    # TypedDict e dataclass recebem config via __pydantic_config__
    config = getattr(tp, "__pydantic_config__", None) or {}
    return config.get("extra") == "allow"


def _applies_to(tp: Any, value: Any) -> bool:
    if _is_object_type(tp):
        return isinstance(value, dict)
    origin = get_origin(tp)
    if origin in _WRAPPER_ORIGINS:
        return _applies_to(get_args(tp)[0], value)
    if origin in _MAPPING_ORIGINS:
        return isinstance(value, dict)
    if origin in _SEQUENCE_ORIGINS:
        return isinstance(value, list)
    return False


def find_unknown_field(value: Any, target: Any, path: tuple[Any, ...] = ()) -> tuple[Any, ...] | None:
    """Caminho da primeira chave de objeto que ``target`` não declara, ou None.

    Desce por modelos pydantic, TypedDicts e dataclasses aninhados, além de
    listas, tuplas, dicts e uniões. Tipos com ``extra="allow"`` aceitam
    qualquer chave no próprio nível.
    """
    if _is_object_type(target):
        if not isinstance(value, dict):
            return None
        keys = _declared_keys(target)
        allow_extra = _allows_extra(target)
        for key, item in value.items():
            if key not in keys:
                if allow_extra:
                    continue
                return path + (key,)
            hit = find_unknown_field(item, keys[key], path + (key,))
            if hit is not None:
                return hit
        return None
    origin = get_origin(target)
    args = get_args(target)

    if origin in _WRAPPER_ORIGINS:
        return find_unknown_field(value, args[0], path)

    if origin is Union or origin is types.UnionType:
        candidates = [a for a in args if _applies_to(a, value)]
        first_hit = None
        for candidate in candidates:
            hit = find_unknown_field(value, candidate, path)
            if hit is None:
                return None
            first_hit = first_hit or hit
        return first_hit

    if origin in _SEQUENCE_ORIGINS and isinstance(value, list) and args:
        if origin is tuple and not (len(args) == 2 and args[1] is Ellipsis):
            pairs = zip(value, args)
        else:
            pairs = ((item, args[0]) for item in value)
        for i, (item, item_type) in enumerate(pairs):
            hit = find_unknown_field(item, item_type, path + (i,))
            if hit is not None:
                return hit
        return None

    if origin in _MAPPING_ORIGINS and isinstance(value, dict) and len(args) == 2:
        for key, item in value.items():
            hit = find_unknown_field(item, args[1], path + (key,))
            if hit is not None:
                return hit
        return None

    return None

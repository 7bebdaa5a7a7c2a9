"""JSON encoding of request bodies and typed decoding of action results.

Request bodies are written as compact JSON followed by a newline. Dataclass
bodies are encoded field by field; a field may carry its wire name in
``metadata={"json": "..."}`` (see ``json_field``).

Results are decoded against a target type:

    - ``None`` or ``typing.Any``: the JSON value unchanged.
    - ``str``, ``int``, ``float``, ``bool``: checked scalars (``bool`` is not an
      ``int``; ``float`` accepts integers).
    - ``Optional[X]``, ``List[X]``, ``Dict[str, X]``.
    - dataclasses: keys matched by wire name, then field name, then
      case-insensitively; unknown keys are ignored. A JSON ``null`` object
      yields the field defaults, and a ``null`` member leaves a non-optional
      field at its default.
    - any other callable: called with the JSON value.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import json
import types
import typing
from typing import Any, Dict, List, Optional

from ckan_client.adapters.api_errors import DecodeError, EncodingError

_NONE_TYPE = type(None)
_SCALARS = (str, int, float, bool)
_UNION_ORIGINS = tuple(
    origin for origin in (typing.Union, getattr(types, "UnionType", None)) if origin is not None
)


def json_field(name: str, **kwargs: Any) -> Any:
    """Return a dataclass field whose JSON key is ``name``."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata["json"] = name
    return dataclasses.field(metadata=metadata, **kwargs)


def _wire_name(f: dataclasses.Field) -> str:
    return str(f.metadata.get("json") or f.name)


def to_jsonable(obj: Any) -> Any:
    """Convert dataclasses (recursively) into plain JSON-compatible values."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {_wire_name(f): to_jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, dict):
        return {key: to_jsonable(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(item) for item in obj]
    return obj


def encode_body(obj: Any) -> bytes:
    """Serialize ``obj`` as one line of compact JSON.

    Raises:
        EncodingError: If the value cannot be represented as JSON.
    """
    try:
        text = json.dumps(
            to_jsonable(obj),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"json: unsupported value: {exc}") from exc
    return (text + "\n").encode("utf-8")


def decode_into(into: Any, data: Any, *, path: str = "result") -> Any:
    """Decode a parsed JSON value into the target type ``into``.

    Raises:
        DecodeError: If ``data`` does not match ``into``. ``path`` in the error
            points at the offending value.
    """
    if into is None or into is Any:
        return data

    origin = typing.get_origin(into)
    args = typing.get_args(into)

    if origin is not None and origin in _UNION_ORIGINS:
        if data is None and _NONE_TYPE in args:
            return None
        members = [arg for arg in args if arg is not _NONE_TYPE]
        if len(members) == 1:
            return decode_into(members[0], data, path=path)
        for member in members:
            try:
                return decode_into(member, data, path=path)
            except DecodeError:
                continue
        raise DecodeError(_mismatch(path, into, data), path=path, payload=data)

    if origin in (list, collections.abc.Sequence) or into is list:
        return _decode_list(args[0] if args else Any, data, path=path)

    if origin in (dict, collections.abc.Mapping) or into is dict:
        value_type = args[1] if len(args) == 2 else Any
        if not isinstance(data, dict):
            raise DecodeError(_mismatch(path, into, data), path=path, payload=data)
        return {
            key: decode_into(value_type, value, path=f"{path}.{key}")
            for key, value in data.items()
        }

    if isinstance(into, type) and dataclasses.is_dataclass(into):
        return _decode_dataclass(into, data, path=path)

    if into in _SCALARS:
        return _decode_scalar(into, data, path=path)

    if callable(into):
        try:
            return into(data)
        except (TypeError, ValueError, KeyError) as exc:
            raise DecodeError(f"{path}: {exc}", path=path, payload=data) from exc

    raise DecodeError(f"{path}: unsupported target type {into!r}", path=path)


def _decode_list(item_type: Any, data: Any, *, path: str) -> List[Any]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise DecodeError(_mismatch(path, list, data), path=path, payload=data)
    items: List[Any] = []
    for index, raw in enumerate(data):
        item_path = f"{path}[{index}]"
        try:
            items.append(decode_into(item_type, raw, path=item_path))
        except DecodeError as exc:
            raise DecodeError(
                str(exc),
                path=exc.path or item_path,
                partial=items,
                payload=exc.payload,
            ) from exc
    return items


def _decode_dataclass(cls: type, data: Any, *, path: str) -> Any:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DecodeError(_mismatch(path, cls, data), path=path, payload=data)
    hints = typing.get_type_hints(cls)
    folded = {str(key).lower(): key for key in data}
    kwargs: Dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        key = _lookup_key(f, data, folded)
        if key is None:
            if not _has_default(f):
                raise DecodeError(
                    f"{path}: missing required field {_wire_name(f)!r}",
                    path=f"{path}.{_wire_name(f)}",
                    payload=data,
                )
            continue
        hint = hints.get(f.name, Any)
        if data[key] is None and _has_default(f) and not _accepts_none(hint):
            continue
        kwargs[f.name] = decode_into(hint, data[key], path=f"{path}.{key}")
    return cls(**kwargs)


def _has_default(f: dataclasses.Field) -> bool:
    return f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING


def _accepts_none(hint: Any) -> bool:
    if hint is None or hint is Any or hint is _NONE_TYPE:
        return True
    origin = typing.get_origin(hint)
    return origin is not None and origin in _UNION_ORIGINS and _NONE_TYPE in typing.get_args(hint)


def _lookup_key(f: dataclasses.Field, data: Dict[str, Any], folded: Dict[str, Any]) -> Optional[str]:
    for candidate in (_wire_name(f), f.name):
        if candidate in data:
            return candidate
    for candidate in (_wire_name(f), f.name):
        key = folded.get(candidate.lower())
        if key is not None:
            return key
    return None


def _decode_scalar(into: type, data: Any, *, path: str) -> Any:
    if into is bool:
        ok = isinstance(data, bool)
    elif into is int:
        ok = isinstance(data, int) and not isinstance(data, bool)
    elif into is float:
        ok = isinstance(data, (int, float)) and not isinstance(data, bool)
        if ok:
            return float(data)
    else:
        ok = isinstance(data, str)
    if not ok:
        raise DecodeError(_mismatch(path, into, data), path=path, payload=data)
    return data


def _json_type_name(data: Any) -> str:
    if data is None:
        return "null"
    if isinstance(data, bool):
        return "bool"
    if isinstance(data, (int, float)):
        return "number"
    if isinstance(data, str):
        return "string"
    if isinstance(data, list):
        return "array"
    if isinstance(data, dict):
        return "object"
    return type(data).__name__


def _mismatch(path: str, into: Any, data: Any) -> str:
    name = getattr(into, "__name__", None) or repr(into)
    return f"{path}: cannot decode JSON {_json_type_name(data)} into {name}"


__all__ = ["decode_into", "encode_body", "json_field", "to_jsonable"]

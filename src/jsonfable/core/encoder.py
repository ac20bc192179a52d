from __future__ import annotations

from inspect import ismethod
from inspect import isroutine
from typing import TYPE_CHECKING
from typing import Any
from typing import TypedDict

from jsonfable._internal._json import JSON_ARRAY_TYPES
from jsonfable._internal._json import make_json_encoder
from jsonfable._internal.settings import JSONFABLE_ALLOW_NAN
from jsonfable.core.reference import Reference
from jsonfable.core.reference import payload_of
from jsonfable.core.reference import type_name
from jsonfable.core.registry import Registry
from jsonfable.core.tag import get_tag_key
from jsonfable.core.tag import make_tag

if TYPE_CHECKING:
    from collections.abc import Callable

    from jsonfable._internal._json import JsonType
    from jsonfable.core.registry import RegistryLike
    from jsonfable.core.tag import TagDict

__all__ = (
    "dump_plain",
    "encode",
)


def encode(value: Any, registry: RegistryLike = None, *, indent: int | None = None) -> str:
    """Serialize a value to JSON text, tagging references, classes, and instances.

    If a registry is given, classes registered in it are written under their registered
    names. Otherwise each class is written under its declared name.
    """
    encoder = make_json_encoder(allow_nan=JSONFABLE_ALLOW_NAN(), indent=indent)
    return encoder.encode(dump_plain(value, registry))


def dump_plain(value: Any, registry: RegistryLike = None) -> JsonType:
    """Convert a value to JSON-serializable data with tags in place of non-plain values."""
    context: EncodeContext = {
        "registry": None if registry is None else Registry.coerce(registry),
        "tag_key": get_tag_key(),
    }
    return _dump(value, context)


class EncodeContext(TypedDict):
    """The context for dumping tagged JSON data."""

    registry: Registry | None
    tag_key: str


def _dump(value: Any, context: EncodeContext) -> JsonType:
    match value:
        case Reference():
            return _dump_tag(value.tag, context)
        case str() | int() | float() | bool() | None:
            return value
        case dict() if type(value) is dict:
            return {k: _dump(v, context) for k, v in value.items()}
        case list() | tuple() if type(value) in JSON_ARRAY_TYPES:
            return [_dump(v, context) for v in value]
        case _ if isinstance(value, type) or isroutine(value):
            if (projection := _get_projection(value)) is not None:
                return _dump(projection(), context)
            return _dump_tag(make_tag(_name_of(value, context)), context)
        case _:
            tag = make_tag(_name_of(type(value), context), ths=payload_of(value))
            return _dump_tag(tag, context)


def _dump_tag(tag: TagDict, context: EncodeContext) -> JsonType:
    return {context["tag_key"]: {k: _dump(v, context) for k, v in tag.items()}}


def _name_of(obj: Any, context: EncodeContext) -> str:
    if (registry := context["registry"]) is not None and (name := registry.name_of(obj)):
        return name
    return type_name(obj)


def _get_projection(value: Any) -> Callable[[], Any] | None:
    projection = getattr(value, "to_json", None)
    if isinstance(value, type):
        # an instance method read off the class is not a projection of the class
        return projection if ismethod(projection) and projection.__self__ is value else None
    return projection if callable(projection) else None

from __future__ import annotations

import json
from collections.abc import Mapping
from collections.abc import Sequence
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING
from typing import Any
from typing import TypedDict

from jsonfable.core.reference import Reference
from jsonfable.core.registry import Registry
from jsonfable.core.tag import describe_tag
from jsonfable.core.tag import get_tag_key
from jsonfable.core.tag import is_tag_dict

if TYPE_CHECKING:
    from jsonfable._internal._json import JsonType
    from jsonfable.core.registry import RegistryLike
    from jsonfable.core.tag import TagDict

__all__ = (
    "decode",
    "load_plain",
)

_LOG = getLogger(__name__)


def decode(text: str | bytes, registry: RegistryLike = None) -> Any:
    """Parse JSON text, rebuilding every tagged value from the registry.

    Tags are resolved innermost first. A tag naming a type that is not in the registry
    raises [`UnknownType`][jsonfable.common.exceptions.UnknownType] and aborts the whole
    decode. Malformed text raises ``json.JSONDecodeError`` before any tag is resolved.
    """
    context = _make_context(registry)
    return json.loads(text, object_hook=partial(_revive, context=context))


def load_plain(data: JsonType, registry: RegistryLike = None) -> Any:
    """Rebuild tagged values within already parsed JSON data."""
    return _load(data, _make_context(registry))


class DecodeContext(TypedDict):
    """The context for loading tagged JSON data."""

    registry: Registry
    tag_key: str


def _make_context(registry: RegistryLike) -> DecodeContext:
    return {"registry": Registry.coerce(registry), "tag_key": get_tag_key()}


def _load(value: Any, context: DecodeContext) -> Any:
    match value:
        case str() | int() | float() | bool() | None:
            return value
        case Mapping():
            return _revive({k: _load(v, context) for k, v in value.items()}, context)
        case Sequence():
            return [_load(v, context) for v in value]
        case _:
            return value


def _revive(obj: dict[str, Any], context: DecodeContext) -> Any:
    if not is_tag_dict(obj, context["tag_key"]):
        return obj
    return _resolve_tag(obj[context["tag_key"]], context["registry"])


def _resolve_tag(tag: TagDict, registry: Registry) -> Any:
    descriptor = registry.resolve(tag)
    value: Any
    if "ths" in tag:
        instance = descriptor.construct(tag["ths"])
        if "key" in tag:
            member = descriptor.get_member(instance, tag)
            value = Reference(member.payload if isinstance(member, Reference) else member, tag)
        else:
            value = instance
    elif "key" in tag:
        member = descriptor.get_member(descriptor.cls, tag)
        value = member(*tag["args"]) if "args" in tag else member
    else:
        value = descriptor.cls
    _LOG.debug("Resolved tag %s", describe_tag(tag))
    return value

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence
from typing import Any
from typing import NotRequired
from typing import TypedDict
from typing import TypeGuard

from jsonfable._internal.settings import JSONFABLE_TAG_KEY

__all__ = (
    "TagDict",
    "describe_tag",
    "get_tag_key",
    "is_tag_dict",
    "make_tag",
)


class TagDict(TypedDict):
    """The record stored under the reserved tag key."""

    cls: str
    """The registered name of a type."""
    key: NotRequired[str]
    """The name of a static or instance member to extract."""
    ths: NotRequired[Any]
    """The constructor payload of an instance."""
    args: NotRequired[list[Any]]
    """Arguments to invoke the extracted member with."""


def get_tag_key() -> str:
    """Return the reserved key that marks a tag object."""
    return JSONFABLE_TAG_KEY()


def make_tag(
    cls: str,
    key: str | None = None,
    *,
    ths: Any = ...,
    args: Sequence[Any] | None = None,
) -> TagDict:
    """Build a tag record, leaving out the fields that were not given.

    ``ths`` uses ``...`` as its sentinel since ``None`` is a legitimate payload.
    """
    tag: TagDict = {"cls": cls}
    if key is not None:
        tag["key"] = key
    if ths is not ...:
        tag["ths"] = ths
    if args is not None:
        tag["args"] = list(args)
    return tag


def is_tag_dict(
    value: Mapping[str, Any],
    tag_key: str | None = None,
) -> TypeGuard[Mapping[str, TagDict]]:
    """Check whether a parsed JSON object has the shape of a tag object."""
    tag_key = get_tag_key() if tag_key is None else tag_key
    if len(value) != 1 or tag_key not in value:
        return False
    match value[tag_key]:
        case {"cls": str()}:
            return True
        case _:
            return False


def describe_tag(tag: TagDict) -> str:
    """Summarize a tag for log messages."""
    target = tag["cls"] if "ths" not in tag else f"{tag['cls']}(...)"
    if "key" in tag:
        target = f"{target}.{tag['key']}"
    if "args" in tag:
        target = f"{target}(*{len(tag['args'])} args)"
    return target

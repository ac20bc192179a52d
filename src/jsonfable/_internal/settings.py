from collections.abc import Callable
from os import environ
from typing import TypeVar

T = TypeVar("T")


def make_setting(
    name: str,
    default: T,
    parse: Callable[[str], T] | None = None,
) -> Callable[[], T]:
    """Create a getter that reads an environment variable each time it is called."""

    def get() -> T:
        if (raw := environ.get(name)) is None:
            return default
        return raw if parse is None else parse(raw)  # type: ignore[return-value]

    get.__name__ = name
    return get


def _parse_flag(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


JSONFABLE_TAG_KEY = make_setting("JSONFABLE_TAG_KEY", "$MAGIC$")
"""The reserved key marking a tag object on the wire."""

JSONFABLE_ALLOW_NAN = make_setting("JSONFABLE_ALLOW_NAN", False, _parse_flag)
"""Whether the writer may emit non-finite floats."""

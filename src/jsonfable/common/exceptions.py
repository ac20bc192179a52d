from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jsonfable.core.tag import TagDict


class JsonfableError(Exception):
    """Base class for all jsonfable errors."""


class UnknownType(JsonfableError, KeyError):
    """Raised when a tag names a type the registry does not have."""

    reason = "unknown type"

    def __init__(self, context: TagDict) -> None:
        self.context = context
        super().__init__(f"{self.reason}: {json.dumps(context, default=repr)}")

    def __str__(self) -> str:
        return self.args[0]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.args[0]!r})"


class UnknownMember(UnknownType):
    """Raised when a tag names a member that is not referrable on a registered type."""

    reason = "unknown member"

from typing import Any

from jsonfable.core.reference import Referrable
from jsonfable.core.reference import refer_bound
from jsonfable.core.reference import referrable
from jsonfable.core.registry import Registry
from jsonfable.core.registry import TypeDescriptor
from jsonfable.core.tag import get_tag_key
from jsonfable.core.tag import make_tag

__all__ = (
    "Fable",
    "Fancy",
    "Gauge",
)


class Fable(Referrable, tag_name="Fable"):
    """Has a projection and a factory that are not the identity."""

    def __init__(self, json: Any) -> None:
        self.json = json

    @classmethod
    def from_json(cls, json: Any) -> "Fable":
        return cls(json)

    def to_json(self) -> Any:
        return self.json

    def method(self, *args: Any) -> list[Any]:
        return list(args)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.json == other.json  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.json!r})"


class Fancy(Fable, tag_name="Fancy"):
    @referrable
    @staticmethod
    def fun(arg: Any) -> Any:
        return arg

    @referrable
    def foo(self) -> Any:
        return self.json

    @refer_bound
    def bar(self) -> Any:
        return self.json


class Simple:
    """Relies on the default payload and constructor."""

    def __init__(self, payload: dict[str, Any]) -> None:
        self.data = payload["data"]

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.data == other.data  # type: ignore[attr-defined]


class Slotted:
    __slots__ = ("left", "right")

    def __init__(self, payload: dict[str, Any]) -> None:
        self.left = payload["left"]
        self.right = payload["right"]

    def __eq__(self, other: object) -> bool:
        return (
            type(self) is type(other)
            and self.left == other.left  # type: ignore[attr-defined]
            and self.right == other.right  # type: ignore[attr-defined]
        )


class Gauge(Referrable, tag_name="Gauge"):
    def __init__(self, payload: dict[str, Any]) -> None:
        self.level = payload["level"]

    @referrable
    @property
    def doubled(self) -> int:
        return self.level * 2


class H:
    """Produces new classes that are written as a call to the factory that made them."""

    k = "r"

    @referrable
    @classmethod
    def extend(cls, k: str) -> type["H"]:
        return type(cls.__name__, (cls,), {"k": k})

    @classmethod
    def to_json(cls) -> dict[str, Any]:
        return {get_tag_key(): make_tag("H", "extend", args=[cls.k])}


REGISTRY = Registry(
    types=[Fancy, Simple, Slotted, Gauge, H],
    descriptors=[TypeDescriptor(Fable, members=frozenset({"method"}))],
)

from __future__ import annotations

import operator
from functools import partial
from functools import update_wrapper
from types import MethodType
from typing import TYPE_CHECKING
from typing import Any
from typing import ClassVar
from typing import Generic
from typing import overload

from typing_extensions import TypeVar

from jsonfable.core.tag import TagDict
from jsonfable.core.tag import make_tag

if TYPE_CHECKING:
    from collections.abc import Callable
    from collections.abc import Iterator

T = TypeVar("T", default=Any)
M = TypeVar("M")

__all__ = (
    "Reference",
    "Referrable",
    "ReferrableMember",
    "mark",
    "payload_of",
    "refer_bound",
    "referrable",
    "type_name",
)

_STATIC_REFS_ATTR = "_jsonfable_static_refs"


def _unwrap(value: Any) -> Any:
    return value.payload if isinstance(value, Reference) else value


def _unary(op: Callable[[Any], Any]) -> Callable[[Reference], Any]:
    def method(self: Reference) -> Any:
        return op(self.payload)

    return method


def _binary(op: Callable[[Any, Any], Any]) -> Callable[[Reference, Any], Any]:
    def method(self: Reference, other: Any) -> Any:
        return op(self.payload, _unwrap(other))

    return method


def _reflected(op: Callable[[Any, Any], Any]) -> Callable[[Reference, Any], Any]:
    def method(self: Reference, other: Any) -> Any:
        return op(_unwrap(other), self.payload)

    return method


class Reference(Generic[T]):
    """A value carrying the tag that describes how to re-derive it.

    The wrapper is transparent: calls, attribute reads, truthiness, containers and
    operators go to the payload, and equality is the payload's equality.
    """

    __slots__ = ("payload", "tag")

    payload: T
    """The wrapped callable or value."""
    tag: TagDict
    """The tag written in place of the payload when encoding."""

    def __init__(self, payload: T, tag: TagDict) -> None:
        self.payload = payload
        self.tag = tag

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.payload(*args, **kwargs)  # type: ignore[operator]

    def __getattr__(self, name: str) -> Any:
        if name in Reference.__slots__:
            # not yet initialized (e.g. during copy)
            raise AttributeError(name)
        return getattr(self.payload, name)

    def __eq__(self, other: object) -> bool:
        return self.payload == _unwrap(other)

    def __hash__(self) -> int:
        return hash(self.payload)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.payload!r}, tag={self.tag!r})"

    def __str__(self) -> str:
        return str(self.payload)

    def __format__(self, format_spec: str) -> str:
        return format(self.payload, format_spec)

    # special methods are looked up on the type, not through __getattr__
    __bool__ = _unary(bool)
    __len__ = _unary(len)
    __iter__ = _unary(iter)
    __neg__ = _unary(operator.neg)
    __pos__ = _unary(operator.pos)
    __abs__ = _unary(operator.abs)
    __invert__ = _unary(operator.invert)
    __contains__ = _binary(operator.contains)
    __getitem__ = _binary(operator.getitem)
    __lt__ = _binary(operator.lt)
    __le__ = _binary(operator.le)
    __gt__ = _binary(operator.gt)
    __ge__ = _binary(operator.ge)
    __add__ = _binary(operator.add)
    __radd__ = _reflected(operator.add)
    __sub__ = _binary(operator.sub)
    __rsub__ = _reflected(operator.sub)
    __mul__ = _binary(operator.mul)
    __rmul__ = _reflected(operator.mul)
    __truediv__ = _binary(operator.truediv)
    __rtruediv__ = _reflected(operator.truediv)
    __floordiv__ = _binary(operator.floordiv)
    __rfloordiv__ = _reflected(operator.floordiv)
    __mod__ = _binary(operator.mod)
    __rmod__ = _reflected(operator.mod)
    __pow__ = _binary(operator.pow)
    __rpow__ = _reflected(operator.pow)
    __and__ = _binary(operator.and_)
    __rand__ = _reflected(operator.and_)
    __or__ = _binary(operator.or_)
    __ror__ = _reflected(operator.or_)
    __xor__ = _binary(operator.xor)
    __rxor__ = _reflected(operator.xor)


class Referrable:
    """Base for classes that declare the name they are written under.

    ```python
    class Fancy(Referrable, tag_name="Fancy"):
        ...
    ```

    The declared name belongs to the class it is given on and is not inherited.
    """

    _jsonfable_tag_name: ClassVar[str | None] = None

    def __init_subclass__(cls, *, tag_name: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if tag_name is not None:
            if not tag_name:
                msg = f"The tag name of {cls.__qualname__} must not be empty."
                raise ValueError(msg)
            cls._jsonfable_tag_name = tag_name


def type_name(obj: Any) -> str:
    """Return the name a class or routine is written under by default."""
    if isinstance(obj, type) and (name := vars(obj).get("_jsonfable_tag_name")):
        return name
    return obj.__name__


def payload_of(obj: Any) -> Any:
    """Return the data an instance is reconstructed from."""
    if callable(to_json := getattr(obj, "to_json", None)):
        return to_json()
    if hasattr(obj, "__dict__"):
        return dict(vars(obj))
    return {
        name: getattr(obj, name) for name in _iter_slot_names(type(obj)) if hasattr(obj, name)
    }


def mark(origin: Any, member_name: str | None, value: Any, bind: bool = False) -> Reference:
    """Attach a tag to a value so it can be referred to by name.

    If ``origin`` is a class the tag refers to it (or its member) statically. Otherwise
    ``origin`` is an instance and its payload is recorded so the decoder can rebuild it.
    When ``bind`` is true and ``origin`` is an instance, ``value`` is a plain function and
    the result calls it with ``origin`` as its first argument. Static references ignore
    ``bind``.
    """
    if isinstance(origin, type):
        tag = make_tag(type_name(origin), member_name)
    else:
        tag = make_tag(type_name(type(origin)), member_name, ths=payload_of(origin))
    if bind and callable(value) and not isinstance(origin, type):
        value = partial(value, origin)
    return Reference(value, tag)


class ReferrableMember(Generic[M]):
    """A descriptor that tags a member each time it is read."""

    owner: type | None = None
    """The class the member was defined on."""
    name: str | None = None
    """The attribute name of the member."""

    def __init__(self, member: M, *, bind: bool) -> None:
        self.member = member
        self.bind = bind
        update_wrapper(self, member)  # type: ignore[arg-type]

    def __set_name__(self, owner: type, name: str) -> None:
        self.owner = owner
        self.name = name

    @overload
    def __get__(self, instance: None, owner: type) -> Reference | ReferrableMember[M]: ...

    @overload
    def __get__(self, instance: object, owner: type | None = ...) -> Reference: ...

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        owner = type(instance) if owner is None else owner
        member: Any = self.member
        match member:
            case staticmethod() | classmethod():
                return self._get_static_ref(owner, member.__get__(instance, owner))
            case property():
                if instance is None:
                    return self
                return mark(instance, self.name, member.__get__(instance, owner))
            case _ if instance is None:
                return self._get_static_ref(owner, member)
            case _ if self.bind:
                return mark(instance, self.name, member, bind=True)
            case _:
                return mark(instance, self.name, MethodType(member, instance))

    def _get_static_ref(self, owner: type, value: Any) -> Reference:
        # per-class cache, collected along with the class
        if (refs := vars(owner).get(_STATIC_REFS_ATTR)) is None:
            refs = {}
            type.__setattr__(owner, _STATIC_REFS_ATTR, refs)
        if (ref := refs.get(self)) is None:
            ref = refs[self] = mark(self.owner or owner, self.name, value)
        return ref

    def __repr__(self) -> str:
        kind = "refer_bound" if self.bind else "referrable"
        return f"{kind}({self.member!r})"


def referrable(member: M) -> ReferrableMember[M]:
    """Make a member referrable such that references to it compare equal."""
    return ReferrableMember(member, bind=False)


def refer_bound(member: M) -> ReferrableMember[M]:
    """Make a method referrable with each read producing a new bound callable."""
    return ReferrableMember(member, bind=True)


def _iter_slot_names(cls: type) -> Iterator[str]:
    for base in cls.__mro__:
        slots = vars(base).get("__slots__", ())
        for name in (slots,) if isinstance(slots, str) else slots:
            if name not in ("__dict__", "__weakref__"):
                yield name

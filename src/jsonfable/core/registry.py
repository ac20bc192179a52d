from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from importlib import import_module
from logging import getLogger
from typing import TYPE_CHECKING
from typing import Any
from typing import TypedDict
from typing import Unpack

from jsonfable.common.exceptions import UnknownMember
from jsonfable.common.exceptions import UnknownType
from jsonfable.core.reference import Referrable
from jsonfable.core.reference import ReferrableMember
from jsonfable.core.reference import type_name
from jsonfable.core.tag import make_tag

if TYPE_CHECKING:
    from collections.abc import Iterator
    from collections.abc import Sequence
    from types import ModuleType

    from jsonfable.core.tag import TagDict

__all__ = (
    "Registry",
    "RegistryLike",
    "TypeDescriptor",
)

_LOG = getLogger(__name__)


@dataclass(frozen=True)
class TypeDescriptor:
    """Describes how a registered type is rebuilt and which members may be referred to."""

    cls: type
    """The registered class."""
    name: str | None = None
    """The name the class is registered under. Defaults to its declared name."""
    members: frozenset[str] = field(default=frozenset())
    """Names that may be referred to in addition to the decorated members."""
    factory: Callable[[Any], Any] | None = field(default=None, compare=False)
    """Builds an instance from a payload. Defaults to ``from_json`` or the constructor."""

    def __post_init__(self) -> None:
        if not isinstance(self.cls, type):
            msg = f"Expected a class, got {self.cls!r}."
            raise TypeError(msg)
        if self.name is None:
            object.__setattr__(self, "name", type_name(self.cls))
        object.__setattr__(
            self, "members", frozenset(self.members) | _find_referrable_members(self.cls)
        )

    @property
    def tag_name(self) -> str:
        """The name written in the ``cls`` field of a tag."""
        return self.name or type_name(self.cls)

    def construct(self, payload: Any) -> Any:
        """Build an instance of the class from its payload."""
        if self.factory is not None:
            return self.factory(payload)
        if callable(from_json := getattr(self.cls, "from_json", None)):
            return from_json(payload)
        return self.cls(payload)

    def get_member(self, owner: Any, tag: TagDict) -> Any:
        """Read the member named by the tag off the class or one of its instances."""
        key = tag["key"]
        if key not in self.members:
            raise UnknownMember(tag)
        return getattr(owner, key)


class RegistryKwargs(TypedDict, total=False):
    """Arguments for creating a registry."""

    modules: Sequence[str | ModuleType] | None
    """Modules to import and extract referrable classes from."""
    registries: Sequence[Registry] | None
    """Other registries to merge with this one."""
    types: Sequence[type] | Mapping[str, type] | None
    """Classes to register, optionally under explicit names."""
    descriptors: Sequence[TypeDescriptor] | None
    """Fully specified type descriptors to register."""


class Registry:
    """A mapping from tag names to the types they refer to."""

    __slots__ = ("_by_name", "_name_by_type")

    def __init__(self, **kwargs: Unpack[RegistryKwargs]) -> None:
        if unexpected := set(kwargs) - RegistryKwargs.__optional_keys__:
            msg = f"Unexpected registry arguments: {', '.join(sorted(unexpected))}."
            raise TypeError(msg)
        self._by_name = _kwargs_to_descriptors(kwargs)
        self._name_by_type = {d.cls: name for name, d in self._by_name.items()}
        _LOG.debug("Registry created with types: %s", ", ".join(self._by_name) or "<none>")

    @classmethod
    def coerce(cls, value: Any) -> Registry:
        """Turn a registry, mapping, or iterable of types into a registry."""
        match value:
            case Registry():
                return value
            case None:
                return cls()
            case Mapping():
                types: dict[str, type] = {}
                descriptors: list[TypeDescriptor] = []
                for name, item in value.items():
                    if isinstance(item, TypeDescriptor):
                        descriptors.append(
                            item if item.name == name else _rename_descriptor(item, name)
                        )
                    else:
                        types[name] = item
                return cls(types=types, descriptors=descriptors)
            case Iterable():
                items = list(value)
                return cls(
                    types=[i for i in items if not isinstance(i, TypeDescriptor)],
                    descriptors=[i for i in items if isinstance(i, TypeDescriptor)],
                )
            case _:
                msg = f"Cannot make a registry from {value!r}."
                raise TypeError(msg)

    def merge(self, **kwargs: Unpack[RegistryKwargs]) -> Registry:
        """Return a new registry with the given additions taking precedence."""
        return Registry(**{**kwargs, "registries": [self, *(kwargs.get("registries") or ())]})

    def get_descriptor(self, name: str) -> TypeDescriptor:
        """Get the descriptor registered under the given name."""
        if (descriptor := self._by_name.get(name)) is not None:
            return descriptor
        raise UnknownType(make_tag(name))

    def resolve(self, tag: TagDict) -> TypeDescriptor:
        """Get the descriptor a tag refers to, reporting the whole tag if it is missing."""
        if (descriptor := self._by_name.get(tag["cls"])) is not None:
            return descriptor
        raise UnknownType(tag)

    def name_of(self, cls: Any) -> str | None:
        """Get the name the given class is registered under, if any."""
        try:
            return self._name_by_type.get(cls)
        except TypeError:  # unhashable
            return None

    def names(self) -> list[str]:
        """List the registered names."""
        return list(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(self._by_name)})"


RegistryLike = (
    Registry | Mapping[str, type | TypeDescriptor] | Iterable[type | TypeDescriptor] | None
)
"""Anything [`Registry.coerce`][jsonfable.core.registry.Registry.coerce] accepts."""


def _kwargs_to_descriptors(kwargs: RegistryKwargs) -> dict[str, TypeDescriptor]:
    merged: dict[str, TypeDescriptor] = {}

    # module exports have lowest priority
    if (modules := kwargs.get("modules")) is not None:
        merged.update(_descriptors_from_modules(modules))

    # then other registries
    for registry in kwargs.get("registries") or ():
        merged.update(registry._by_name)  # noqa: SLF001

    # then highest priority are explicitly given types
    explicit: dict[str, TypeDescriptor] = {}
    match kwargs.get("types"):
        case None:
            pass
        case Mapping() as named_types:
            for name, cls in named_types.items():
                _add_unique(explicit, TypeDescriptor(cls, name=name))
        case types:
            for cls in types:
                _add_unique(explicit, TypeDescriptor(cls))
    for descriptor in kwargs.get("descriptors") or ():
        _add_unique(explicit, descriptor)
    merged.update(explicit)

    return merged


def _add_unique(descriptors: dict[str, TypeDescriptor], descriptor: TypeDescriptor) -> None:
    name = descriptor.tag_name
    if (existing := descriptors.get(name)) is not None and existing.cls is not descriptor.cls:
        msg = (
            f"Cannot register {_qualified_name(descriptor.cls)} as {name!r} since "
            f"{_qualified_name(existing.cls)} is already registered under that name."
        )
        raise ValueError(msg)
    descriptors[name] = descriptor


def _rename_descriptor(descriptor: TypeDescriptor, name: str) -> TypeDescriptor:
    return TypeDescriptor(
        descriptor.cls,
        name=name,
        members=descriptor.members,
        factory=descriptor.factory,
    )


def _descriptors_from_modules(modules: Iterable[ModuleType | str]) -> dict[str, TypeDescriptor]:
    descriptors: dict[str, TypeDescriptor] = {}
    for value in _iter_module_exports(modules):
        match value:
            case TypeDescriptor():
                _add_unique(descriptors, value)
            case type() if issubclass(value, Referrable) and value is not Referrable:
                _add_unique(descriptors, TypeDescriptor(value))
    return descriptors


def _iter_module_exports(modules: Iterable[ModuleType | str]) -> Iterator[Any]:
    """Iterate over all exports from the given modules."""
    for mod in modules:
        if isinstance(mod, str):
            mod = import_module(mod)
        if not hasattr(mod, "__all__"):
            msg = f"Module {mod} must have an '__all__' attribute."
            raise ValueError(msg)
        for name in mod.__all__:
            yield getattr(mod, name)


def _find_referrable_members(cls: type) -> frozenset[str]:
    return frozenset(
        name
        for base in cls.__mro__
        for name, attr in vars(base).items()
        if isinstance(attr, ReferrableMember)
    )


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"

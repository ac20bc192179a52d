from __future__ import annotations

from dataclasses import fields
from dataclasses import is_dataclass
from typing import Any
from typing import Self

from jsonfable.core.reference import Referrable

__all__ = ("FableDataclass",)


class FableDataclass(Referrable):
    """A base for dataclasses that are written field by field.

    ```python
    @dataclass
    class Point(FableDataclass, tag_name="Point"):
        x: int
        y: int
    ```

    Field values are left as they are so nested instances are tagged on their own.
    """

    def to_json(self) -> dict[str, Any]:
        """Return the init fields of this dataclass."""
        if not is_dataclass(self):
            msg = f"{type(self).__qualname__} is not a dataclass."
            raise TypeError(msg)
        return {f.name: getattr(self, f.name) for f in fields(self) if f.init}

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> Self:
        """Rebuild the dataclass from its fields."""
        return cls(**payload)

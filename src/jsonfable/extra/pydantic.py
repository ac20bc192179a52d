from __future__ import annotations

from logging import getLogger
from typing import Any
from typing import Self

from pydantic import BaseModel
from pydantic import ConfigDict

from jsonfable.core.reference import Referrable
from jsonfable.core.reference import ReferrableMember

__all__ = ("FableModel",)

_LOG = getLogger(__name__)


class FableModel(BaseModel, Referrable):
    """A pydantic model that is written field by field.

    ```python
    class User(FableModel, tag_name="User"):
        name: str
        friends: list[User] = []
    ```

    Fields are dumped without converting nested values so that nested models, classes
    and references are tagged on their own. Loading goes through validation.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, ignored_types=(ReferrableMember,))

    def to_json(self) -> dict[str, Any]:
        """Return the fields that were set on this model."""
        fields_set = self.model_fields_set
        return {name: getattr(self, name) for name in type(self).model_fields if name in fields_set}

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> Self:
        """Validate the payload into a model."""
        _LOG.debug("Validating %s from payload with keys %s", cls.__name__, list(payload))
        return cls.model_validate(payload)

from __future__ import annotations

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class AppBaseModel(PydanticBaseModel):
    """Base model for all domain models."""

    model_config = ConfigDict(
        from_attributes=True,
        extra="forbid",
        populate_by_name=True,
    )


class StoredModel(AppBaseModel):
    """Base model for records persisted in the key-value store.

    Stored records use camelCase keys (``tagId``, ``dueDate``) while Python
    code uses snake_case attribute names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_assignment=True,
    )

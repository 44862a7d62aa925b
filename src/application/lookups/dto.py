"""Read model returned by lookup handlers."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.infrastructure.database.base import LookupModel

# Columns every lookup table has; anything else is entity-specific
COMMON_ATTRIBUTES = frozenset(
    {
        "id",
        "description",
        "ordinal_position",
        "created_date",
        "created_by",
        "modified_date",
        "modified_by",
        "active",
    }
)


class LookupDto(BaseModel):
    """A lookup row, whatever its entity type."""

    model_config = ConfigDict(from_attributes=True)

    entity_type: str
    id: UUID
    label: str
    description: str | None = None
    ordinal_position: int
    created_date: datetime
    created_by: UUID | None = None
    modified_date: datetime
    modified_by: UUID | None = None
    active: bool
    attributes: dict[str, Any] = Field(default_factory=dict)


def extra_attribute_names(model: type[LookupModel]) -> list[str]:
    """Entity-specific column attributes of a model (``abbreviation``...)."""
    return [
        attr.key
        for attr in model.__mapper__.column_attrs
        if attr.key not in COMMON_ATTRIBUTES and attr.key != model.label_attribute
    ]


def to_lookup_dto(entity: LookupModel) -> LookupDto:
    """Map an entity to its DTO, entity-specific columns under ``attributes``."""
    dto = LookupDto.model_validate(entity)
    extras = {key: getattr(entity, key) for key in extra_attribute_names(type(entity))}
    if extras:
        dto = dto.model_copy(update={"attributes": extras})
    return dto

"""Commands that create, update and delete lookup rows."""

from uuid import UUID

from pydantic import Field

from src.application.mediator import Command
from src.infrastructure.database.base import DESCRIPTION_MAX_LENGTH, LABEL_MAX_LENGTH


class CreateLookupCommand(Command):
    """Create a lookup row of the given entity type."""

    entity_type: str = Field(min_length=1, description="Lookup entity type name")
    label: str = Field(
        min_length=1,
        max_length=LABEL_MAX_LENGTH,
        description="Status, type, method, direction or name of the row",
    )
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    ordinal_position: int = Field(default=0, ge=0)
    attributes: dict[str, str | None] = Field(
        default_factory=dict,
        description="Entity-specific columns such as abbreviation or color_code",
    )
    created_by: UUID | None = None


class UpdateLookupCommand(Command):
    """Replace the editable fields of an active lookup row."""

    entity_type: str = Field(min_length=1)
    id: UUID
    label: str = Field(min_length=1, max_length=LABEL_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    ordinal_position: int = Field(default=0, ge=0)
    attributes: dict[str, str | None] = Field(default_factory=dict)
    modified_by: UUID | None = None


class DeleteLookupCommand(Command):
    """Soft delete an active lookup row."""

    entity_type: str = Field(min_length=1)
    id: UUID
    modified_by: UUID | None = None

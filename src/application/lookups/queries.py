"""Queries over lookup rows. Only active rows are ever returned."""

from uuid import UUID

from pydantic import Field

from src.application.mediator import Query


class GetLookupByIdQuery(Query):
    entity_type: str = Field(min_length=1)
    id: UUID


class GetAllLookupsQuery(Query):
    entity_type: str = Field(min_length=1)


class GetLookupsByOrdinalPositionQuery(Query):
    entity_type: str = Field(min_length=1)


class GetLookupsByLabelQuery(Query):
    """Rows whose label matches, exactly or by substring per entity type."""

    entity_type: str = Field(min_length=1)
    label: str = Field(min_length=1)


class GetDefaultLookupQuery(Query):
    """The row with the lowest ordinal position."""

    entity_type: str = Field(min_length=1)

"""Handlers for lookup commands and queries.

A single handler per request type serves every lookup entity type: it picks
the repository for ``request.entity_type`` from the registry built by
``build_lookup_repositories``.
"""

import asyncio
from collections.abc import Mapping
from typing import Any

from loguru import logger

from src.application.lookups.commands import (
    CreateLookupCommand,
    DeleteLookupCommand,
    UpdateLookupCommand,
)
from src.application.lookups.dto import (
    LookupDto,
    extra_attribute_names,
    to_lookup_dto,
)
from src.application.lookups.queries import (
    GetAllLookupsQuery,
    GetDefaultLookupQuery,
    GetLookupByIdQuery,
    GetLookupsByLabelQuery,
    GetLookupsByOrdinalPositionQuery,
)
from src.application.mediator import Request, RequestHandler
from src.core.exceptions import NotFoundError, ValidationError
from src.infrastructure.database.base import LookupModel
from src.infrastructure.database.repository import LookupRepository, utc_now
from src.infrastructure.repositories import LookupRepositories


class LookupHandler[TRequest: Request, TResult](RequestHandler[TRequest, TResult]):
    """Base handler resolving the repository of the request's entity type."""

    def __init__(self, repositories: LookupRepositories) -> None:
        self.repositories = repositories

    def repository_for(self, entity_type: str) -> LookupRepository[Any]:
        """Return the repository for an entity type.

        Raises:
            ValidationError: If the entity type is unknown.
        """
        repository = self.repositories.get(entity_type)
        if repository is None:
            message = f"Unknown lookup entity type: {entity_type}"
            raise ValidationError(
                message,
                context={"entity_type": entity_type, "errors": [message]},
            )
        return repository

    @staticmethod
    def check_attributes(
        model: type[LookupModel], attributes: Mapping[str, str | None]
    ) -> None:
        """Reject attributes the entity type does not have.

        Raises:
            ValidationError: If any attribute name is not an extra column.
        """
        allowed = set(extra_attribute_names(model))
        errors = [
            f"{model.__name__} has no attribute '{key}'"
            for key in attributes
            if key not in allowed
        ]
        if errors:
            raise ValidationError(
                f"Invalid attributes for {model.__name__}",
                context={"entity_type": model.__name__, "errors": errors},
            )

    @staticmethod
    def not_found(entity_type: str, entity_id: object) -> NotFoundError:
        return NotFoundError(
            f"{entity_type} with ID {entity_id} not found",
            context={"entity_type": entity_type, "id": str(entity_id)},
        )


class CreateLookupHandler(LookupHandler[CreateLookupCommand, LookupDto]):
    async def handle(
        self, request: CreateLookupCommand, cancel_event: asyncio.Event | None = None
    ) -> LookupDto:
        """Insert a new active row and return it."""
        repository = self.repository_for(request.entity_type)
        self.check_attributes(repository.model, request.attributes)

        entity = repository.model(
            description=request.description,
            ordinal_position=request.ordinal_position,
            created_by=request.created_by,
            modified_by=request.created_by,
            **request.attributes,
        )
        entity.label = request.label

        created = await repository.add(entity, cancel_event)
        return to_lookup_dto(created)


class UpdateLookupHandler(LookupHandler[UpdateLookupCommand, LookupDto]):
    async def handle(
        self, request: UpdateLookupCommand, cancel_event: asyncio.Event | None = None
    ) -> LookupDto:
        """Apply the command to an active row.

        Raises:
            NotFoundError: If no active row has the ID.
        """
        repository = self.repository_for(request.entity_type)
        self.check_attributes(repository.model, request.attributes)

        entity = await repository.get_by_id(request.id, cancel_event)
        if entity is None:
            raise self.not_found(request.entity_type, request.id)

        entity.label = request.label
        entity.description = request.description
        entity.ordinal_position = request.ordinal_position
        for key, value in request.attributes.items():
            setattr(entity, key, value)
        entity.modified_by = request.modified_by
        entity.modified_date = utc_now()

        updated = await repository.update(entity, cancel_event)
        if updated is None:
            # Deleted between the read and the write
            raise self.not_found(request.entity_type, request.id)
        return to_lookup_dto(updated)


class DeleteLookupHandler(LookupHandler[DeleteLookupCommand, bool]):
    async def handle(
        self, request: DeleteLookupCommand, cancel_event: asyncio.Event | None = None
    ) -> bool:
        """Soft delete an active row.

        Raises:
            NotFoundError: If no active row has the ID.
        """
        repository = self.repository_for(request.entity_type)

        if not await repository.exists(request.id, cancel_event):
            raise self.not_found(request.entity_type, request.id)

        deleted = await repository.delete(request.id, request.modified_by, cancel_event)
        if not deleted:
            raise self.not_found(request.entity_type, request.id)

        logger.info(
            "Deleted {} {}",
            request.entity_type,
            request.id,
            entity_type=request.entity_type,
            operation="delete",
        )
        return True


class GetLookupByIdHandler(LookupHandler[GetLookupByIdQuery, LookupDto | None]):
    async def handle(
        self, request: GetLookupByIdQuery, cancel_event: asyncio.Event | None = None
    ) -> LookupDto | None:
        repository = self.repository_for(request.entity_type)
        entity = await repository.get_by_id(request.id, cancel_event)
        return to_lookup_dto(entity) if entity is not None else None


class GetAllLookupsHandler(LookupHandler[GetAllLookupsQuery, list[LookupDto]]):
    async def handle(
        self, request: GetAllLookupsQuery, cancel_event: asyncio.Event | None = None
    ) -> list[LookupDto]:
        repository = self.repository_for(request.entity_type)
        return [to_lookup_dto(e) for e in await repository.get_all(cancel_event)]


class GetLookupsByOrdinalPositionHandler(
    LookupHandler[GetLookupsByOrdinalPositionQuery, list[LookupDto]]
):
    async def handle(
        self,
        request: GetLookupsByOrdinalPositionQuery,
        cancel_event: asyncio.Event | None = None,
    ) -> list[LookupDto]:
        repository = self.repository_for(request.entity_type)
        entities = await repository.get_by_ordinal_position(cancel_event)
        return [to_lookup_dto(e) for e in entities]


class GetLookupsByLabelHandler(
    LookupHandler[GetLookupsByLabelQuery, list[LookupDto]]
):
    async def handle(
        self,
        request: GetLookupsByLabelQuery,
        cancel_event: asyncio.Event | None = None,
    ) -> list[LookupDto]:
        repository = self.repository_for(request.entity_type)
        entities = await repository.get_by_label(request.label, cancel_event)
        return [to_lookup_dto(e) for e in entities]


class GetDefaultLookupHandler(
    LookupHandler[GetDefaultLookupQuery, LookupDto | None]
):
    async def handle(
        self, request: GetDefaultLookupQuery, cancel_event: asyncio.Event | None = None
    ) -> LookupDto | None:
        repository = self.repository_for(request.entity_type)
        entity = await repository.get_default(cancel_event)
        return to_lookup_dto(entity) if entity is not None else None

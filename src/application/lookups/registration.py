"""Wiring of the lookup handlers into a mediator."""

from loguru import logger

from src.application.lookups.commands import (
    CreateLookupCommand,
    DeleteLookupCommand,
    UpdateLookupCommand,
)
from src.application.lookups.handlers import (
    CreateLookupHandler,
    DeleteLookupHandler,
    GetAllLookupsHandler,
    GetDefaultLookupHandler,
    GetLookupByIdHandler,
    GetLookupsByLabelHandler,
    GetLookupsByOrdinalPositionHandler,
    UpdateLookupHandler,
)
from src.application.lookups.queries import (
    GetAllLookupsQuery,
    GetDefaultLookupQuery,
    GetLookupByIdQuery,
    GetLookupsByLabelQuery,
    GetLookupsByOrdinalPositionQuery,
)
from src.application.mediator import Mediator
from src.infrastructure.repositories import LookupRepositories


def register_lookup_features(
    mediator: Mediator, repositories: LookupRepositories
) -> Mediator:
    """Register one handler per lookup request type.

    Every handler serves all entity types in ``repositories``.

    Returns:
        Mediator: The same mediator, for chaining.
    """
    mediator.register(CreateLookupCommand, CreateLookupHandler(repositories))
    mediator.register(UpdateLookupCommand, UpdateLookupHandler(repositories))
    mediator.register(DeleteLookupCommand, DeleteLookupHandler(repositories))
    mediator.register(GetLookupByIdQuery, GetLookupByIdHandler(repositories))
    mediator.register(GetAllLookupsQuery, GetAllLookupsHandler(repositories))
    mediator.register(
        GetLookupsByOrdinalPositionQuery,
        GetLookupsByOrdinalPositionHandler(repositories),
    )
    mediator.register(GetLookupsByLabelQuery, GetLookupsByLabelHandler(repositories))
    mediator.register(GetDefaultLookupQuery, GetDefaultLookupHandler(repositories))

    logger.info(
        "Registered lookup handlers for {} entity types",
        len(repositories),
    )
    return mediator

"""Construction of the full set of lookup repositories."""

from typing import Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.core.config import ClassificationConfig, Settings, get_settings
from src.infrastructure.database.repository import LookupRepository
from src.infrastructure.database.resilience import ResilientExecutor
from src.infrastructure.repositories.kinds import (
    AccountTypeRepository,
    ActivityTypeRepository,
    AddressTypeRepository,
    AttachmentTypeRepository,
    CallTypeRepository,
    EmailAddressTypeRepository,
    NoteTypeRepository,
    PersonTypeRepository,
    PhoneTypeRepository,
    ProductTypeRepository,
    ServiceTypeRepository,
    WorkflowTypeRepository,
)
from src.infrastructure.repositories.reference import (
    CallDirectionRepository,
    PaymentMethodRepository,
    ShipMethodRepository,
    StateRepository,
)
from src.infrastructure.repositories.statuses import (
    AccountStatusRepository,
    ActivityStatusRepository,
    InvoiceStatusRepository,
    PaymentStatusRepository,
    PersonStatusRepository,
    QuoteStatusRepository,
    SalesOrderStatusRepository,
)

type LookupRepositories = dict[str, LookupRepository[Any]]

REPOSITORY_CLASSES: tuple[type[LookupRepository[Any]], ...] = (
    AccountStatusRepository,
    AccountTypeRepository,
    ActivityStatusRepository,
    ActivityTypeRepository,
    AddressTypeRepository,
    AttachmentTypeRepository,
    CallDirectionRepository,
    CallTypeRepository,
    EmailAddressTypeRepository,
    InvoiceStatusRepository,
    NoteTypeRepository,
    PaymentMethodRepository,
    PaymentStatusRepository,
    PersonStatusRepository,
    PersonTypeRepository,
    PhoneTypeRepository,
    ProductTypeRepository,
    QuoteStatusRepository,
    SalesOrderStatusRepository,
    ServiceTypeRepository,
    ShipMethodRepository,
    StateRepository,
    WorkflowTypeRepository,
)


def build_lookup_repositories(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    settings: Settings | None = None,
    executor: ResilientExecutor | None = None,
    classification: ClassificationConfig | None = None,
) -> LookupRepositories:
    """Build one repository per lookup entity type.

    All repositories share a single executor and therefore a single session
    factory and retry policy.

    Args:
        session_factory: Factory the executor opens sessions from.
        settings: Settings for the retry policy and classification sets.
            Defaults to ``get_settings()``.
        executor: Executor to use instead of one built from settings.
        classification: Classification sets to use instead of the
            configured ones.

    Returns:
        LookupRepositories: Repositories keyed by entity type name.
    """
    settings = settings or get_settings()
    executor = executor or ResilientExecutor.from_settings(session_factory, settings)
    classification = classification or settings.classification_config

    repositories: LookupRepositories = {}
    for repository_class in REPOSITORY_CLASSES:
        repository = repository_class(executor, classification)
        repositories[repository.entity_type] = repository

    logger.info("Built {} lookup repositories", len(repositories))
    return repositories

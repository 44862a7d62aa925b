"""Concrete repositories for every lookup entity type."""

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
    TypeLookupRepository,
    WorkflowTypeRepository,
)
from src.infrastructure.repositories.reference import (
    CallDirectionRepository,
    PaymentMethodRepository,
    ShipMethodRepository,
    StateRepository,
)
from src.infrastructure.repositories.registry import (
    REPOSITORY_CLASSES,
    LookupRepositories,
    build_lookup_repositories,
)
from src.infrastructure.repositories.statuses import (
    AccountStatusRepository,
    ActivityStatusRepository,
    InvoiceStatusRepository,
    PaymentStatusRepository,
    PersonStatusRepository,
    QuoteStatusRepository,
    SalesOrderStatusRepository,
    StatusLookupRepository,
)

__all__ = [
    "REPOSITORY_CLASSES",
    "AccountStatusRepository",
    "AccountTypeRepository",
    "ActivityStatusRepository",
    "ActivityTypeRepository",
    "AddressTypeRepository",
    "AttachmentTypeRepository",
    "CallDirectionRepository",
    "CallTypeRepository",
    "EmailAddressTypeRepository",
    "InvoiceStatusRepository",
    "LookupRepositories",
    "NoteTypeRepository",
    "PaymentMethodRepository",
    "PaymentStatusRepository",
    "PersonStatusRepository",
    "PersonTypeRepository",
    "PhoneTypeRepository",
    "ProductTypeRepository",
    "QuoteStatusRepository",
    "SalesOrderStatusRepository",
    "ServiceTypeRepository",
    "ShipMethodRepository",
    "StateRepository",
    "StatusLookupRepository",
    "TypeLookupRepository",
    "WorkflowTypeRepository",
    "build_lookup_repositories",
]

"""Lookup (type/status) entity models.

Each model only declares its label column (and any extra columns); the rest
of the row shape comes from ``LookupModel``.
"""

from typing import ClassVar

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.base import LABEL_MAX_LENGTH, LookupModel


class AccountStatus(LookupModel):
    """Lifecycle status of a customer account."""

    label_attribute: ClassVar[str] = "status"

    status: Mapped[str] = mapped_column("Status", String(LABEL_MAX_LENGTH))


class AccountType(LookupModel):
    """Category of a customer account (prospect, customer, partner...)."""

    label_attribute: ClassVar[str] = "type"

    type: Mapped[str] = mapped_column("Type", String(LABEL_MAX_LENGTH))


class ActivityStatus(LookupModel):
    """Progress status of an activity."""

    label_attribute: ClassVar[str] = "status"

    status: Mapped[str] = mapped_column("Status", String(LABEL_MAX_LENGTH))


class ActivityType(LookupModel):
    """Kind of activity (call, meeting, task...)."""

    label_attribute: ClassVar[str] = "type"

    type: Mapped[str] = mapped_column("Type", String(LABEL_MAX_LENGTH))


class AddressType(LookupModel):
    """Purpose of an address (billing, shipping...)."""

    label_attribute: ClassVar[str] = "type"

    type: Mapped[str] = mapped_column("Type", String(LABEL_MAX_LENGTH))


class AttachmentType(LookupModel):
    """Kind of file attached to a record."""

    label_attribute: ClassVar[str] = "type"

    type: Mapped[str] = mapped_column("Type", String(LABEL_MAX_LENGTH))


class CallDirection(LookupModel):
    """Direction of a phone call."""

    label_attribute: ClassVar[str] = "direction"

    direction: Mapped[str] = mapped_column("Direction", String(LABEL_MAX_LENGTH))


class CallType(LookupModel):
    """Kind of phone call. Direction is only encoded in the label text."""

    label_attribute: ClassVar[str] = "type"

    type: Mapped[str] = mapped_column("Type", String(LABEL_MAX_LENGTH))


class EmailAddressType(LookupModel):
    """Purpose of an email address (work, personal...)."""

    label_attribute: ClassVar[str] = "type"

    type: Mapped[str] = mapped_column("Type", String(LABEL_MAX_LENGTH))


class InvoiceStatus(LookupModel):
    """Billing status of an invoice."""

    label_attribute: ClassVar[str] = "status"

    status: Mapped[str] = mapped_column("Status", String(LABEL_MAX_LENGTH))


class NoteType(LookupModel):
    """Category of a note, with optional UI hints."""

    label_attribute: ClassVar[str] = "type"

    type: Mapped[str] = mapped_column("Type", String(LABEL_MAX_LENGTH))
    color_code: Mapped[str | None] = mapped_column(
        "ColorCode", String(20), nullable=True
    )
    icon_name: Mapped[str | None] = mapped_column(
        "IconName", String(50), nullable=True
    )


class PaymentMethod(LookupModel):
    """Means of payment (card, wire, cheque...)."""

    label_attribute: ClassVar[str] = "name"

    name: Mapped[str] = mapped_column("Name", String(LABEL_MAX_LENGTH))


class PaymentStatus(LookupModel):
    """Settlement status of a payment."""

    label_attribute: ClassVar[str] = "status"

    status: Mapped[str] = mapped_column("Status", String(LABEL_MAX_LENGTH))


class PersonStatus(LookupModel):
    """Relationship status of a person."""

    label_attribute: ClassVar[str] = "status"

    status: Mapped[str] = mapped_column("Status", String(LABEL_MAX_LENGTH))


class PersonType(LookupModel):
    """Role of a person (contact, lead, employee...)."""

    label_attribute: ClassVar[str] = "type"

    type: Mapped[str] = mapped_column("Type", String(LABEL_MAX_LENGTH))


class PhoneType(LookupModel):
    """Purpose of a phone number (mobile, office...)."""

    label_attribute: ClassVar[str] = "type"

    type: Mapped[str] = mapped_column("Type", String(LABEL_MAX_LENGTH))


class ProductType(LookupModel):
    """Category of a product."""

    label_attribute: ClassVar[str] = "type"

    type: Mapped[str] = mapped_column("Type", String(LABEL_MAX_LENGTH))


class QuoteStatus(LookupModel):
    """Negotiation status of a quote."""

    label_attribute: ClassVar[str] = "status"

    status: Mapped[str] = mapped_column("Status", String(LABEL_MAX_LENGTH))


class SalesOrderStatus(LookupModel):
    """Fulfilment status of a sales order."""

    label_attribute: ClassVar[str] = "status"

    status: Mapped[str] = mapped_column("Status", String(LABEL_MAX_LENGTH))


class ServiceType(LookupModel):
    """Category of a service offering."""

    label_attribute: ClassVar[str] = "type"

    type: Mapped[str] = mapped_column("Type", String(LABEL_MAX_LENGTH))


class ShipMethod(LookupModel):
    """Shipping method (ground, overnight...)."""

    label_attribute: ClassVar[str] = "method"

    method: Mapped[str] = mapped_column("Method", String(LABEL_MAX_LENGTH))


class State(LookupModel):
    """State or province, with its postal abbreviation."""

    label_attribute: ClassVar[str] = "name"

    name: Mapped[str] = mapped_column("Name", String(LABEL_MAX_LENGTH))
    abbreviation: Mapped[str] = mapped_column("Abbreviation", String(10))
    country_code: Mapped[str | None] = mapped_column(
        "CountryCode", String(3), nullable=True
    )


class WorkflowType(LookupModel):
    """Kind of workflow."""

    label_attribute: ClassVar[str] = "type"

    type: Mapped[str] = mapped_column("Type", String(LABEL_MAX_LENGTH))


LOOKUP_MODELS: tuple[type[LookupModel], ...] = (
    AccountStatus,
    AccountType,
    ActivityStatus,
    ActivityType,
    AddressType,
    AttachmentType,
    CallDirection,
    CallType,
    EmailAddressType,
    InvoiceStatus,
    NoteType,
    PaymentMethod,
    PaymentStatus,
    PersonStatus,
    PersonType,
    PhoneType,
    ProductType,
    QuoteStatus,
    SalesOrderStatus,
    ServiceType,
    ShipMethod,
    State,
    WorkflowType,
)

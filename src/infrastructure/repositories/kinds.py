"""Repositories for type lookups.

Type labels live in a ``Type`` column. Email address and service types are
searched by substring; every other type matches its label exactly.
"""

import asyncio

from src.infrastructure.database.base import LookupModel
from src.infrastructure.database.models import (
    AccountType,
    ActivityType,
    AddressType,
    AttachmentType,
    CallType,
    EmailAddressType,
    NoteType,
    PersonType,
    PhoneType,
    ProductType,
    ServiceType,
    WorkflowType,
)
from src.infrastructure.database.repository import (
    LabelMatch,
    LookupRepository,
    require_text,
)


class TypeLookupRepository[T: LookupModel](LookupRepository[T]):
    """Lookup repository whose label is a type."""

    async def get_by_type(
        self, type_name: str, cancel_event: asyncio.Event | None = None
    ) -> list[T]:
        """Retrieve active rows with the given type."""
        return await self.get_by_label(type_name, cancel_event)


class AccountTypeRepository(TypeLookupRepository[AccountType]):
    model = AccountType


class ActivityTypeRepository(TypeLookupRepository[ActivityType]):
    model = ActivityType


class AddressTypeRepository(TypeLookupRepository[AddressType]):
    model = AddressType


class AttachmentTypeRepository(TypeLookupRepository[AttachmentType]):
    model = AttachmentType


class CallTypeRepository(TypeLookupRepository[CallType]):
    """Call types, which can be split by call direction.

    Direction is not stored on the row; it is inferred from label fragments
    such as "Inbound" or "Outgoing".
    """

    model = CallType

    async def get_inbound_types(
        self, cancel_event: asyncio.Event | None = None
    ) -> list[CallType]:
        """Retrieve call types whose label marks them as inbound."""
        return await self._get_by_label_fragments(
            self.classification.inbound_for(self.entity_type),
            "get_inbound_types",
            cancel_event,
        )

    async def get_outbound_types(
        self, cancel_event: asyncio.Event | None = None
    ) -> list[CallType]:
        """Retrieve call types whose label marks them as outbound."""
        return await self._get_by_label_fragments(
            self.classification.outbound_for(self.entity_type),
            "get_outbound_types",
            cancel_event,
        )


class EmailAddressTypeRepository(TypeLookupRepository[EmailAddressType]):
    model = EmailAddressType
    label_match = LabelMatch.SUBSTRING


class NoteTypeRepository(TypeLookupRepository[NoteType]):
    model = NoteType

    async def get_by_color_code(
        self, color_code: str, cancel_event: asyncio.Event | None = None
    ) -> list[NoteType]:
        """Retrieve note types displayed with the given color.

        Raises:
            ValueError: If ``color_code`` is blank.
        """
        require_text(color_code, "color_code")
        return await self._get_active_where(
            NoteType.color_code == color_code,
            operation_name="get_by_color_code",
            context={"color_code": color_code},
            cancel_event=cancel_event,
        )

    async def get_by_icon_name(
        self, icon_name: str, cancel_event: asyncio.Event | None = None
    ) -> list[NoteType]:
        """Retrieve note types displayed with the given icon.

        Raises:
            ValueError: If ``icon_name`` is blank.
        """
        require_text(icon_name, "icon_name")
        return await self._get_active_where(
            NoteType.icon_name == icon_name,
            operation_name="get_by_icon_name",
            context={"icon_name": icon_name},
            cancel_event=cancel_event,
        )


class PersonTypeRepository(TypeLookupRepository[PersonType]):
    model = PersonType


class PhoneTypeRepository(TypeLookupRepository[PhoneType]):
    model = PhoneType


class ProductTypeRepository(TypeLookupRepository[ProductType]):
    model = ProductType


class ServiceTypeRepository(TypeLookupRepository[ServiceType]):
    model = ServiceType
    label_match = LabelMatch.SUBSTRING


class WorkflowTypeRepository(TypeLookupRepository[WorkflowType]):
    model = WorkflowType

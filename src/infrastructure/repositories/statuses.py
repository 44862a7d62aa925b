"""Repositories for status lookups.

Status labels live in a ``Status`` column. Activity and sales order statuses
can also be classified as completed (and, for sales orders, open) using the
configured label sets.
"""

import asyncio

from src.infrastructure.database.base import LookupModel
from src.infrastructure.database.models import (
    AccountStatus,
    ActivityStatus,
    InvoiceStatus,
    PaymentStatus,
    PersonStatus,
    QuoteStatus,
    SalesOrderStatus,
)
from src.infrastructure.database.repository import LookupRepository, require_text


class StatusLookupRepository[T: LookupModel](LookupRepository[T]):
    """Lookup repository whose label is a status."""

    async def get_by_status(
        self, status: str, cancel_event: asyncio.Event | None = None
    ) -> list[T]:
        """Retrieve active rows with the given status."""
        return await self.get_by_label(status, cancel_event)


class AccountStatusRepository(StatusLookupRepository[AccountStatus]):
    model = AccountStatus


class ActivityStatusRepository(StatusLookupRepository[ActivityStatus]):
    model = ActivityStatus

    async def get_completed_statuses(
        self, cancel_event: asyncio.Event | None = None
    ) -> list[ActivityStatus]:
        """Retrieve the statuses that mark an activity as completed."""
        return await self._get_by_label_set(
            self.classification.completed_for(self.entity_type),
            "get_completed_statuses",
            cancel_event,
        )


class InvoiceStatusRepository(StatusLookupRepository[InvoiceStatus]):
    model = InvoiceStatus


class PaymentStatusRepository(StatusLookupRepository[PaymentStatus]):
    model = PaymentStatus

    async def get_by_name(
        self, status: str, cancel_event: asyncio.Event | None = None
    ) -> PaymentStatus | None:
        """Retrieve the first active payment status with this exact name."""
        require_text(status, "status")
        return await self._get_first_active_where(
            PaymentStatus.status == status,
            operation_name="get_by_name",
            context={"status": status},
            cancel_event=cancel_event,
        )


class PersonStatusRepository(StatusLookupRepository[PersonStatus]):
    model = PersonStatus


class QuoteStatusRepository(StatusLookupRepository[QuoteStatus]):
    model = QuoteStatus


class SalesOrderStatusRepository(StatusLookupRepository[SalesOrderStatus]):
    model = SalesOrderStatus

    async def get_completed_statuses(
        self, cancel_event: asyncio.Event | None = None
    ) -> list[SalesOrderStatus]:
        """Retrieve the statuses of fulfilled or closed orders."""
        return await self._get_by_label_set(
            self.classification.completed_for(self.entity_type),
            "get_completed_statuses",
            cancel_event,
        )

    async def get_open_statuses(
        self, cancel_event: asyncio.Event | None = None
    ) -> list[SalesOrderStatus]:
        """Retrieve the statuses of orders still being worked on."""
        return await self._get_by_label_set(
            self.classification.open_for(self.entity_type),
            "get_open_statuses",
            cancel_event,
        )

"""Repositories for lookups labelled by name, method or direction."""

import asyncio

from src.infrastructure.database.models import (
    CallDirection,
    PaymentMethod,
    ShipMethod,
    State,
)
from src.infrastructure.database.repository import LookupRepository, require_text


class CallDirectionRepository(LookupRepository[CallDirection]):
    model = CallDirection

    async def get_by_direction(
        self, direction: str, cancel_event: asyncio.Event | None = None
    ) -> list[CallDirection]:
        """Retrieve active call directions with the given label."""
        return await self.get_by_label(direction, cancel_event)


class PaymentMethodRepository(LookupRepository[PaymentMethod]):
    model = PaymentMethod

    async def get_by_method(
        self, method: str, cancel_event: asyncio.Event | None = None
    ) -> list[PaymentMethod]:
        """Retrieve active payment methods with the given name."""
        return await self.get_by_label(method, cancel_event)

    async def get_by_name(
        self, name: str, cancel_event: asyncio.Event | None = None
    ) -> list[PaymentMethod]:
        """Retrieve active payment methods with the given name."""
        return await self.get_by_label(name, cancel_event)


class ShipMethodRepository(LookupRepository[ShipMethod]):
    model = ShipMethod

    async def get_by_method(
        self, method: str, cancel_event: asyncio.Event | None = None
    ) -> list[ShipMethod]:
        """Retrieve active shipping methods with the given label."""
        return await self.get_by_label(method, cancel_event)


class StateRepository(LookupRepository[State]):
    model = State

    async def get_by_name(
        self, name: str, cancel_event: asyncio.Event | None = None
    ) -> list[State]:
        """Retrieve active states with the given name."""
        return await self.get_by_label(name, cancel_event)

    async def get_by_abbreviation(
        self, abbreviation: str, cancel_event: asyncio.Event | None = None
    ) -> list[State]:
        """Retrieve active states with the given postal abbreviation.

        Raises:
            ValueError: If ``abbreviation`` is blank.
        """
        require_text(abbreviation, "abbreviation")
        return await self._get_active_where(
            State.abbreviation == abbreviation,
            operation_name="get_by_abbreviation",
            context={"abbreviation": abbreviation},
            cancel_event=cancel_event,
        )

"""In-process mediator routing commands and queries to their handlers.

Requests are pydantic models, so a request that exists has already passed
field validation. Each request type is routed to exactly one handler:

    mediator = Mediator()
    mediator.register(GetDefaultLookupQuery, GetDefaultLookupHandler(repos))
    dto = await mediator.send(GetDefaultLookupQuery(entity_type="AccountStatus"))
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict

from src.core.exceptions import HandlerNotFoundError


class Request(BaseModel):
    """Base class for everything sent through the mediator."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class Command(Request):
    """Base class for write operations."""


class Query(Request):
    """Base class for read operations."""


class RequestHandler[TRequest: Request, TResult](ABC):
    """Handles one request type."""

    @abstractmethod
    async def handle(
        self, request: TRequest, cancel_event: asyncio.Event | None = None
    ) -> TResult:
        """Handle the request and return its result."""
        ...


class Mediator:
    """Dispatches requests to the handler registered for their type."""

    def __init__(self) -> None:
        self._handlers: dict[type[Request], RequestHandler[Any, Any]] = {}

    def register[TRequest: Request](
        self, request_type: type[TRequest], handler: RequestHandler[TRequest, Any]
    ) -> None:
        """Register the handler for a request type.

        Raises:
            ValueError: If a handler is already registered for the type.
        """
        if request_type in self._handlers:
            msg = f"A handler is already registered for {request_type.__name__}"
            raise ValueError(msg)
        self._handlers[request_type] = handler
        logger.debug(
            "Registered {} for {}", type(handler).__name__, request_type.__name__
        )

    def is_registered(self, request_type: type[Request]) -> bool:
        """Whether a handler is registered for the request type."""
        return request_type in self._handlers

    async def send(
        self, request: Request, cancel_event: asyncio.Event | None = None
    ) -> Any:
        """Route a request to its handler.

        Args:
            request: The command or query.
            cancel_event: Optional cancellation signal passed to the handler.

        Returns:
            Any: The handler's result.

        Raises:
            HandlerNotFoundError: If no handler is registered for the type.
        """
        request_type = type(request)
        handler = self._handlers.get(request_type)
        if handler is None:
            raise HandlerNotFoundError(
                f"No handler registered for {request_type.__name__}",
                context={"request_type": request_type.__name__},
            )

        logger.debug(
            "Dispatching {} to {}", request_type.__name__, type(handler).__name__
        )
        return await handler.handle(request, cancel_event)

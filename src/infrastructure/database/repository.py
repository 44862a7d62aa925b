"""Generic repository for lookup (type/status) entities.

``LookupRepository`` implements every operation shared by the lookup tables
once. A concrete repository only names its model and, where needed, how its
label is matched:

    class AccountStatusRepository(LookupRepository[AccountStatus]):
        model = AccountStatus

All operations run through a ``ResilientExecutor``, so each one gets a fresh
session per attempt, transient failures are retried and every operation
accepts an optional ``cancel_event``.

Soft delete is the only delete: rows with ``active = False`` are invisible to
every read, cannot be updated and cannot be deleted again.
"""

import asyncio
import uuid
from collections.abc import Sequence
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from loguru import logger
from sqlalchemy import (
    ColumnElement,
    Select,
    Update,
    func,
    insert,
    or_,
    select,
    update,
)
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from src.core.config import ClassificationConfig, get_settings
from src.core.types import DatabaseOperation, LogContext, LookupId
from src.infrastructure.database.base import IMMUTABLE_ATTRIBUTES, LookupModel
from src.infrastructure.database.resilience import ResilientExecutor


class LabelMatch(Enum):
    """How a label filter is compared with the label column."""

    EXACT = "exact"
    """Label equals the filter value."""

    SUBSTRING = "substring"
    """Label contains the filter value (case-insensitive)."""


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def require_id(entity_id: LookupId | None) -> LookupId:
    """Reject a missing or nil identifier before any I/O."""
    if entity_id is None or entity_id == uuid.UUID(int=0):
        msg = "Entity id must be a non-empty UUID"
        raise ValueError(msg)
    return entity_id


def require_text(value: str | None, name: str) -> str:
    """Reject a missing or blank filter value before any I/O."""
    if value is None or not value.strip():
        msg = f"{name} must not be empty"
        raise ValueError(msg)
    return value


class LookupRepository[T: LookupModel]:
    """Base repository for lookup entities.

    Args:
        executor: Executor running each operation with retries.
        classification: Label sets for classification queries. Defaults to
            the configured sets.
    """

    model: type[T]
    label_match: LabelMatch = LabelMatch.EXACT

    def __init__(
        self,
        executor: ResilientExecutor,
        classification: ClassificationConfig | None = None,
    ) -> None:
        self.executor = executor
        self.classification = (
            classification or get_settings().classification_config
        )
        logger.debug("Initialized repository for {}", self.entity_type)

    @property
    def entity_type(self) -> str:
        """Name of the managed entity type."""
        return self.model.__name__

    @property
    def table_name(self) -> str:
        """Name of the backing table."""
        return self.model.__table__.name

    @property
    def id_column(self) -> InstrumentedAttribute[uuid.UUID]:
        """Primary key attribute of the model."""
        return self.model.id

    @property
    def label_column(self) -> InstrumentedAttribute[str]:
        """Label attribute of the model (``status``, ``type``, ...)."""
        return getattr(self.model, self.model.label_attribute)

    @property
    def select_columns(self) -> list[str]:
        """Attribute names of every mapped column."""
        return [attr.key for attr in sa_inspect(self.model).column_attrs]

    # Statement helpers

    def _only_active[S: Select[Any] | Update](self, stmt: S) -> S:
        """Restrict a statement to active rows."""
        return stmt.where(self.model.active.is_(True))

    def _select_active(self) -> Select[tuple[T]]:
        return self._only_active(select(self.model))

    def _ordered(self, stmt: Select[tuple[T]]) -> Select[tuple[T]]:
        """Order by ordinal position, then id for a stable result."""
        return stmt.order_by(self.model.ordinal_position, self.model.id)

    def _label_criterion(self, value: str) -> ColumnElement[bool]:
        if self.label_match is LabelMatch.SUBSTRING:
            return self.label_column.icontains(value, autoescape=True)
        return self.label_column == value

    async def _run[R](
        self,
        operation: DatabaseOperation[R],
        operation_name: str,
        context: LogContext | None,
        cancel_event: asyncio.Event | None,
    ) -> R:
        return await self.executor.execute(
            operation,
            operation_name,
            {"table": self.table_name, **(context or {})},
            entity_type=self.entity_type,
            cancel_event=cancel_event,
        )

    async def _fetch_all(
        self,
        stmt: Select[tuple[T]],
        operation_name: str,
        context: LogContext | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> list[T]:
        async def operation(session: AsyncSession) -> list[T]:
            return list((await session.scalars(stmt)).all())

        return await self._run(operation, operation_name, context, cancel_event)

    async def _fetch_first(
        self,
        stmt: Select[tuple[T]],
        operation_name: str,
        context: LogContext | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> T | None:
        async def operation(session: AsyncSession) -> T | None:
            return (await session.scalars(stmt.limit(1))).first()

        return await self._run(operation, operation_name, context, cancel_event)

    async def _get_active_where(
        self,
        *criteria: ColumnElement[bool],
        operation_name: str,
        context: LogContext | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> list[T]:
        """Active rows matching ``criteria``, ordered by ordinal position."""
        stmt = self._ordered(self._select_active().where(*criteria))
        return await self._fetch_all(stmt, operation_name, context, cancel_event)

    async def _get_first_active_where(
        self,
        *criteria: ColumnElement[bool],
        operation_name: str,
        context: LogContext | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> T | None:
        """First active row matching ``criteria`` by ordinal position."""
        stmt = self._ordered(self._select_active().where(*criteria))
        return await self._fetch_first(stmt, operation_name, context, cancel_event)

    async def _get_by_label_set(
        self,
        labels: Sequence[str],
        operation_name: str,
        cancel_event: asyncio.Event | None = None,
    ) -> list[T]:
        """Active rows whose label is exactly one of ``labels``."""
        if not labels:
            logger.debug("Empty label set for {}, skipping query", operation_name)
            return []
        return await self._get_active_where(
            self.label_column.in_(labels),
            operation_name=operation_name,
            context={"labels": list(labels)},
            cancel_event=cancel_event,
        )

    async def _get_by_label_fragments(
        self,
        fragments: Sequence[str],
        operation_name: str,
        cancel_event: asyncio.Event | None = None,
    ) -> list[T]:
        """Active rows whose label contains any of ``fragments``."""
        if not fragments:
            logger.debug("Empty fragment set for {}, skipping query", operation_name)
            return []
        return await self._get_active_where(
            or_(
                *(
                    self.label_column.icontains(fragment, autoescape=True)
                    for fragment in fragments
                )
            ),
            operation_name=operation_name,
            context={"fragments": list(fragments)},
            cancel_event=cancel_event,
        )

    # Queries

    async def get_by_id(
        self, entity_id: LookupId, cancel_event: asyncio.Event | None = None
    ) -> T | None:
        """Retrieve an active entity by its ID.

        Args:
            entity_id: Identifier of the entity.
            cancel_event: Optional cancellation signal.

        Returns:
            T | None: The entity, or None if it does not exist or is inactive.

        Raises:
            ValueError: If ``entity_id`` is None or the nil UUID.
        """
        require_id(entity_id)
        logger.debug("Fetching {} by ID: {}", self.entity_type, entity_id)

        stmt = self._select_active().where(self.id_column == entity_id)
        instance = await self._fetch_first(
            stmt, "get_by_id", {"id": entity_id}, cancel_event
        )

        if instance is None:
            logger.debug("{} not found with ID: {}", self.entity_type, entity_id)
        return instance

    async def get_all(self, cancel_event: asyncio.Event | None = None) -> list[T]:
        """Retrieve every active entity, in no particular order."""
        instances = await self._fetch_all(
            self._select_active(), "get_all", cancel_event=cancel_event
        )
        logger.debug("Retrieved {} {} instances", len(instances), self.entity_type)
        return instances

    async def get_by_ordinal_position(
        self, cancel_event: asyncio.Event | None = None
    ) -> list[T]:
        """Retrieve every active entity ordered by ordinal position."""
        return await self._fetch_all(
            self._ordered(self._select_active()),
            "get_by_ordinal_position",
            cancel_event=cancel_event,
        )

    async def get_by_label(
        self, value: str, cancel_event: asyncio.Event | None = None
    ) -> list[T]:
        """Retrieve active entities by label.

        The label is matched exactly, or by substring for repositories whose
        ``label_match`` is ``LabelMatch.SUBSTRING``.

        Args:
            value: Label value or fragment.
            cancel_event: Optional cancellation signal.

        Returns:
            list[T]: Matching entities ordered by ordinal position.

        Raises:
            ValueError: If ``value`` is blank.
        """
        require_text(value, self.model.label_attribute)
        return await self._get_active_where(
            self._label_criterion(value),
            operation_name=f"get_by_{self.model.label_attribute}",
            context={self.model.label_attribute: value},
            cancel_event=cancel_event,
        )

    async def get_default(self, cancel_event: asyncio.Event | None = None) -> T | None:
        """Retrieve the active entity with the lowest ordinal position.

        Ties are broken by ID, so the result is deterministic.
        """
        return await self._fetch_first(
            self._ordered(self._select_active()),
            "get_default",
            cancel_event=cancel_event,
        )

    async def exists(
        self, entity_id: LookupId, cancel_event: asyncio.Event | None = None
    ) -> bool:
        """Check whether an active entity with the given ID exists."""
        require_id(entity_id)

        stmt = self._only_active(
            select(func.count())
            .select_from(self.model)
            .where(self.id_column == entity_id)
        )

        async def operation(session: AsyncSession) -> bool:
            return ((await session.scalar(stmt)) or 0) > 0

        return await self._run(operation, "exists", {"id": entity_id}, cancel_event)

    async def count(self, cancel_event: asyncio.Event | None = None) -> int:
        """Count active entities."""
        stmt = self._only_active(select(func.count()).select_from(self.model))

        async def operation(session: AsyncSession) -> int:
            return (await session.scalar(stmt)) or 0

        count_value: int = await self._run(operation, "count", None, cancel_event)
        logger.debug("Counted {} {} instances", count_value, self.entity_type)
        return count_value

    # Commands

    async def add(self, entity: T, cancel_event: asyncio.Event | None = None) -> T:
        """Insert a new entity.

        A UUID is generated when the entity has none, creation and
        modification timestamps are stamped when unset and the entity is
        always inserted as active.

        Args:
            entity: The entity to insert.
            cancel_event: Optional cancellation signal.

        Returns:
            T: The same entity with its generated values filled in.

        Raises:
            ValueError: If ``entity`` is None.
        """
        if entity is None:
            msg = "Entity must not be None"
            raise ValueError(msg)

        if entity.id is None:
            entity.id = uuid.uuid4()
        if entity.created_date is None:
            entity.created_date = utc_now()
        if entity.modified_date is None:
            entity.modified_date = entity.created_date
        if entity.ordinal_position is None:
            entity.ordinal_position = 0
        entity.active = True

        values = {key: getattr(entity, key) for key in self.select_columns}
        stmt = insert(self.model).values(**values)

        async def operation(session: AsyncSession) -> None:
            await session.execute(stmt)

        logger.debug("Creating new {} instance", self.entity_type)
        await self._run(operation, "add", {"id": entity.id}, cancel_event)
        logger.info("Created {} with ID: {}", self.entity_type, entity.id)
        return entity

    async def update(
        self, entity: T, cancel_event: asyncio.Event | None = None
    ) -> T | None:
        """Rewrite the mutable columns of an active entity.

        The ID and creation audit columns are never changed. The
        modification timestamp is refreshed when unset. Required columns
        left as None on ``entity`` (``active``, ``ordinal_position``, the
        label) are not written, so a partially built entity only updates
        what it sets.

        Args:
            entity: The entity carrying the new values.
            cancel_event: Optional cancellation signal.

        Returns:
            T | None: The entity, or None if no active row has its ID.

        Raises:
            ValueError: If ``entity`` is None or has no ID.
        """
        if entity is None:
            msg = "Entity must not be None"
            raise ValueError(msg)
        require_id(entity.id)

        if entity.modified_date is None:
            entity.modified_date = utc_now()

        columns = self.model.__mapper__.columns
        values: dict[str, Any] = {}
        for key in self.select_columns:
            if key in IMMUTABLE_ATTRIBUTES:
                continue
            value = getattr(entity, key)
            # Unset NOT NULL columns keep their stored value
            if value is None and not columns[key].nullable:
                continue
            values[key] = value

        stmt = (
            self._only_active(update(self.model))
            .where(self.id_column == entity.id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        async def operation(session: AsyncSession) -> int:
            result = await session.execute(stmt)
            return result.rowcount

        logger.debug("Updating {} with ID: {}", self.entity_type, entity.id)
        rows_affected: int = await self._run(
            operation, "update", {"id": entity.id}, cancel_event
        )

        if rows_affected == 0:
            logger.warning(
                "No active {} found to update with ID: {}",
                self.entity_type,
                entity.id,
                entity_type=self.entity_type,
                operation="update",
            )
            return None

        logger.info("Updated {} with ID: {}", self.entity_type, entity.id)
        return entity

    async def delete(
        self,
        entity_id: LookupId,
        modified_by: uuid.UUID | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> bool:
        """Soft delete an active entity.

        Args:
            entity_id: Identifier of the entity.
            modified_by: User performing the delete, recorded in the audit
                columns.
            cancel_event: Optional cancellation signal.

        Returns:
            bool: True if an active row was deactivated.
        """
        require_id(entity_id)

        values: dict[str, Any] = {"active": False, "modified_date": utc_now()}
        if modified_by is not None:
            values["modified_by"] = modified_by

        stmt = (
            self._only_active(update(self.model))
            .where(self.id_column == entity_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        async def operation(session: AsyncSession) -> bool:
            result = await session.execute(stmt)
            return result.rowcount > 0

        deleted: bool = await self._run(
            operation, "delete", {"id": entity_id}, cancel_event
        )

        if deleted:
            logger.info("Deleted {} with ID: {}", self.entity_type, entity_id)
        else:
            logger.debug(
                "{} not found for deletion with ID: {}", self.entity_type, entity_id
            )
        return deleted

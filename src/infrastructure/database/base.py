"""SQLAlchemy declarative base and the shared shape of lookup tables.

Every lookup (type/status) table has the same columns apart from the name of
its label column and, for a few entities, one or two extra columns:

| Column                     | Attribute                     |
|----------------------------|-------------------------------|
| ``<Entity>Id``             | ``id``                        |
| label (``Status``, ...)    | declared by the concrete model |
| ``Description``            | ``description``               |
| ``OrdinalPosition``        | ``ordinal_position``          |
| ``CreatedDate/CreatedBy``  | ``created_date/created_by``   |
| ``ModifiedDate/ModifiedBy``| ``modified_date/modified_by`` |
| ``Active``                 | ``active``                    |

Database column names keep the PascalCase names of the existing schema;
Python attributes are snake_case.
"""

import uuid
from datetime import datetime
from typing import ClassVar

from sqlalchemy import Boolean, DateTime, Integer, MetaData, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

LABEL_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

# Columns never rewritten by an update
IMMUTABLE_ATTRIBUTES = frozenset({"id", "created_date", "created_by"})


class Base(DeclarativeBase):
    """SQLAlchemy declarative base with naming conventions."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class LookupModel(Base):
    """Abstract base for lookup entities.

    Concrete models declare their label column and set ``label_attribute``
    to the name of that attribute. The table is named after the class and
    the primary key column is ``<ClassName>Id``.
    """

    __abstract__ = True

    label_attribute: ClassVar[str]

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__

    @declared_attr
    def id(cls) -> Mapped[uuid.UUID]:
        return mapped_column(
            f"{cls.__name__}Id",
            Uuid,
            primary_key=True,
            doc="Opaque unique identifier",
        )

    description: Mapped[str | None] = mapped_column(
        "Description", String(DESCRIPTION_MAX_LENGTH), nullable=True
    )
    ordinal_position: Mapped[int] = mapped_column(
        "OrdinalPosition",
        Integer,
        nullable=False,
        default=0,
        doc="Display order; the lowest active value is the default choice",
    )
    created_date: Mapped[datetime] = mapped_column(
        "CreatedDate", DateTime(timezone=True), nullable=False
    )
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        "CreatedBy", Uuid, nullable=True
    )
    modified_date: Mapped[datetime] = mapped_column(
        "ModifiedDate", DateTime(timezone=True), nullable=False
    )
    modified_by: Mapped[uuid.UUID | None] = mapped_column(
        "ModifiedBy", Uuid, nullable=True
    )
    active: Mapped[bool] = mapped_column(
        "Active",
        Boolean,
        nullable=False,
        default=True,
        doc="Soft-delete flag; inactive rows are invisible to reads",
    )

    @property
    def entity_type(self) -> str:
        """Name of the lookup entity type."""
        return type(self).__name__

    @property
    def label(self) -> str:
        """The display value, whatever the label column is called."""
        return getattr(self, self.label_attribute)

    @label.setter
    def label(self, value: str) -> None:
        setattr(self, self.label_attribute, value)

    def __repr__(self) -> str:
        """Return the class name, id and label of the row."""
        label = getattr(self, self.label_attribute, None)
        return f"<{self.__class__.__name__}(id={self.id}, label={label!r})>"

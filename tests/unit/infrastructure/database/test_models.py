"""Unit tests for the lookup models."""

import uuid

import pytest
import pytest_check

from src.infrastructure.database.base import Base, LookupModel
from src.infrastructure.database.models import (
    LOOKUP_MODELS,
    AccountStatus,
    NoteType,
    PaymentMethod,
    ShipMethod,
    State,
)


@pytest.mark.unit
class TestLookupModels:
    """Test the shared table shape."""

    def test_all_tables_registered(self) -> None:
        """Every lookup model has a table in the metadata."""
        assert {m.__tablename__ for m in LOOKUP_MODELS} <= set(Base.metadata.tables)
        assert len(LOOKUP_MODELS) == 23

    @pytest.mark.parametrize("model", LOOKUP_MODELS)
    def test_common_columns(self, model: type[LookupModel]) -> None:
        """Every table has the same id, audit and active columns."""
        attributes = set(model.__mapper__.columns.keys())
        expected_names = {
            f"{model.__name__}Id",
            "Description",
            "OrdinalPosition",
            "CreatedDate",
            "CreatedBy",
            "ModifiedDate",
            "ModifiedBy",
            "Active",
        }
        column_names = {c.name for c in model.__table__.columns}
        with pytest_check.check:
            assert expected_names <= column_names
        with pytest_check.check:
            assert model.label_attribute in attributes

    @pytest.mark.parametrize(
        ("model", "label_column"),
        [
            (AccountStatus, "Status"),
            (NoteType, "Type"),
            (PaymentMethod, "Name"),
            (ShipMethod, "Method"),
            (State, "Name"),
        ],
    )
    def test_label_column_name(
        self, model: type[LookupModel], label_column: str
    ) -> None:
        """The label attribute maps to the entity's label column."""
        assert model.__mapper__.columns[model.label_attribute].name == label_column

    def test_label_property(self) -> None:
        """label reads and writes the entity's label attribute."""
        method = PaymentMethod(name="Card")
        method.label = "Wire"

        with pytest_check.check:
            assert method.name == "Wire"
        with pytest_check.check:
            assert method.label == "Wire"
        with pytest_check.check:
            assert method.entity_type == "PaymentMethod"

    def test_repr(self) -> None:
        """repr shows class, id and label."""
        entity_id = uuid.uuid4()
        status = AccountStatus(id=entity_id, status="Active")
        assert repr(status) == f"<AccountStatus(id={entity_id}, label='Active')>"

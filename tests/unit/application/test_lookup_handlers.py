"""Unit tests for the lookup command and query handlers."""

import asyncio
import uuid
from datetime import UTC, datetime
from typing import Any

import pytest
import pytest_check
from pytest_mock import MockerFixture, MockType

from src.application.lookups import (
    CreateLookupCommand,
    DeleteLookupCommand,
    GetAllLookupsQuery,
    GetDefaultLookupQuery,
    GetLookupByIdQuery,
    GetLookupsByLabelQuery,
    UpdateLookupCommand,
    register_lookup_features,
    to_lookup_dto,
)
from src.application.mediator import Mediator
from src.core.exceptions import NotFoundError, ValidationError
from src.infrastructure.database.base import LookupModel
from src.infrastructure.database.models import AccountStatus, State
from src.infrastructure.database.repository import LookupRepository

CREATED = datetime(2024, 1, 1, tzinfo=UTC)


def make_repository(mocker: MockerFixture, model: type[LookupModel]) -> MockType:
    repository = mocker.Mock(spec=LookupRepository)
    repository.model = model
    for name in (
        "add",
        "update",
        "delete",
        "exists",
        "get_by_id",
        "get_all",
        "get_by_label",
        "get_default",
    ):
        setattr(repository, name, mocker.AsyncMock())
    return repository


def make_status(label: str = "Active", **overrides: Any) -> AccountStatus:
    values: dict[str, Any] = {
        "id": uuid.uuid4(),
        "status": label,
        "description": None,
        "ordinal_position": 0,
        "created_date": CREATED,
        "modified_date": CREATED,
        "active": True,
    }
    values.update(overrides)
    return AccountStatus(**values)


@pytest.fixture
def repositories(mocker: MockerFixture) -> dict[str, MockType]:
    return {
        "AccountStatus": make_repository(mocker, AccountStatus),
        "State": make_repository(mocker, State),
    }


@pytest.fixture
def mediator(repositories: dict[str, MockType]) -> Mediator:
    return register_lookup_features(Mediator(), repositories)  # type: ignore[arg-type]


@pytest.mark.unit
class TestLookupDto:
    """Test entity to DTO mapping."""

    def test_common_fields(self) -> None:
        """The label is exposed whatever the column is called."""
        entity = make_status("Pending", ordinal_position=3)

        dto = to_lookup_dto(entity)

        with pytest_check.check:
            assert dto.entity_type == "AccountStatus"
        with pytest_check.check:
            assert dto.label == "Pending"
        with pytest_check.check:
            assert dto.ordinal_position == 3
        with pytest_check.check:
            assert dto.attributes == {}

    def test_extra_columns_become_attributes(self) -> None:
        """Entity-specific columns are collected under ``attributes``."""
        entity = State(
            id=uuid.uuid4(),
            name="Oregon",
            abbreviation="OR",
            country_code="USA",
            ordinal_position=0,
            created_date=CREATED,
            modified_date=CREATED,
            active=True,
        )

        dto = to_lookup_dto(entity)

        with pytest_check.check:
            assert dto.label == "Oregon"
        with pytest_check.check:
            assert dto.attributes == {"abbreviation": "OR", "country_code": "USA"}


@pytest.mark.unit
@pytest.mark.asyncio
class TestCommandHandlers:
    """Test create, update and delete handlers."""

    async def test_create(
        self, mediator: Mediator, repositories: dict[str, MockType]
    ) -> None:
        """The handler builds the entity and returns the stored row."""
        repository = repositories["State"]

        async def add(entity: State, _cancel_event: Any = None) -> State:
            entity.id = uuid.uuid4()
            entity.created_date = CREATED
            entity.modified_date = CREATED
            entity.active = True
            return entity

        repository.add.side_effect = add
        user = uuid.uuid4()

        dto = await mediator.send(
            CreateLookupCommand(
                entity_type="State",
                label="Oregon",
                ordinal_position=2,
                attributes={"abbreviation": "OR"},
                created_by=user,
            )
        )

        entity = repository.add.await_args.args[0]
        with pytest_check.check:
            assert isinstance(entity, State)
        with pytest_check.check:
            assert entity.name == "Oregon"
        with pytest_check.check:
            assert entity.abbreviation == "OR"
        with pytest_check.check:
            assert entity.created_by == user
        with pytest_check.check:
            assert dto.label == "Oregon"
        with pytest_check.check:
            assert dto.attributes["abbreviation"] == "OR"

    async def test_unknown_entity_type(self, mediator: Mediator) -> None:
        """Unknown entity types are a validation failure."""
        with pytest.raises(ValidationError) as exc_info:
            await mediator.send(CreateLookupCommand(entity_type="Planet", label="Mars"))

        assert exc_info.value.errors == ["Unknown lookup entity type: Planet"]

    async def test_create_rejects_unknown_attributes(
        self, mediator: Mediator, repositories: dict[str, MockType]
    ) -> None:
        """Attributes must be extra columns of the entity type."""
        with pytest.raises(ValidationError) as exc_info:
            await mediator.send(
                CreateLookupCommand(
                    entity_type="AccountStatus",
                    label="Active",
                    attributes={"abbreviation": "AC"},
                )
            )

        with pytest_check.check:
            assert exc_info.value.errors == [
                "AccountStatus has no attribute 'abbreviation'"
            ]
        with pytest_check.check:
            repositories["AccountStatus"].add.assert_not_awaited()

    async def test_update(
        self, mediator: Mediator, repositories: dict[str, MockType]
    ) -> None:
        """The loaded row is modified and written back."""
        repository = repositories["AccountStatus"]
        entity = make_status("Active")
        repository.get_by_id.return_value = entity
        repository.update.side_effect = lambda e, _cancel=None: e
        user = uuid.uuid4()

        dto = await mediator.send(
            UpdateLookupCommand(
                entity_type="AccountStatus",
                id=entity.id,
                label="Dormant",
                description="No activity for a year",
                ordinal_position=4,
                modified_by=user,
            )
        )

        with pytest_check.check:
            assert dto.label == "Dormant"
        with pytest_check.check:
            assert dto.ordinal_position == 4
        with pytest_check.check:
            assert dto.modified_by == user
        with pytest_check.check:
            assert dto.created_date == CREATED
        with pytest_check.check:
            assert dto.modified_date > CREATED

    async def test_update_missing_row(
        self, mediator: Mediator, repositories: dict[str, MockType]
    ) -> None:
        """Updating a missing or inactive row raises NotFoundError."""
        repositories["AccountStatus"].get_by_id.return_value = None
        entity_id = uuid.uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            await mediator.send(
                UpdateLookupCommand(
                    entity_type="AccountStatus", id=entity_id, label="Dormant"
                )
            )

        with pytest_check.check:
            assert exc_info.value.context["id"] == str(entity_id)
        with pytest_check.check:
            repositories["AccountStatus"].update.assert_not_awaited()

    async def test_update_row_deleted_concurrently(
        self, mediator: Mediator, repositories: dict[str, MockType]
    ) -> None:
        """A row deactivated between read and write is reported as missing."""
        repository = repositories["AccountStatus"]
        entity = make_status()
        repository.get_by_id.return_value = entity
        repository.update.return_value = None

        with pytest.raises(NotFoundError):
            await mediator.send(
                UpdateLookupCommand(
                    entity_type="AccountStatus", id=entity.id, label="Dormant"
                )
            )

    async def test_delete(
        self, mediator: Mediator, repositories: dict[str, MockType]
    ) -> None:
        """Deleting an active row soft deletes it."""
        repository = repositories["AccountStatus"]
        repository.exists.return_value = True
        repository.delete.return_value = True
        entity_id = uuid.uuid4()
        user = uuid.uuid4()

        result = await mediator.send(
            DeleteLookupCommand(
                entity_type="AccountStatus", id=entity_id, modified_by=user
            )
        )

        with pytest_check.check:
            assert result is True
        with pytest_check.check:
            repository.delete.assert_awaited_once_with(entity_id, user, None)

    async def test_delete_missing_row(
        self, mediator: Mediator, repositories: dict[str, MockType]
    ) -> None:
        """Deleting a missing row raises NotFoundError without writing."""
        repository = repositories["AccountStatus"]
        repository.exists.return_value = False

        with pytest.raises(NotFoundError):
            await mediator.send(
                DeleteLookupCommand(entity_type="AccountStatus", id=uuid.uuid4())
            )

        repository.delete.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
class TestQueryHandlers:
    """Test the read handlers."""

    async def test_get_by_id(
        self, mediator: Mediator, repositories: dict[str, MockType]
    ) -> None:
        """A found row is returned as a DTO."""
        entity = make_status()
        repositories["AccountStatus"].get_by_id.return_value = entity

        dto = await mediator.send(
            GetLookupByIdQuery(entity_type="AccountStatus", id=entity.id)
        )

        assert dto is not None
        assert dto.id == entity.id

    async def test_get_by_id_missing(
        self, mediator: Mediator, repositories: dict[str, MockType]
    ) -> None:
        """A missing row is None rather than an error."""
        repositories["AccountStatus"].get_by_id.return_value = None

        dto = await mediator.send(
            GetLookupByIdQuery(entity_type="AccountStatus", id=uuid.uuid4())
        )

        assert dto is None

    async def test_get_all(
        self, mediator: Mediator, repositories: dict[str, MockType]
    ) -> None:
        """All rows are mapped in repository order."""
        repositories["AccountStatus"].get_all.return_value = [
            make_status("Active"),
            make_status("Closed"),
        ]

        dtos = await mediator.send(GetAllLookupsQuery(entity_type="AccountStatus"))

        assert [dto.label for dto in dtos] == ["Active", "Closed"]

    async def test_get_by_label_passes_cancel_event(
        self, mediator: Mediator, repositories: dict[str, MockType]
    ) -> None:
        """The cancellation signal reaches the repository."""
        repository = repositories["AccountStatus"]
        repository.get_by_label.return_value = []
        cancel_event = asyncio.Event()

        await mediator.send(
            GetLookupsByLabelQuery(entity_type="AccountStatus", label="Active"),
            cancel_event,
        )

        repository.get_by_label.assert_awaited_once_with("Active", cancel_event)

    async def test_get_default(
        self, mediator: Mediator, repositories: dict[str, MockType]
    ) -> None:
        """The repository's default row is returned."""
        repositories["AccountStatus"].get_default.return_value = make_status(
            "Prospect"
        )

        dto = await mediator.send(GetDefaultLookupQuery(entity_type="AccountStatus"))

        assert dto is not None
        assert dto.label == "Prospect"

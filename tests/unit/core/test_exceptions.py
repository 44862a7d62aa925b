"""Unit tests for the exception hierarchy."""

import pytest
import pytest_check

from src.core.exceptions import (
    CrmError,
    ErrorCode,
    HandlerNotFoundError,
    NotFoundError,
    OperationCancelledError,
    Severity,
    ValidationError,
)


@pytest.mark.unit
class TestCrmError:
    """Test the base exception."""

    def test_attributes(self) -> None:
        """Code, message, severity and context are kept."""
        error = CrmError(
            ErrorCode.INTERNAL_ERROR,
            "boom",
            Severity.HIGH,
            context={"entity_type": "State"},
        )

        with pytest_check.check:
            assert error.error_code == "INTERNAL_ERROR"
        with pytest_check.check:
            assert error.message == "boom"
        with pytest_check.check:
            assert error.context == {"entity_type": "State"}
        with pytest_check.check:
            assert str(error) == "[INTERNAL_ERROR] boom"
        with pytest_check.check:
            assert error.should_alert is True
        with pytest_check.check:
            assert error.is_expected is False

    def test_cause_is_chained(self) -> None:
        """The cause becomes __cause__."""
        cause = RuntimeError("root")
        error = CrmError("CUSTOM", "wrapped", cause=cause)
        assert error.__cause__ is cause

    def test_fingerprint_is_stable_for_same_location(self) -> None:
        """Errors raised from the same place share a fingerprint."""
        fingerprints = {CrmError("CODE", f"message {i}").fingerprint for i in range(2)}
        assert len(fingerprints) == 1

    def test_repr(self) -> None:
        """repr includes the class and context."""
        error = CrmError("CODE", "msg", context={"id": "1"})
        assert repr(error) == (
            "CrmError(error_code='CODE', message='msg', severity=MEDIUM, "
            "context={'id': '1'})"
        )


@pytest.mark.unit
class TestSpecializedErrors:
    """Test the specialized exception classes."""

    @pytest.mark.parametrize(
        ("error_class", "code", "severity"),
        [
            (ValidationError, "VALIDATION_ERROR", Severity.LOW),
            (NotFoundError, "NOT_FOUND", Severity.LOW),
            (OperationCancelledError, "OPERATION_CANCELLED", Severity.LOW),
            (HandlerNotFoundError, "INTERNAL_ERROR", Severity.HIGH),
        ],
    )
    def test_codes_and_severities(
        self, error_class: type[CrmError], code: str, severity: Severity
    ) -> None:
        """Each class carries its default code and severity."""
        error = error_class("message")  # type: ignore[call-arg]

        with pytest_check.check:
            assert error.error_code == code
        with pytest_check.check:
            assert error.severity is severity
        with pytest_check.check:
            assert isinstance(error, CrmError)

    def test_validation_errors_property(self) -> None:
        """ValidationError exposes the individual messages."""
        error = ValidationError(
            "Invalid command", context={"errors": ["label: too long"]}
        )
        assert error.errors == ["label: too long"]

    def test_validation_errors_default_empty(self) -> None:
        """Without messages the list is empty."""
        assert ValidationError("Invalid").errors == []

"""Turning raw input into validated requests.

Requests validate themselves on construction. These helpers run that
validation on untrusted data and report failures either as a list of
messages or as the project's ``ValidationError``.
"""

from collections.abc import Mapping
from typing import Any

import pydantic

from src.application.mediator import Request
from src.core.exceptions import ValidationError


def validation_messages(error: pydantic.ValidationError) -> list[str]:
    """Flatten a pydantic error into ``field: message`` strings."""
    messages = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        messages.append(f"{location}: {detail['msg']}" if location else detail["msg"])
    return messages


def validate(request_type: type[Request], data: Mapping[str, Any]) -> list[str]:
    """Validate data against a request type.

    Returns:
        list[str]: Validation messages; empty when the data is valid.
    """
    try:
        request_type.model_validate(data)
    except pydantic.ValidationError as e:
        return validation_messages(e)
    return []


def parse_request[TRequest: Request](
    request_type: type[TRequest], data: Mapping[str, Any]
) -> TRequest:
    """Build a request from untrusted data.

    Raises:
        ValidationError: With every failure message in ``errors``.
    """
    try:
        return request_type.model_validate(data)
    except pydantic.ValidationError as e:
        errors = validation_messages(e)
        raise ValidationError(
            f"Invalid {request_type.__name__}: {'; '.join(errors)}",
            context={"request_type": request_type.__name__, "errors": errors},
            cause=e,
        ) from e

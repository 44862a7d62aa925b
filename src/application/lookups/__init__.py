"""Lookup commands, queries and their handlers."""

from src.application.lookups.commands import (
    CreateLookupCommand,
    DeleteLookupCommand,
    UpdateLookupCommand,
)
from src.application.lookups.dto import LookupDto, to_lookup_dto
from src.application.lookups.queries import (
    GetAllLookupsQuery,
    GetDefaultLookupQuery,
    GetLookupByIdQuery,
    GetLookupsByLabelQuery,
    GetLookupsByOrdinalPositionQuery,
)
from src.application.lookups.registration import register_lookup_features
from src.application.lookups.validation import parse_request, validate

__all__ = [
    "CreateLookupCommand",
    "DeleteLookupCommand",
    "GetAllLookupsQuery",
    "GetDefaultLookupQuery",
    "GetLookupByIdQuery",
    "GetLookupsByLabelQuery",
    "GetLookupsByOrdinalPositionQuery",
    "LookupDto",
    "UpdateLookupCommand",
    "parse_request",
    "register_lookup_features",
    "to_lookup_dto",
    "validate",
]

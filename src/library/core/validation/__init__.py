"""Entity schemas and the rule engine that enforces them."""

from .engine import Violation, ViolationKind, check_field, first_violation, validate
from .schema import (
    BOOK_SCHEMA,
    READER_SCHEMA,
    EntitySchema,
    FieldSpec,
    FieldType,
    Rule,
    RuleKind,
)

__all__ = [
    "BOOK_SCHEMA",
    "READER_SCHEMA",
    "EntitySchema",
    "FieldSpec",
    "FieldType",
    "Rule",
    "RuleKind",
    "Violation",
    "ViolationKind",
    "check_field",
    "first_violation",
    "validate",
]

"""Static field and rule tables for the library entities.

Each entity is described by an ordered tuple of ``FieldSpec`` descriptors.
A descriptor lists its rules in evaluation order; the validation engine walks
fields and rules exactly as declared here and stops at the first failure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum


class FieldType(StrEnum):
    """Semantic type of an entity field."""

    ID = "id"
    TEXT = "text"
    TIMESTAMP = "timestamp"


class RuleKind(IntEnum):
    """Rule kinds, valued by their evaluation precedence within a field."""

    NOT_NULL = 0
    NOT_EMPTY = 1
    FORMAT = 2
    MIN_LENGTH = 3
    UNIQUE = 4


@dataclass(frozen=True)
class Rule:
    """A named validation rule with its user-facing message."""

    kind: RuleKind
    message: str
    pattern: re.Pattern[str] | None = None
    min_length: int | None = None

    def __post_init__(self) -> None:
        if self.kind is RuleKind.FORMAT and self.pattern is None:
            raise ValueError("FORMAT rules need a pattern")
        if self.kind is RuleKind.MIN_LENGTH and self.min_length is None:
            raise ValueError("MIN_LENGTH rules need a min_length")


def not_null(message: str) -> Rule:
    return Rule(RuleKind.NOT_NULL, message)


def not_empty(message: str) -> Rule:
    return Rule(RuleKind.NOT_EMPTY, message)


def matches(pattern: str, message: str) -> Rule:
    return Rule(RuleKind.FORMAT, message, pattern=re.compile(pattern))


def min_length(length: int, message: str) -> Rule:
    return Rule(RuleKind.MIN_LENGTH, message, min_length=length)


def unique(message: str) -> Rule:
    return Rule(RuleKind.UNIQUE, message)


@dataclass(frozen=True)
class FieldSpec:
    """Descriptor for a single entity field."""

    name: str
    type: FieldType = FieldType.TEXT
    rules: tuple[Rule, ...] = ()
    generated: bool = False

    def __post_init__(self) -> None:
        kinds = [rule.kind for rule in self.rules]
        if kinds != sorted(kinds):
            raise ValueError(
                f"Rules for field '{self.name}' must be declared in evaluation order"
            )

    @property
    def nullable(self) -> bool:
        return self.rule(RuleKind.NOT_NULL) is None

    def rule(self, kind: RuleKind) -> Rule | None:
        """Return the rule of the given kind, if the field declares one."""
        return next((rule for rule in self.rules if rule.kind is kind), None)


@dataclass(frozen=True)
class EntitySchema:
    """Ordered field table for one entity."""

    entity: str
    fields: tuple[FieldSpec, ...]
    redacted: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        names = [spec.name for spec in self.fields]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate field names in schema '{self.entity}'")
        unknown = self.redacted - set(names)
        if unknown:
            raise ValueError(f"Redacted fields {sorted(unknown)} are not declared")

    def get_field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    @property
    def writable_fields(self) -> tuple[FieldSpec, ...]:
        """Fields a client may supply; generated fields are owned by the store."""
        return tuple(spec for spec in self.fields if not spec.generated)

    def unique_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(spec for spec in self.fields if spec.rule(RuleKind.UNIQUE))


# Something before the @, a domain after it, and at least one dot in the domain.
EMAIL_PATTERN = r"[^@\s]+@[^@\s]+\.[^@\s.]+"
PASSWORD_MIN_LENGTH = 8

ID_FIELD = FieldSpec("id", FieldType.ID, generated=True)
TIMESTAMP_FIELDS = (
    FieldSpec("created_at", FieldType.TIMESTAMP, generated=True),
    FieldSpec("updated_at", FieldType.TIMESTAMP, generated=True),
)

_PASSWORD_MESSAGE = f"Password must be {PASSWORD_MIN_LENGTH} characters or longer!"

READER_SCHEMA = EntitySchema(
    entity="reader",
    fields=(
        ID_FIELD,
        FieldSpec(
            "name",
            rules=(
                not_null("Name can not be empty"),
                not_empty("Name can not be empty"),
            ),
        ),
        FieldSpec(
            "email",
            rules=(
                not_null("Email can not be empty"),
                matches(EMAIL_PATTERN, "Email must be in correct format"),
                unique("Email must be unique"),
            ),
        ),
        FieldSpec(
            "password",
            rules=(
                not_null(_PASSWORD_MESSAGE),
                min_length(PASSWORD_MIN_LENGTH, _PASSWORD_MESSAGE),
            ),
        ),
        *TIMESTAMP_FIELDS,
    ),
    redacted=frozenset({"password"}),
)

BOOK_SCHEMA = EntitySchema(
    entity="book",
    fields=(
        ID_FIELD,
        FieldSpec(
            "title",
            rules=(
                not_null("Title can not be empty"),
                not_empty("Title can not be empty"),
            ),
        ),
        FieldSpec(
            "author",
            rules=(
                not_null("Author can not be empty"),
                not_empty("Author can not be empty"),
            ),
        ),
        FieldSpec("genre"),
        FieldSpec("ISBN"),
        *TIMESTAMP_FIELDS,
    ),
)

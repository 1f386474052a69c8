"""Fail-fast evaluation of entity rules against a candidate record."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from src.library.core.errors import PresenceViolationError, ValidationViolationError
from src.library.core.validation.schema import EntitySchema, FieldSpec, Rule, RuleKind


class ViolationKind(StrEnum):
    PRESENCE = "presence"
    VALIDATION = "validation"


@dataclass(frozen=True)
class Violation:
    """The first rule a record broke."""

    kind: ViolationKind
    entity: str
    field: str
    rule: Rule

    @property
    def message(self) -> str:
        return self.rule.message

    def to_error(self) -> PresenceViolationError | ValidationViolationError:
        if self.kind is ViolationKind.PRESENCE:
            return PresenceViolationError(self.entity, self.field, self.rule.message)
        return ValidationViolationError(self.entity, self.field, self.rule.message)


def _breaks(rule: Rule, value: Any) -> bool:
    """Whether a present (non-null) value breaks ``rule``."""
    text = value if isinstance(value, str) else str(value)
    if rule.kind is RuleKind.NOT_EMPTY:
        return not text.strip()
    if rule.kind is RuleKind.FORMAT:
        return rule.pattern.fullmatch(text) is None
    if rule.kind is RuleKind.MIN_LENGTH:
        return len(text) < rule.min_length
    return False


def check_field(schema: EntitySchema, spec: FieldSpec, value: Any) -> Violation | None:
    """Evaluate one field's rules in declared order."""
    if value is None:
        rule = spec.rule(RuleKind.NOT_NULL)
        if rule is None:
            return None
        return Violation(ViolationKind.PRESENCE, schema.entity, spec.name, rule)

    for rule in spec.rules:
        # Uniqueness needs the store; repositories translate the conflict.
        if rule.kind in (RuleKind.NOT_NULL, RuleKind.UNIQUE):
            continue
        if _breaks(rule, value):
            return Violation(ViolationKind.VALIDATION, schema.entity, spec.name, rule)
    return None


def first_violation(
    schema: EntitySchema, record: Mapping[str, Any], partial: bool = False
) -> Violation | None:
    """Return the first violated rule in declared field order, or ``None``.

    With ``partial`` set only the fields present in ``record`` are checked, as
    for a PATCH. Otherwise an absent field is treated as null.
    """
    for spec in schema.writable_fields:
        if partial and spec.name not in record:
            continue
        violation = check_field(schema, spec, record.get(spec.name))
        if violation is not None:
            return violation
    return None


def validate(
    schema: EntitySchema, record: Mapping[str, Any], partial: bool = False
) -> None:
    """Raise the error for the first violated rule, if any."""
    violation = first_violation(schema, record, partial=partial)
    if violation is not None:
        raise violation.to_error()

"""Expression validation.

Ties the pieces together: resolve the configuration once, split the
expression into its five fields and parse each field with its own
specification.

Usage:
    >>> from cronguard import validate, check
    >>>
    >>> validate("*/15 9-17 * * 1-5")
    True
    >>> validate("0 0 L * *")  # extensions are off by default
    False
    >>> validate("0 0 L * *", {"override": {"useLastDayOfMonth": True}})
    True
    >>>
    >>> report = check("0 0 32 * *")
    >>> report.is_valid
    False
    >>> report.errors[0].reason
    <FailureReason.OUT_OF_RANGE: 'out_of_range'>
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

from cronguard.config import FieldSpec, resolve_field_specs
from cronguard.errors import InvalidExpression, InvalidField
from cronguard.parser import FieldParser
from cronguard.tokens import ParsedToken
from cronguard.types import FIELD_COUNT, FieldIndex

logger = logging.getLogger(__name__)

Diagnostic = Union[InvalidExpression, InvalidField]


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of validating one expression.

    Attributes:
        expression: The validated expression.
        errors: One entry per rejected field, or a single InvalidExpression.
        fields: Parsed tokens of every field that was accepted.
    """

    expression: str
    errors: tuple[Diagnostic, ...] = ()
    fields: dict[FieldIndex, tuple[ParsedToken, ...]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> list[str]:
        return [str(error) for error in self.errors]

    def __bool__(self) -> bool:
        return self.is_valid


def check(
    expression: str,
    configuration: Mapping[str, Any] | None = None,
) -> ValidationReport:
    """Validate an expression and describe every failure.

    Args:
        expression: Five whitespace-separated fields.
        configuration: Optional mapping with ``preset`` and ``override``.

    Returns:
        ValidationReport for the expression.

    Raises:
        ConfigurationError: If the configuration itself is malformed.
    """
    return check_fields(expression, resolve_field_specs(configuration))


def check_fields(expression: str, specs: Sequence[FieldSpec]) -> ValidationReport:
    """Validate an expression against already resolved field specifications.

    Use this when many expressions share one configuration, so it is
    resolved only once.

    Args:
        expression: Five whitespace-separated fields.
        specs: One FieldSpec per field, as from ``resolve_field_specs``.

    Returns:
        ValidationReport for the expression.
    """
    if not isinstance(expression, str):
        error = InvalidExpression(
            f"Expression must be a string, got {type(expression).__name__}",
            expression,
        )
        return ValidationReport(str(expression), errors=(error,))

    parts = expression.split()
    if len(parts) != FIELD_COUNT:
        error = InvalidExpression(
            f"Invalid number of fields: {len(parts)}. Expected {FIELD_COUNT} fields.",
            expression,
        )
        logger.debug(str(error))
        return ValidationReport(expression, errors=(error,))

    errors: list[Diagnostic] = []
    fields: dict[FieldIndex, tuple[ParsedToken, ...]] = {}
    for spec, part in zip(specs, parts):
        try:
            fields[spec.index] = FieldParser(spec).parse(part)
        except InvalidField as e:
            logger.debug(f"Rejected {expression!r}: {e} [{e.reason.value}]")
            errors.append(e)

    return ValidationReport(expression, errors=tuple(errors), fields=fields)


def validate(
    expression: str,
    configuration: Mapping[str, Any] | None = None,
) -> bool:
    """Check if a cron expression is valid under ``configuration``.

    Args:
        expression: Cron expression to check.
        configuration: Optional mapping with ``preset`` and ``override``.

    Returns:
        True if valid.
    """
    return check(expression, configuration).is_valid


def validate_expression(
    expression: str,
    configuration: Mapping[str, Any] | None = None,
) -> list[str]:
    """Validate a cron expression.

    Args:
        expression: Cron expression to validate.
        configuration: Optional mapping with ``preset`` and ``override``.

    Returns:
        List of validation errors (empty if valid).
    """
    return check(expression, configuration).messages

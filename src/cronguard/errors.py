"""Exceptions and failure reasons for cron expression validation."""

from __future__ import annotations

from enum import Enum

from cronguard.types import FieldIndex


class FailureReason(str, Enum):
    """Why a field was rejected."""

    OUT_OF_RANGE = "out_of_range"
    MALFORMED_EXTENSION_TOKEN = "malformed_extension_token"
    DISALLOWED_COMBINATION = "disallowed_combination"
    UNKNOWN_ALIAS = "unknown_alias"
    DISABLED_FEATURE = "disabled_feature"
    MALFORMED_SYNTAX = "malformed_syntax"


class CronValidationError(ValueError):
    """Base class for cronguard errors."""


class InvalidExpression(CronValidationError):
    """Raised when an expression does not split into exactly five fields."""

    def __init__(self, message: str, expression: object = "") -> None:
        self.expression = expression
        super().__init__(message)


class InvalidField(CronValidationError):
    """Raised when one field of an expression is not legal.

    Attributes:
        index: Position of the rejected field.
        reason: Category of the failure.
        text: The fragment of the field that failed.
    """

    def __init__(
        self,
        index: FieldIndex,
        reason: FailureReason,
        message: str,
        text: str = "",
    ) -> None:
        self.index = index
        self.reason = reason
        self.text = text
        super().__init__(f"{index.label} field: {message}")


class ConfigurationError(CronValidationError):
    """Raised when a configuration cannot be resolved.

    This signals a programming error on the caller side (for example a
    non-numeric limit), never an invalid expression.
    """


class ColumnNotFoundError(Exception):
    """Raised when a required column is not found in the schema."""

    def __init__(self, column: str, available_columns: list[str]):
        self.column = column
        self.available_columns = available_columns
        super().__init__(
            f"Column '{column}' not found. Available: {available_columns[:10]}"
            + ("..." if len(available_columns) > 10 else "")
        )

"""cronguard - configurable validation of five-field cron expressions.

Features:
    - Standard 5-field cron (minute, hour, day of month, month, day of week)
    - Lists, ranges and steps: 1,5  1-5  */15  1-30/5
    - Optional extensions, each behind its own flag:
        L     last day of month / last weekday occurrence
        W     nearest weekday (15W) and last weekday of month (LW)
        #     nth weekday of month (6#3)
        ?     blank day
        names JAN-DEC, SUN-SAT
    - Per-field limit overrides
    - Dialect presets (aws-cloudwatch, npm-node-cron, ...)
    - Diagnostics describing which field failed and why
    - Validation of cron columns in polars data

Usage:
    >>> import cronguard
    >>>
    >>> cronguard.validate("0 9 * * 1-5")
    True
    >>> cronguard.validate("0 9 * * 6#3", {
    ...     "override": {
    ...         "useNthWeekdayOfMonth": True,
    ...         "daysOfWeek": {"lowerLimit": 1, "upperLimit": 7},
    ...     },
    ... })
    True
"""

from cronguard.capabilities import CAPABILITY_TABLE, ExtensionDescriptor
from cronguard.config import (
    DEFAULT_LIMITS,
    FieldSpec,
    Limit,
    load_configuration,
    resolve_field_specs,
)
from cronguard.errors import (
    ConfigurationError,
    CronValidationError,
    FailureReason,
    InvalidExpression,
    InvalidField,
)
from cronguard.parser import FieldParser, is_valid_field, parse_field
from cronguard.presets import PRESETS, get_preset, list_presets
from cronguard.types import FieldIndex, Flag
from cronguard.validator import (
    ValidationReport,
    check,
    check_fields,
    validate,
    validate_expression,
)

__version__ = "0.1.0"

__all__ = [
    # Validation
    "validate",
    "check",
    "check_fields",
    "validate_expression",
    "ValidationReport",
    # Configuration
    "resolve_field_specs",
    "load_configuration",
    "FieldSpec",
    "Limit",
    "DEFAULT_LIMITS",
    "FieldIndex",
    "Flag",
    # Parser
    "FieldParser",
    "parse_field",
    "is_valid_field",
    # Capabilities
    "CAPABILITY_TABLE",
    "ExtensionDescriptor",
    # Presets
    "PRESETS",
    "get_preset",
    "list_presets",
    # Errors
    "CronValidationError",
    "InvalidExpression",
    "InvalidField",
    "ConfigurationError",
    "FailureReason",
]

"""Predefined configuration presets.

Each preset is an ``override`` mapping describing a well known cron dialect.
A preset is selected with the ``preset`` key of a configuration and can be
refined with ``override``:

    >>> from cronguard import validate
    >>> validate("0 12 ? * MON-FRI", {"preset": "aws-cloudwatch"})
    True
    >>> validate("0 12 L * *", {
    ...     "preset": "npm-node-cron",
    ...     "override": {"useLastDayOfMonth": True},
    ... })
    True
"""

from __future__ import annotations

import copy
from typing import Any


_DEFAULT_LIMITS: dict[str, dict[str, int]] = {
    "minutes": {"lowerLimit": 0, "upperLimit": 59},
    "hours": {"lowerLimit": 0, "upperLimit": 23},
    "daysOfMonth": {"lowerLimit": 1, "upperLimit": 31},
    "months": {"lowerLimit": 1, "upperLimit": 12},
    "daysOfWeek": {"lowerLimit": 0, "upperLimit": 7},
}


# =============================================================================
# Standard
# =============================================================================

# Plain cron: numbers only, no extensions
DEFAULT: dict[str, Any] = {
    **_DEFAULT_LIMITS,
    "useAliases": False,
    "useBlankDay": False,
    "useLastDayOfMonth": False,
    "useLastDayOfWeek": False,
    "useNearestWeekday": False,
    "useNthWeekdayOfMonth": False,
}


# =============================================================================
# Node.js schedulers
# =============================================================================

NPM_NODE_CRON: dict[str, Any] = {
    **DEFAULT,
    "useAliases": True,
}

NPM_CRON_SCHEDULE: dict[str, Any] = {
    **DEFAULT,
    "useAliases": True,
}


# =============================================================================
# Cloud schedulers
# =============================================================================

# Quartz-style weekdays: SUN=1 .. SAT=7
AWS_CLOUDWATCH: dict[str, Any] = {
    **_DEFAULT_LIMITS,
    "daysOfWeek": {"lowerLimit": 1, "upperLimit": 7},
    "useAliases": True,
    "useBlankDay": True,
    "useLastDayOfMonth": True,
    "useLastDayOfWeek": True,
    "useNearestWeekday": True,
    "useNthWeekdayOfMonth": True,
}


# =============================================================================
# Preset Registry
# =============================================================================

PRESETS: dict[str, dict[str, Any]] = {
    "default": DEFAULT,
    "npm-node-cron": NPM_NODE_CRON,
    "npm-cron-schedule": NPM_CRON_SCHEDULE,
    "aws-cloudwatch": AWS_CLOUDWATCH,
}


def get_preset(name: str) -> dict[str, Any] | None:
    """Get a preset override mapping by name.

    Args:
        name: Preset name (case-insensitive, ``_`` and ``-`` are equivalent).

    Returns:
        A copy of the preset mapping, or None if not found.
    """
    preset = PRESETS.get(name.lower().replace("_", "-"))
    return copy.deepcopy(preset) if preset is not None else None


def list_presets() -> list[str]:
    """List all available preset names.

    Returns:
        List of preset names.
    """
    return list(PRESETS.keys())

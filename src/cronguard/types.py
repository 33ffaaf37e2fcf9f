"""Type definitions for cronguard."""

from __future__ import annotations

from enum import Enum, IntEnum


class FieldIndex(IntEnum):
    """Positions of the five fields of a cron expression."""

    MINUTE = 0
    HOUR = 1
    DAY_OF_MONTH = 2
    MONTH = 3
    DAY_OF_WEEK = 4

    @property
    def config_key(self) -> str:
        """Key of this field in a configuration ``override`` mapping."""
        return _CONFIG_KEYS[self]

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", " ")


_CONFIG_KEYS: dict[FieldIndex, str] = {
    FieldIndex.MINUTE: "minutes",
    FieldIndex.HOUR: "hours",
    FieldIndex.DAY_OF_MONTH: "daysOfMonth",
    FieldIndex.MONTH: "months",
    FieldIndex.DAY_OF_WEEK: "daysOfWeek",
}

FIELD_COUNT = len(FieldIndex)


class Flag(str, Enum):
    """Configuration toggles gating the extension syntax."""

    USE_LAST_DAY_OF_MONTH = "useLastDayOfMonth"
    USE_LAST_DAY_OF_WEEK = "useLastDayOfWeek"
    USE_NEAREST_WEEKDAY = "useNearestWeekday"
    USE_NTH_WEEKDAY_OF_MONTH = "useNthWeekdayOfMonth"
    USE_ALIASES = "useAliases"
    USE_BLANK_DAY = "useBlankDay"


class Severity(str, Enum):
    """Severity levels for data quality issues."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

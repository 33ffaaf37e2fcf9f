"""Parsed representation of a single cron field item."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Wildcard:
    """``*``"""


@dataclass(frozen=True)
class Number:
    """A numeric atom, possibly resolved from a name alias."""

    value: int
    alias: str | None = None


@dataclass(frozen=True)
class Range:
    start: Number
    end: Number


@dataclass(frozen=True)
class Step:
    base: Union[Wildcard, Number, Range]
    interval: int


# =============================================================================
# Extension tokens
# =============================================================================


@dataclass(frozen=True)
class LastDayOfMonth:
    """``L`` or ``L-<offset>`` in the day-of-month field."""

    offset: int | None = None


@dataclass(frozen=True)
class LastWeekdayOccurrence:
    """``L`` or ``<day>L`` in the day-of-week field.

    A bare ``L`` carries the field's upper limit as its weekday.
    """

    weekday: int


@dataclass(frozen=True)
class NearestWeekday:
    """``<day>W`` in the day-of-month field."""

    day: int


@dataclass(frozen=True)
class LastWeekdayOfMonth:
    """``LW`` in the day-of-month field."""


@dataclass(frozen=True)
class NthWeekdayOfMonth:
    """``<day>#<occurrence>`` in the day-of-week field."""

    weekday: int
    occurrence: int


@dataclass(frozen=True)
class BlankDay:
    """``?`` in either day field."""


ExtensionToken = Union[
    LastDayOfMonth,
    LastWeekdayOccurrence,
    NearestWeekday,
    LastWeekdayOfMonth,
    NthWeekdayOfMonth,
    BlankDay,
]

ParsedToken = Union[Wildcard, Number, Range, Step, ExtensionToken]

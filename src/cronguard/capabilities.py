"""Extension capability table.

Every non-standard token (``L``, ``W``, ``LW``, ``#``, ``?``) is described by
one :class:`ExtensionDescriptor`: the flag(s) that enable it, the fields it
may appear in, and its micro-grammar. The configuration resolver uses the
table to decide which extensions a field accepts, and the parser uses it to
recognise and build extension tokens. Neither branches on field identity.

Syntax Reference:
    Extension               Flag(s)                          Field         Syntax
    ───────────────────────────────────────────────────────────────────────────────────
    LastDayOfMonth          useLastDayOfMonth                day of month  L, L-<offset>
    LastWeekdayOccurrence   useLastDayOfWeek                 day of week   L, <day>L
    NearestWeekday          useNearestWeekday                day of month  <day>W
    LastWeekdayOfMonth      useLastDayOfMonth +              day of month  LW
                            useNearestWeekday
    NthWeekdayOfMonth       useNthWeekdayOfMonth             day of week   <day>#<n>
    BlankDay                useBlankDay                      both days     ?
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, AbstractSet, Callable

from cronguard.errors import FailureReason, InvalidField
from cronguard.tokens import (
    BlankDay,
    ExtensionToken,
    LastDayOfMonth,
    LastWeekdayOccurrence,
    LastWeekdayOfMonth,
    NearestWeekday,
    NthWeekdayOfMonth,
)
from cronguard.types import FieldIndex, Flag

if TYPE_CHECKING:
    from cronguard.config import FieldSpec


# Characters that only ever appear in extension tokens
MARKERS = frozenset("LW#?")


@dataclass(frozen=True)
class ExtensionDescriptor:
    """Declarative description of one extension token.

    Attributes:
        name: Human readable name.
        flags: Flags that must all be enabled.
        fields: Field indexes the token may appear in.
        pattern: Micro-grammar, matched against the whole item.
        build: Turns a pattern match into a token, checking limits.
    """

    name: str
    flags: frozenset[Flag]
    fields: frozenset[FieldIndex]
    pattern: re.Pattern[str]
    build: Callable[[re.Match[str], "FieldSpec"], ExtensionToken]

    def match(self, text: str) -> re.Match[str] | None:
        return self.pattern.fullmatch(text)

    def is_enabled(self, flags: AbstractSet[Flag]) -> bool:
        return self.flags <= flags

    def is_available(self, index: FieldIndex, flags: AbstractSet[Flag]) -> bool:
        """Check if the token is legal at ``index`` under ``flags``."""
        return index in self.fields and self.is_enabled(flags)


# Longest decimal literal accepted before conversion to int
MAX_LITERAL_DIGITS = 10


def literal_value(text: str, spec: "FieldSpec", item: str) -> int:
    """Convert a decimal literal from ``item``, rejecting oversized ones."""
    if len(text) > MAX_LITERAL_DIGITS:
        raise InvalidField(
            spec.index,
            FailureReason.OUT_OF_RANGE,
            f"literal in {item[:20]!r} exceeds {MAX_LITERAL_DIGITS} digits",
            item,
        )
    return int(text)


def _within_limit(value: int, spec: "FieldSpec", text: str, what: str) -> int:
    if not spec.limit.contains(value):
        raise InvalidField(
            spec.index,
            FailureReason.OUT_OF_RANGE,
            f"{what} {value} in {text!r} out of range "
            f"[{spec.limit.lower}-{spec.limit.upper}]",
            text,
        )
    return value


# =============================================================================
# Micro-grammar builders
# =============================================================================


def _number(match: re.Match[str], group: str, spec: "FieldSpec", what: str) -> int:
    value = literal_value(match.group(group), spec, match.string)
    return _within_limit(value, spec, match.string, what)


def _build_last_day_of_month(match: re.Match[str], spec: "FieldSpec") -> LastDayOfMonth:
    if match.group("offset") is None:
        return LastDayOfMonth()
    return LastDayOfMonth(_number(match, "offset", spec, "offset"))


def _build_last_weekday_occurrence(
    match: re.Match[str], spec: "FieldSpec"
) -> LastWeekdayOccurrence:
    if match.group("day") is None:
        return LastWeekdayOccurrence(spec.limit.upper)
    return LastWeekdayOccurrence(_number(match, "day", spec, "weekday"))


def _build_nearest_weekday(match: re.Match[str], spec: "FieldSpec") -> NearestWeekday:
    return NearestWeekday(_number(match, "day", spec, "day"))


def _build_last_weekday_of_month(
    match: re.Match[str], spec: "FieldSpec"
) -> LastWeekdayOfMonth:
    return LastWeekdayOfMonth()


def _build_nth_weekday_of_month(
    match: re.Match[str], spec: "FieldSpec"
) -> NthWeekdayOfMonth:
    weekday = _number(match, "day", spec, "weekday")
    occurrence = literal_value(match.group("occurrence"), spec, match.string)
    return NthWeekdayOfMonth(weekday, occurrence)


def _build_blank_day(match: re.Match[str], spec: "FieldSpec") -> BlankDay:
    return BlankDay()


# =============================================================================
# Capability table
# =============================================================================


LAST_DAY_OF_MONTH = ExtensionDescriptor(
    name="last day of month",
    flags=frozenset({Flag.USE_LAST_DAY_OF_MONTH}),
    fields=frozenset({FieldIndex.DAY_OF_MONTH}),
    pattern=re.compile(r"L(?:-(?P<offset>\d+))?", re.IGNORECASE | re.ASCII),
    build=_build_last_day_of_month,
)

LAST_WEEKDAY_OCCURRENCE = ExtensionDescriptor(
    name="last weekday occurrence",
    flags=frozenset({Flag.USE_LAST_DAY_OF_WEEK}),
    fields=frozenset({FieldIndex.DAY_OF_WEEK}),
    pattern=re.compile(r"(?P<day>\d+)?L", re.IGNORECASE | re.ASCII),
    build=_build_last_weekday_occurrence,
)

NEAREST_WEEKDAY = ExtensionDescriptor(
    name="nearest weekday",
    flags=frozenset({Flag.USE_NEAREST_WEEKDAY}),
    fields=frozenset({FieldIndex.DAY_OF_MONTH}),
    pattern=re.compile(r"(?P<day>\d+)W", re.IGNORECASE | re.ASCII),
    build=_build_nearest_weekday,
)

LAST_WEEKDAY_OF_MONTH = ExtensionDescriptor(
    name="last weekday of month",
    flags=frozenset({Flag.USE_LAST_DAY_OF_MONTH, Flag.USE_NEAREST_WEEKDAY}),
    fields=frozenset({FieldIndex.DAY_OF_MONTH}),
    pattern=re.compile(r"LW", re.IGNORECASE | re.ASCII),
    build=_build_last_weekday_of_month,
)

NTH_WEEKDAY_OF_MONTH = ExtensionDescriptor(
    name="nth weekday of month",
    flags=frozenset({Flag.USE_NTH_WEEKDAY_OF_MONTH}),
    fields=frozenset({FieldIndex.DAY_OF_WEEK}),
    pattern=re.compile(r"(?P<day>\d+)#(?P<occurrence>\d+)", re.ASCII),
    build=_build_nth_weekday_of_month,
)

BLANK_DAY = ExtensionDescriptor(
    name="blank day",
    flags=frozenset({Flag.USE_BLANK_DAY}),
    fields=frozenset({FieldIndex.DAY_OF_MONTH, FieldIndex.DAY_OF_WEEK}),
    pattern=re.compile(r"\?"),
    build=_build_blank_day,
)

CAPABILITY_TABLE: tuple[ExtensionDescriptor, ...] = (
    LAST_DAY_OF_MONTH,
    LAST_WEEKDAY_OCCURRENCE,
    NEAREST_WEEKDAY,
    LAST_WEEKDAY_OF_MONTH,
    NTH_WEEKDAY_OF_MONTH,
    BLANK_DAY,
)


def available_extensions(
    index: FieldIndex, flags: AbstractSet[Flag]
) -> tuple[ExtensionDescriptor, ...]:
    """Get the descriptors legal at ``index`` under ``flags``."""
    return tuple(d for d in CAPABILITY_TABLE if d.is_available(index, flags))


def find_descriptor(text: str) -> ExtensionDescriptor | None:
    """Get the first descriptor whose grammar matches ``text``, enabled or not."""
    for descriptor in CAPABILITY_TABLE:
        if descriptor.match(text):
            return descriptor
    return None


def has_marker(text: str) -> bool:
    """Check if ``text`` contains a character reserved for extension tokens."""
    return any(char in MARKERS for char in text.upper())

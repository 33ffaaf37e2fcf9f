"""Field expression parser.

Parses the text of a single cron field against its :class:`FieldSpec`.

Grammar (per comma-separated item, first match wins):
    extension   whole item matches an enabled capability (L, 15W, 6#3, ...)
    wildcard    *
    step        (* | atom | range) / digits
    range       atom - atom
    atom        digits | 3-letter alias

Extension tokens never take part in lists, ranges or steps.
"""

from __future__ import annotations

import re
from typing import NoReturn

from cronguard.capabilities import MARKERS, find_descriptor, has_marker, literal_value
from cronguard.config import FieldSpec
from cronguard.errors import FailureReason, InvalidField
from cronguard.tokens import (
    ExtensionToken,
    Number,
    ParsedToken,
    Range,
    Step,
    Wildcard,
)

_DIGITS = re.compile(r"\d+", re.ASCII)
_LETTERS = re.compile(r"[A-Za-z]+")


class FieldParser:
    """Parser for one cron field.

    Example:
        >>> spec = resolve_field_specs({"override": {"useAliases": True}})[3]
        >>> FieldParser(spec).parse("jan-jun/2")
        (Step(base=Range(start=Number(value=1, alias='jan'), ...), interval=2),)
    """

    def __init__(self, spec: FieldSpec) -> None:
        self._spec = spec

    @property
    def spec(self) -> FieldSpec:
        return self._spec

    def parse(self, text: str) -> tuple[ParsedToken, ...]:
        """Parse field text into tokens.

        Args:
            text: Field text, e.g. ``"1-15,20-22"``.

        Returns:
            One token per list item.

        Raises:
            InvalidField: If the text is not legal for this field.
        """
        if not isinstance(text, str):
            self._fail(FailureReason.MALFORMED_SYNTAX, f"expected text, got {text!r}", "")

        items = text.split(",")
        in_list = len(items) > 1
        return tuple(self._parse_item(item, in_list) for item in items)

    def _parse_item(self, item: str, in_list: bool) -> ParsedToken:
        if not item:
            self._fail(FailureReason.MALFORMED_SYNTAX, "empty list item", item)

        extension = self._parse_extension(item)
        if extension is not None:
            if in_list:
                self._fail(
                    FailureReason.DISALLOWED_COMBINATION,
                    f"{item!r} cannot be part of a list",
                    item,
                )
            return extension

        if item == "*":
            return Wildcard()
        if "/" in item:
            return self._parse_step(item)
        if "-" in item:
            return self._parse_range(item)
        return self._parse_atom(item)

    def _parse_extension(self, item: str) -> ExtensionToken | None:
        """Parse an item that is entirely an extension token.

        Returns None when the item is not an extension token at all.
        """
        for descriptor in self._spec.extensions:
            match = descriptor.match(item)
            if match:
                return descriptor.build(match, self._spec)

        descriptor = find_descriptor(item)
        if descriptor is not None:
            self._fail(
                FailureReason.DISABLED_FEATURE,
                f"{descriptor.name} ({item!r}) is not enabled for this field",
                item,
            )
        return None

    def _parse_step(self, item: str) -> Step:
        """Parse step expression (*/n, a/n or a-b/n)."""
        base_text, _, interval_text = item.partition("/")
        if not base_text or not interval_text or "/" in interval_text:
            self._fail(FailureReason.MALFORMED_SYNTAX, f"invalid step {item!r}", item)

        self._reject_extension_operand(base_text, item)
        if base_text == "*":
            base: Wildcard | Number | Range = Wildcard()
        elif "-" in base_text:
            base = self._parse_range(base_text)
        else:
            base = self._parse_atom(base_text)

        return Step(base, self._parse_interval(interval_text, item))

    def _parse_interval(self, text: str, item: str) -> int:
        self._reject_extension_operand(text, item)
        if self._spec.is_known_alias(text):
            self._fail(
                FailureReason.DISALLOWED_COMBINATION,
                f"alias {text!r} cannot be a step interval in {item!r}",
                item,
            )
        if not _DIGITS.fullmatch(text):
            self._fail(
                FailureReason.MALFORMED_SYNTAX,
                f"step interval {text!r} in {item!r} is not a number",
                item,
            )

        interval = literal_value(text, self._spec, item)
        if interval < 1:
            self._fail(
                FailureReason.OUT_OF_RANGE,
                f"step interval must be positive in {item!r}",
                item,
            )
        return interval

    def _parse_range(self, text: str) -> Range:
        """Parse range expression (a-b)."""
        start_text, _, end_text = text.partition("-")
        if not start_text or not end_text or "-" in end_text:
            self._fail(FailureReason.MALFORMED_SYNTAX, f"invalid range {text!r}", text)

        self._reject_extension_operand(start_text, text)
        self._reject_extension_operand(end_text, text)
        start = self._parse_atom(start_text)
        end = self._parse_atom(end_text)

        if start.value > end.value:
            self._fail(
                FailureReason.OUT_OF_RANGE,
                f"range start {start.value} is greater than end {end.value} in {text!r}",
                text,
            )
        return Range(start, end)

    def _parse_atom(self, text: str) -> Number:
        """Resolve a number or alias and check it against the field limit."""
        if _DIGITS.fullmatch(text):
            value = literal_value(text, self._spec, text)
            return Number(self._check_limit(value, text))

        value = self._spec.resolve_alias(text)
        if value is not None:
            return Number(self._check_limit(value, text), alias=text.lower())

        if self._spec.is_known_alias(text):
            self._fail(
                FailureReason.DISABLED_FEATURE,
                f"alias {text!r} used but aliases are not enabled",
                text,
            )
        if _LETTERS.fullmatch(text) and not set(text.upper()) <= MARKERS:
            self._fail(FailureReason.UNKNOWN_ALIAS, f"unknown alias {text!r}", text)
        if has_marker(text):
            self._fail(
                FailureReason.MALFORMED_EXTENSION_TOKEN,
                f"malformed extension token {text!r}",
                text,
            )
        self._fail(FailureReason.MALFORMED_SYNTAX, f"invalid value {text!r}", text)

    def _check_limit(self, value: int, text: str) -> int:
        limit = self._spec.limit
        if not limit.contains(value):
            self._fail(
                FailureReason.OUT_OF_RANGE,
                f"value {text!r} out of range [{limit.lower}-{limit.upper}]",
                text,
            )
        return value

    def _reject_extension_operand(self, text: str, item: str) -> None:
        descriptor = find_descriptor(text)
        if descriptor is not None:
            self._fail(
                FailureReason.DISALLOWED_COMBINATION,
                f"{descriptor.name} ({text!r}) cannot be used inside {item!r}",
                item,
            )

    def _fail(self, reason: FailureReason, message: str, text: str) -> NoReturn:
        raise InvalidField(self._spec.index, reason, message, text)


def parse_field(text: str, spec: FieldSpec) -> tuple[ParsedToken, ...]:
    """Parse field text, raising InvalidField when it is not legal."""
    return FieldParser(spec).parse(text)


def is_valid_field(text: str, spec: FieldSpec) -> bool:
    """Check if field text is legal for ``spec``. Never raises."""
    try:
        FieldParser(spec).parse(text)
        return True
    except InvalidField:
        return False

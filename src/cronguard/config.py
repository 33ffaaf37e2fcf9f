"""Configuration resolution.

A configuration is a plain mapping, usually written inline or loaded from a
YAML file::

    {
        "preset": "aws-cloudwatch",
        "override": {
            "daysOfMonth": {"lowerLimit": 1, "upperLimit": 31},
            "useLastDayOfMonth": True,
            "useAliases": True,
        },
    }

Every key is optional. Values fall back to the preset, then to the
built-in defaults; unknown keys are ignored. :func:`resolve_field_specs`
turns such a mapping into five immutable :class:`FieldSpec` objects, one per
field, which is all the parser ever looks at.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

from cronguard.capabilities import ExtensionDescriptor, available_extensions
from cronguard.errors import ConfigurationError
from cronguard.presets import get_preset, list_presets
from cronguard.types import FieldIndex, Flag

logger = logging.getLogger(__name__)


# =============================================================================
# Limits and aliases
# =============================================================================


@dataclass(frozen=True)
class Limit:
    """Inclusive bounds for the numeric atoms of a field."""

    lower: int
    upper: int

    def contains(self, value: int) -> bool:
        return self.lower <= value <= self.upper


DEFAULT_LIMITS: dict[FieldIndex, Limit] = {
    FieldIndex.MINUTE: Limit(0, 59),
    FieldIndex.HOUR: Limit(0, 23),
    FieldIndex.DAY_OF_MONTH: Limit(1, 31),
    FieldIndex.MONTH: Limit(1, 12),
    FieldIndex.DAY_OF_WEEK: Limit(0, 7),
}

MONTH_NAMES = (
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
)

WEEKDAY_NAMES = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")


def alias_table(index: FieldIndex, limit: Limit) -> Mapping[str, int] | None:
    """Build the alias table for a field, or None if it has no names.

    Weekdays are numbered Sunday-first: from 1 when the field's lower limit
    is 1, from 0 otherwise.
    """
    if index == FieldIndex.MONTH:
        names, first = MONTH_NAMES, 1
    elif index == FieldIndex.DAY_OF_WEEK:
        names, first = WEEKDAY_NAMES, 1 if limit.lower == 1 else 0
    else:
        return None
    return MappingProxyType({name: first + i for i, name in enumerate(names)})


# =============================================================================
# Field specification
# =============================================================================


@dataclass(frozen=True)
class FieldSpec:
    """Effective grammar of one field for a single validation call.

    Attributes:
        index: Position of the field.
        limit: Inclusive numeric bounds.
        aliases: Active alias table, or None when aliasing is off or the
            field has no names.
        extensions: Extension descriptors legal in this field.
        known_aliases: Alias table of the field regardless of the flag, used
            to tell a disabled alias from an unknown one.
    """

    index: FieldIndex
    limit: Limit
    aliases: Mapping[str, int] | None = None
    extensions: tuple[ExtensionDescriptor, ...] = ()
    known_aliases: Mapping[str, int] | None = None

    def resolve_alias(self, text: str) -> int | None:
        """Look up a 3-letter alias, case-insensitively."""
        if self.aliases is None:
            return None
        return self.aliases.get(text.lower())

    def is_known_alias(self, text: str) -> bool:
        return self.known_aliases is not None and text.lower() in self.known_aliases


def resolve_field_specs(
    configuration: Mapping[str, Any] | None = None,
) -> tuple[FieldSpec, ...]:
    """Resolve a configuration into the five field specifications.

    Args:
        configuration: Mapping with optional ``preset`` and ``override`` keys.

    Returns:
        Tuple of FieldSpec ordered minute, hour, day of month, month,
        day of week.

    Raises:
        ConfigurationError: If the configuration is not well-typed.
    """
    override = _merged_override(configuration)
    flags = _resolve_flags(override)

    specs = []
    for index in FieldIndex:
        limit = _resolve_limit(index, override.get(index.config_key))
        known = alias_table(index, limit)
        specs.append(
            FieldSpec(
                index=index,
                limit=limit,
                aliases=known if Flag.USE_ALIASES in flags else None,
                extensions=available_extensions(index, flags),
                known_aliases=known,
            )
        )

    logger.debug(f"Resolved field specs with flags: {sorted(f.value for f in flags)}")
    return tuple(specs)


def _merged_override(configuration: Mapping[str, Any] | None) -> dict[str, Any]:
    if configuration is None:
        return {}
    if not isinstance(configuration, Mapping):
        raise ConfigurationError(
            f"Configuration must be a mapping, got {type(configuration).__name__}"
        )

    merged: dict[str, Any] = {}

    preset_name = configuration.get("preset")
    if preset_name is not None:
        preset = get_preset(preset_name) if isinstance(preset_name, str) else None
        if preset is None:
            raise ConfigurationError(
                f"Unknown preset {preset_name!r}. Available: {list_presets()}"
            )
        merged = _merge(merged, preset)

    override = configuration.get("override")
    if override is not None:
        if not isinstance(override, Mapping):
            raise ConfigurationError(
                f"'override' must be a mapping, got {type(override).__name__}"
            )
        merged = _merge(merged, override)

    return merged


def _merge(base: Mapping[str, Any], update: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow merge that also merges nested limit mappings key by key."""
    result = dict(base)
    for key, value in update.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = {**current, **value}
        else:
            result[key] = value
    return result


def _resolve_flags(override: Mapping[str, Any]) -> frozenset[Flag]:
    enabled = set()
    for flag in Flag:
        value = override.get(flag.value, False)
        if not isinstance(value, bool):
            raise ConfigurationError(
                f"'{flag.value}' must be a boolean, got {value!r}"
            )
        if value:
            enabled.add(flag)
    return frozenset(enabled)


def _resolve_limit(index: FieldIndex, field_override: Any) -> Limit:
    default = DEFAULT_LIMITS[index]
    if field_override is None:
        return default
    if not isinstance(field_override, Mapping):
        raise ConfigurationError(
            f"'{index.config_key}' must be a mapping of limits, "
            f"got {type(field_override).__name__}"
        )

    lower = _limit_value(index, "lowerLimit", field_override.get("lowerLimit", default.lower))
    upper = _limit_value(index, "upperLimit", field_override.get("upperLimit", default.upper))
    if lower > upper:
        raise ConfigurationError(
            f"'{index.config_key}' lowerLimit {lower} is greater than upperLimit {upper}"
        )
    return Limit(lower, upper)


def _limit_value(index: FieldIndex, key: str, value: Any) -> int:
    # bool is an int subclass, but True is never a meaningful limit
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            f"'{index.config_key}.{key}' must be an integer, got {value!r}"
        )
    return value


# =============================================================================
# Loading
# =============================================================================


CONFIG_SUFFIXES = (".yaml", ".yml", ".json")


def load_configuration(path: str | Path) -> dict[str, Any]:
    """Load a configuration mapping from a YAML or JSON file.

    Args:
        path: Path to the file.

    Returns:
        The configuration mapping (empty for an empty file).

    Raises:
        ConfigurationError: If the suffix is unsupported or the document is
            not a mapping.
    """
    path = Path(path)
    if path.suffix.lower() not in CONFIG_SUFFIXES:
        raise ConfigurationError(
            f"Unsupported configuration format: {path.suffix!r}. "
            f"Expected one of {list(CONFIG_SUFFIXES)}"
        )

    with open(path) as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Configuration file {path} must contain a mapping, "
            f"got {type(config).__name__}"
        )

    logger.debug(f"Loaded configuration from {path}")
    return config

"""Tests for configuration resolution and loading."""

import json

import pytest

from cronguard import (
    DEFAULT_LIMITS,
    ConfigurationError,
    FieldIndex,
    Limit,
    load_configuration,
    resolve_field_specs,
)
from cronguard.capabilities import (
    BLANK_DAY,
    LAST_DAY_OF_MONTH,
    LAST_WEEKDAY_OF_MONTH,
    NEAREST_WEEKDAY,
)


# =============================================================================
# Limit Tests
# =============================================================================


class TestLimit:
    """Tests for Limit."""

    def test_contains_inclusive(self):
        """Test both bounds are included."""
        limit = Limit(1, 31)
        assert limit.contains(1)
        assert limit.contains(31)
        assert not limit.contains(0)
        assert not limit.contains(32)

    def test_defaults(self):
        """Test the built-in limits."""
        assert DEFAULT_LIMITS[FieldIndex.MINUTE] == Limit(0, 59)
        assert DEFAULT_LIMITS[FieldIndex.HOUR] == Limit(0, 23)
        assert DEFAULT_LIMITS[FieldIndex.DAY_OF_MONTH] == Limit(1, 31)
        assert DEFAULT_LIMITS[FieldIndex.MONTH] == Limit(1, 12)
        assert DEFAULT_LIMITS[FieldIndex.DAY_OF_WEEK] == Limit(0, 7)


# =============================================================================
# Resolution Tests
# =============================================================================


class TestResolveFieldSpecs:
    """Tests for resolve_field_specs()."""

    def test_no_configuration(self):
        """Test defaults with no configuration at all."""
        specs = resolve_field_specs()
        assert len(specs) == 5
        assert [s.index for s in specs] == list(FieldIndex)
        for spec in specs:
            assert spec.limit == DEFAULT_LIMITS[spec.index]
            assert spec.aliases is None
            assert spec.extensions == ()

    def test_empty_configuration(self):
        """Test empty mappings behave like no configuration."""
        assert resolve_field_specs({}) == resolve_field_specs()
        assert resolve_field_specs({"override": {}}) == resolve_field_specs()

    def test_limit_override(self):
        """Test a full limit override."""
        specs = resolve_field_specs(
            {"override": {"daysOfWeek": {"lowerLimit": 1, "upperLimit": 7}}}
        )
        assert specs[FieldIndex.DAY_OF_WEEK].limit == Limit(1, 7)
        assert specs[FieldIndex.MINUTE].limit == Limit(0, 59)

    def test_partial_limit_override(self):
        """Test a missing bound falls back to the default."""
        specs = resolve_field_specs({"override": {"hours": {"upperLimit": 12}}})
        assert specs[FieldIndex.HOUR].limit == Limit(0, 12)

    def test_unknown_keys_ignored(self):
        """Test unknown keys never cause errors."""
        specs = resolve_field_specs(
            {
                "somethingElse": 1,
                "override": {
                    "seconds": {"lowerLimit": 0, "upperLimit": 59},
                    "useSeconds": True,
                    "hours": {"lowerLimit": 0, "upperLimit": 23, "step": "x"},
                },
            }
        )
        assert specs == resolve_field_specs()

    def test_aliases_only_for_month_and_weekday(self):
        """Test alias tables attach only to fields with names."""
        specs = resolve_field_specs({"override": {"useAliases": True}})
        assert specs[FieldIndex.MINUTE].aliases is None
        assert specs[FieldIndex.HOUR].aliases is None
        assert specs[FieldIndex.DAY_OF_MONTH].aliases is None
        assert specs[FieldIndex.MONTH].aliases["jan"] == 1
        assert specs[FieldIndex.MONTH].aliases["dec"] == 12
        assert list(specs[FieldIndex.DAY_OF_WEEK].aliases) == [
            "sun", "mon", "tue", "wed", "thu", "fri", "sat",
        ]

    def test_alias_tables_are_read_only(self):
        """Test resolved alias tables cannot be modified."""
        spec = resolve_field_specs({"override": {"useAliases": True}})[FieldIndex.MONTH]
        with pytest.raises(TypeError):
            spec.aliases["foo"] = 13

    def test_known_aliases_without_flag(self):
        """Test known aliases are tracked even when aliasing is off."""
        spec = resolve_field_specs()[FieldIndex.MONTH]
        assert spec.aliases is None
        assert spec.resolve_alias("jan") is None
        assert spec.is_known_alias("JAN")

    def test_resolve_alias_case_insensitive(self):
        """Test alias lookup ignores case."""
        spec = resolve_field_specs({"override": {"useAliases": True}})[FieldIndex.MONTH]
        assert spec.resolve_alias("FeB") == 2
        assert spec.resolve_alias("february") is None

    def test_extensions_at_their_fields(self):
        """Test extensions attach only to the fields they belong to."""
        specs = resolve_field_specs(
            {"override": {"useLastDayOfMonth": True, "useBlankDay": True}}
        )
        assert specs[FieldIndex.DAY_OF_MONTH].extensions == (LAST_DAY_OF_MONTH, BLANK_DAY)
        assert specs[FieldIndex.DAY_OF_WEEK].extensions == (BLANK_DAY,)
        assert specs[FieldIndex.MINUTE].extensions == ()

    def test_compound_extension_needs_both_flags(self):
        """Test LW requires last day of month and nearest weekday."""
        one = resolve_field_specs({"override": {"useNearestWeekday": True}})
        assert LAST_WEEKDAY_OF_MONTH not in one[FieldIndex.DAY_OF_MONTH].extensions

        both = resolve_field_specs(
            {"override": {"useNearestWeekday": True, "useLastDayOfMonth": True}}
        )
        assert both[FieldIndex.DAY_OF_MONTH].extensions == (
            LAST_DAY_OF_MONTH,
            NEAREST_WEEKDAY,
            LAST_WEEKDAY_OF_MONTH,
        )

    def test_false_flags(self):
        """Test explicitly disabled flags."""
        specs = resolve_field_specs({"override": {"useLastDayOfMonth": False}})
        assert specs[FieldIndex.DAY_OF_MONTH].extensions == ()

    def test_preset_then_override(self):
        """Test the override refines the preset key by key."""
        specs = resolve_field_specs(
            {
                "preset": "aws-cloudwatch",
                "override": {"daysOfWeek": {"upperLimit": 6}, "useAliases": False},
            }
        )
        assert specs[FieldIndex.DAY_OF_WEEK].limit == Limit(1, 6)
        assert specs[FieldIndex.DAY_OF_WEEK].aliases is None
        assert specs[FieldIndex.DAY_OF_MONTH].extensions

    def test_specs_are_frozen(self):
        """Test resolved specs are immutable."""
        spec = resolve_field_specs()[FieldIndex.MINUTE]
        with pytest.raises(AttributeError):
            spec.limit = Limit(0, 1)


class TestConfigurationErrors:
    """Tests for misconfiguration detection."""

    @pytest.mark.parametrize(
        "configuration",
        [
            "useAliases",
            ["override"],
            {"override": "useAliases"},
            {"override": {"minutes": [0, 59]}},
            {"override": {"minutes": {"lowerLimit": "0"}}},
            {"override": {"minutes": {"upperLimit": 59.5}}},
            {"override": {"minutes": {"upperLimit": True}}},
            {"override": {"minutes": {"lowerLimit": 30, "upperLimit": 10}}},
            {"override": {"useAliases": "yes"}},
            {"override": {"useLastDayOfMonth": 1}},
            {"preset": "quartz"},
            {"preset": 3},
        ],
    )
    def test_raises(self, configuration):
        """Test programming errors are reported at resolution time."""
        with pytest.raises(ConfigurationError):
            resolve_field_specs(configuration)

    def test_message_names_key(self):
        """Test the message points at the offending key."""
        with pytest.raises(ConfigurationError) as exc:
            resolve_field_specs({"override": {"hours": {"upperLimit": "x"}}})
        assert "hours.upperLimit" in str(exc.value)


# =============================================================================
# Loading Tests
# =============================================================================


class TestLoadConfiguration:
    """Tests for load_configuration()."""

    def test_load_yaml(self, tmp_path):
        """Test loading a YAML configuration."""
        path = tmp_path / "cron.yaml"
        path.write_text(
            "preset: default\n"
            "override:\n"
            "  useLastDayOfMonth: true\n"
            "  daysOfMonth:\n"
            "    lowerLimit: 1\n"
            "    upperLimit: 28\n"
        )
        config = load_configuration(path)
        assert config == {
            "preset": "default",
            "override": {
                "useLastDayOfMonth": True,
                "daysOfMonth": {"lowerLimit": 1, "upperLimit": 28},
            },
        }
        specs = resolve_field_specs(config)
        assert specs[FieldIndex.DAY_OF_MONTH].limit == Limit(1, 28)
        assert specs[FieldIndex.DAY_OF_MONTH].extensions == (LAST_DAY_OF_MONTH,)

    def test_load_json(self, tmp_path):
        """Test loading a JSON configuration."""
        path = tmp_path / "cron.json"
        path.write_text(json.dumps({"override": {"useAliases": True}}))
        assert load_configuration(str(path)) == {"override": {"useAliases": True}}

    def test_empty_file(self, tmp_path):
        """Test an empty file is an empty configuration."""
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_configuration(path) == {}

    def test_non_mapping_document(self, tmp_path):
        """Test a list document is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- useAliases\n")
        with pytest.raises(ConfigurationError):
            load_configuration(path)

    def test_unsupported_suffix(self, tmp_path):
        """Test unknown file formats are rejected."""
        path = tmp_path / "cron.ini"
        path.write_text("[override]\n")
        with pytest.raises(ConfigurationError):
            load_configuration(path)

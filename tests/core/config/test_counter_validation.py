"""
Tests for counter configuration validation.
"""

import pytest

from countcraft.core.config.validation import ValidationErrorKind, validate_counter_config
from countcraft.core.counters.models import CounterConfig, CounterType


def _config(prop, counter_type=CounterType.WORD_COUNT, parameter=None, **kwargs):
    return CounterConfig(type=counter_type, property=prop, parameter=parameter, **kwargs)


class TestValidateCounterConfig:
    """Tests for validate_counter_config."""

    def test_valid_config(self):
        assert validate_counter_config(_config("words"), []) is None

    @pytest.mark.parametrize("prop", ["", "   "])
    def test_property_required(self, prop):
        error = validate_counter_config(CounterConfig(property=prop), [])
        assert error.kind is ValidationErrorKind.PROPERTY_NAME_REQUIRED
        assert error.field == "property"
        assert error.message == "Property name is required"

    def test_duplicate_property(self):
        existing = [_config("words")]
        error = validate_counter_config(_config(" words ", CounterType.LINE_COUNT), existing)
        assert error.kind is ValidationErrorKind.DUPLICATE_PROPERTY
        assert error.property_name == "words"
        assert error.message == 'Property name "words" is already used by another calculation'

    def test_property_names_are_case_sensitive(self):
        assert validate_counter_config(_config("Words"), [_config("words")]) is None

    def test_editing_itself_is_not_a_duplicate(self):
        original = _config("words")
        edited = original.with_changes(name="Renamed")
        assert validate_counter_config(edited, [original]) is None

    def test_type_required(self):
        error = validate_counter_config(CounterConfig(property="words"), [])
        assert error.kind is ValidationErrorKind.TYPE_REQUIRED
        assert error.field == "type"

    @pytest.mark.parametrize("parameter", [0, 7, "9", 2.5, "abc"])
    def test_heading_level_out_of_range(self, parameter):
        config = _config("h", CounterType.HEADING_LEVEL_COUNT, parameter)
        error = validate_counter_config(config, [])
        assert error.kind is ValidationErrorKind.PARAMETER_OUT_OF_RANGE
        assert error.message == "Heading level must be between 1 and 6"

    @pytest.mark.parametrize("parameter", [1, "6", 3.0, None])
    def test_heading_level_accepted(self, parameter):
        config = _config("h", CounterType.HEADING_LEVEL_COUNT, parameter)
        assert validate_counter_config(config, []) is None

    def test_first_failure_wins(self):
        # Empty property beats the missing type
        error = validate_counter_config(CounterConfig(property=""), [_config("x")])
        assert error.kind is ValidationErrorKind.PROPERTY_NAME_REQUIRED

        # Duplicate beats the missing type
        error = validate_counter_config(CounterConfig(property="x"), [_config("x")])
        assert error.kind is ValidationErrorKind.DUPLICATE_PROPERTY

    def test_parameter_ignored_for_other_types(self):
        assert validate_counter_config(_config("words", parameter=99), []) is None

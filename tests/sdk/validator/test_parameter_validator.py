"""Tests for single parameter validation."""

import pytest

from apidef.sdk.validator import (
    MISSING,
    OMITTED,
    DefinitionError,
    IncorrectParameterError,
    MissingParameterError,
    ParameterSpecModel,
    ParameterValidator,
    format_restrictions,
)


class TestParameterSpec:
    def test_has_default_tracks_presence(self):
        assert not ParameterSpecModel(type="String").has_default
        assert ParameterSpecModel(type="String", default="x").has_default
        assert ParameterSpecModel(type="NullableString", default=None).has_default

    def test_comment_is_accepted_as_description(self):
        spec = ParameterSpecModel.model_validate({"type": "String", "comment": "Name"})
        assert spec.description == "Name"

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValueError):
            ParameterSpecModel.model_validate({"type": "String", "requried": True})


class TestParamChecker:
    """Pipeline behaviour of a single parameter check."""

    def test_simple_checks(self, validator, specs):
        check = validator.check_param
        assert check("st1", "1", specs["stringP1"]) == "1"
        assert check("nu1", "1", specs["numP"]) == 1
        assert check("en1", "A", specs["enumP"]) == "A"
        assert check("json", '{ "a": 1 }', specs["jsonP"]) == '{ "a": 1 }'

    def test_explicit_format_runs_formatter(self, validator, specs):
        trimmed = specs["stringP3"].model_copy(update={"format": True})
        decoded = specs["jsonP"].model_copy(update={"format": True})

        assert validator.check_param("st2", " 1 ", trimmed) == "1"
        assert validator.check_param("json", '{ "a": 1 }', decoded) == {"a": 1}

    def test_enum_member_returned_unconverted(self, validator, specs):
        result = validator.check_param("en1", 1, specs["enumP"])
        assert result == 1
        assert type(result) is int

    def test_enum_rejection_lists_allowed_values(self, validator, specs):
        with pytest.raises(
            IncorrectParameterError,
            match="^incorrect parameter 'en2' should be valid ENUM with additional restrictions: A,B,1$",
        ):
            validator.check_param("en2", "C", specs["enumP"])

    def test_incorrect_parameter_without_restrictions(self, validator):
        spec = ParameterSpecModel(type="Integer", required=True)
        with pytest.raises(IncorrectParameterError) as exc_info:
            validator.check_param("age", "abc", spec)

        assert str(exc_info.value) == "incorrect parameter 'age' should be valid Integer"
        assert exc_info.value.kind == "incorrect_parameter"
        assert exc_info.value.type_name == "Integer"

    def test_missing_required(self, validator, specs):
        with pytest.raises(MissingParameterError) as exc_info:
            validator.check_param("numP", MISSING, specs["numP"])
        assert str(exc_info.value) == "missing required parameter 'numP' is required!"
        assert exc_info.value.kind == "missing_parameter"

    def test_missing_optional_is_omitted(self, validator, specs):
        assert validator.check_param("intP", MISSING, specs["intP"]) is OMITTED

    def test_none_is_a_present_value(self, validator, specs):
        with pytest.raises(IncorrectParameterError):
            validator.check_param("numP", None, specs["numP"])

    def test_default_bypasses_pipeline(self, validator):
        spec = ParameterSpecModel(type="TrimString", default="  padded  ", format=True)
        assert validator.check_param("s", MISSING, spec) == "  padded  "

        invalid = ParameterSpecModel(type="Integer", default="not a number")
        assert validator.check_param("i", MISSING, invalid) == "not a number"

    def test_none_default(self, validator):
        spec = ParameterSpecModel(type="NullableString", required=True, default=None)
        assert validator.check_param("s", MISSING, spec) is None

    def test_format_false_overrides_default_format(self, registry):
        registry.register(
            "Upper",
            lambda v, params=None: isinstance(v, str),
            formatter=str.upper,
            is_default_format=True,
        )
        validator = ParameterValidator(registry)

        assert validator.validate("u", "abc", ParameterSpecModel(type="Upper")) == "ABC"
        assert validator.validate("u", "abc", ParameterSpecModel(type="Upper", format=False)) == "abc"

    def test_parser_feeds_checker_and_formatter(self, registry):
        seen = []

        def checker(value, params=None):
            seen.append((value, params))
            return value.isdigit()

        registry.register(
            "Phone",
            checker,
            parser=lambda v: v.replace("-", ""),
            formatter=lambda v: f"+{v}",
        )
        spec = ParameterSpecModel(type="Phone", params={"country": 1}, format=True)

        assert ParameterValidator(registry).validate("phone", "555-0100", spec) == "+5550100"
        assert seen == [("5550100", {"country": 1})]

    def test_idempotent_for_formatter_free_types(self, validator, specs):
        first = validator.check_param("nu1", "12", specs["numP"])
        assert validator.check_param("nu1", first, specs["numP"]) == first

    def test_unknown_type(self, validator):
        with pytest.raises(DefinitionError, match="Unknown type 'Nope'"):
            validator.check_param("x", 1, ParameterSpecModel(type="Nope"))


class TestFormatRestrictions:
    def test_list(self):
        assert format_restrictions(["A", "B", 1]) == "A,B,1"

    def test_mapping_keeps_order(self):
        assert format_restrictions({"max": 3, "min": 1}) == "max=3,min=1"

    def test_scalar(self):
        assert format_restrictions(5) == "5"

"""Tests for type-guard adapters and the bundled validators."""

from dataclasses import dataclass
from typing import Any

import pytest
from pydantic import BaseModel

from lexgen.exceptions import ConfigurationError, ValidationFailure
from lexgen.guards import (
    JsonSchemaValidator,
    PydanticValidator,
    SafeParseResult,
    Validator,
    assure,
    is_valid,
)


@dataclass
class _Result:
    success: bool


class PositiveIntValidator:
    """Hand-written validator that tracks how it is called."""

    def __init__(self):
        self.parse_calls = 0
        self.safe_parse_calls = 0

    def parse(self, value: Any) -> int:
        self.parse_calls += 1
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            return value
        raise ValidationFailure(f"{value!r} is not a positive int")

    def safe_parse(self, value: Any) -> _Result:
        self.safe_parse_calls += 1
        try:
            self.parse(value)
        except ValidationFailure:
            return _Result(success=False)
        return _Result(success=True)


class CoercingValidator:
    """Validator whose parse returns something other than its input."""

    def parse(self, value: Any) -> str:
        return str(value).upper()

    def safe_parse(self, value: Any) -> _Result:
        return _Result(success=True)


class Thing(BaseModel):
    name: str
    size: int = 0


THING_SCHEMA = {
    "type": "object",
    "required": ["name"],
    "properties": {"name": {"type": "string"}, "size": {"type": "integer"}},
}


class TestIsValid:
    """Test is_valid."""

    @pytest.mark.parametrize("value", [1, 42, 0, -1, "1", None, True, [1]])
    def test_matches_safe_parse(self, value):
        validator = PositiveIntValidator()
        assert is_valid(value, validator) == validator.safe_parse(value).success

    def test_does_not_call_parse_directly(self):
        validator = CoercingValidator()
        assert is_valid("anything", validator) is True

    def test_never_raises_on_failure(self):
        assert is_valid("nope", PositiveIntValidator()) is False

    def test_no_side_effects_beyond_safe_parse(self):
        validator = PositiveIntValidator()
        is_valid(3, validator)
        assert validator.safe_parse_calls == 1


class TestAssure:
    """Test assure."""

    def test_returns_parsed_value(self):
        assert assure(PositiveIntValidator())(7) == 7

    def test_returns_what_parse_returns(self):
        assert assure(CoercingValidator())("abc") == "ABC"

    def test_propagates_failure(self):
        check = assure(PositiveIntValidator())
        with pytest.raises(ValidationFailure, match="not a positive int"):
            check(-5)

    def test_parse_called_per_value_not_at_creation(self):
        validator = PositiveIntValidator()
        check = assure(validator)
        assert validator.parse_calls == 0
        check(1)
        check(2)
        assert validator.parse_calls == 2


class TestJsonSchemaValidator:
    """Test JsonSchemaValidator."""

    def test_parse_returns_value(self):
        value = {"name": "widget", "size": 3}
        assert JsonSchemaValidator(THING_SCHEMA).parse(value) is value

    def test_parse_failure(self):
        with pytest.raises(ValidationFailure, match="'name' is a required property") as exc_info:
            JsonSchemaValidator(THING_SCHEMA).parse({"size": 3})
        assert exc_info.value.context["validator"] == "required"

    def test_parse_failure_path(self):
        with pytest.raises(ValidationFailure) as exc_info:
            JsonSchemaValidator(THING_SCHEMA).parse({"name": "w", "size": "big"})
        assert exc_info.value.context["path"] == ["size"]

    def test_safe_parse(self):
        validator = JsonSchemaValidator(THING_SCHEMA)
        ok = validator.safe_parse({"name": "w"})
        bad = validator.safe_parse([])
        assert ok == SafeParseResult(success=True, value={"name": "w"})
        assert bad.success is False
        assert isinstance(bad.error, ValidationFailure)

    def test_invalid_schema(self):
        with pytest.raises(ConfigurationError, match="Invalid JSON Schema"):
            JsonSchemaValidator({"type": "not-a-type"})

    def test_works_with_guards(self):
        validator = JsonSchemaValidator(THING_SCHEMA)
        assert is_valid({"name": "w"}, validator) is True
        assert is_valid({}, validator) is False
        assert assure(validator)({"name": "w"}) == {"name": "w"}

    def test_satisfies_protocol(self):
        assert isinstance(JsonSchemaValidator(THING_SCHEMA), Validator)


class TestPydanticValidator:
    """Test PydanticValidator."""

    def test_parse_builds_model(self):
        thing = PydanticValidator(Thing).parse({"name": "widget", "size": "3"})
        assert thing == Thing(name="widget", size=3)

    def test_parse_failure_lists_errors(self):
        with pytest.raises(ValidationFailure) as exc_info:
            PydanticValidator(Thing).parse({"size": "big"})
        errors = exc_info.value.context["errors"]
        assert {tuple(e["loc"]) for e in errors} == {("name",), ("size",)}

    def test_generic_types(self):
        validator = PydanticValidator(list[int])
        assert validator.parse(["1", 2]) == [1, 2]
        assert is_valid(["x"], validator) is False

    def test_safe_parse(self):
        result = PydanticValidator(Thing).safe_parse({"name": "w"})
        assert result.success is True
        assert result.value == Thing(name="w")

    def test_satisfies_protocol(self):
        assert isinstance(PydanticValidator(Thing), Validator)

"""Tests for default value coercion."""

import logging
from dataclasses import dataclass
from decimal import Decimal

import pytest
from graphql.pyutils import Undefined

from gql_bootstrap.core import (
    Array,
    ClassRegistry,
    DefaultValueCoercer,
    Field,
    Reference,
    ReferenceType,
    class_name_of,
)
from gql_bootstrap.core.defaults import looks_structured

from support import Color


@dataclass
class Dimensions:
    width: int
    height: int


class RejectingDecoder:
    """Decoder that never accepts a literal."""

    def __init__(self):
        self.calls = 0

    def decode(self, text, target):
        self.calls += 1
        raise ValueError("not structured")


@pytest.fixture
def registry():
    return ClassRegistry().register(Dimensions).register(Color)


@pytest.fixture
def coercer(registry):
    return DefaultValueCoercer(registry)


def field(default, name="String", class_name="builtins.str", kind=ReferenceType.SCALAR, **kwargs):
    return Field("value", Reference(name, class_name, kind), default_value=default, **kwargs)


class TestNoDefault:
    """Absent defaults."""

    def test_none(self, coercer):
        assert coercer.coerce(field(None)) is Undefined

    def test_empty_string(self, coercer):
        assert coercer.coerce(field("")) is Undefined


class TestStructuredDefaults:
    """Literals containing '{' or '['."""

    def test_input_object_stays_plain_data(self, coercer):
        literal = '{"width": 2, "height": 3}'
        result = coercer.coerce(
            field(literal, "Dimensions", class_name_of(Dimensions), ReferenceType.INPUT)
        )
        assert result == {"width": 2, "height": 3}

    def test_input_object_list(self, coercer):
        literal = '[{"width": 1, "height": 1}]'
        result = coercer.coerce(
            field(literal, "Dimensions", class_name_of(Dimensions), ReferenceType.INPUT, array=Array())
        )
        assert result == [{"width": 1, "height": 1}]

    def test_output_type_target_decodes_to_instance(self, coercer):
        literal = '{"width": 2, "height": 3}'
        result = coercer.coerce(
            field(literal, "Dimensions", class_name_of(Dimensions), ReferenceType.TYPE)
        )
        assert result == Dimensions(width=2, height=3)

    def test_list(self, coercer):
        result = coercer.coerce(field("[1, 2, 3]", "Int", "builtins.int", array=Array()))
        assert result == [1, 2, 3]

    def test_set_collection(self, coercer):
        result = coercer.coerce(
            field("[1, 2, 2]", "Int", "builtins.int", array=Array(class_name="typing.Set"))
        )
        assert result == {1, 2}

    def test_unknown_class_decodes_to_plain_data(self, coercer):
        result = coercer.coerce(
            field('{"a": 1}', "Thing", "nowhere.Thing", ReferenceType.INPUT)
        )
        assert result == {"a": 1}

    def test_invalid_json_falls_through_to_literal(self, coercer):
        assert coercer.coerce(field("{not json")) == "{not json"

    def test_decoder_failure_falls_through_to_number(self, registry):
        decoder = RejectingDecoder()
        coercer = DefaultValueCoercer(registry, decoder)
        result = coercer.coerce(field("[1]", "Int", "builtins.int"))
        assert decoder.calls == 1
        # "[1]" is not a number either, so the literal comes back
        assert result == "[1]"

    def test_decoder_failure_is_logged_at_debug(self, registry, caplog):
        coercer = DefaultValueCoercer(registry, RejectingDecoder())
        with caplog.at_level(logging.DEBUG, logger="gql_bootstrap.core.defaults"):
            coercer.coerce(field("{x}"))
        assert "not structured" in caplog.text

    def test_looks_structured(self):
        assert looks_structured("{}")
        assert looks_structured("a[0]")
        assert not looks_structured("plain")


class TestScalarDefaults:
    """Numeric, boolean and plain literals."""

    def test_int_scalar(self, coercer):
        assert coercer.coerce(field("42", "Int", "builtins.int")) == Decimal("42")

    def test_float_scalar(self, coercer):
        assert coercer.coerce(field("4.5", "Float", "builtins.float")) == Decimal("4.5")

    def test_numeric_by_scalar_name(self, coercer):
        # class unknown to the registry, Long is a numeric scalar
        assert coercer.coerce(field("7", "Long", "example.Long")) == Decimal("7")

    def test_numeric_by_class(self, coercer):
        result = coercer.coerce(field("1.25", "Money", "decimal.Decimal"))
        assert result == Decimal("1.25")

    def test_invalid_number_returns_literal(self, coercer):
        assert coercer.coerce(field("lots", "Int", "builtins.int")) == "lots"

    @pytest.mark.parametrize("literal,expected", [
        ("true", True),
        ("TRUE", True),
        ("True", True),
        ("false", False),
        ("yes", False),
    ])
    def test_boolean(self, coercer, literal, expected):
        assert coercer.coerce(field(literal, "Boolean", "builtins.bool")) is expected

    def test_enum_member(self, coercer):
        result = coercer.coerce(field("GREEN", "Color", class_name_of(Color), ReferenceType.ENUM))
        assert result is Color.GREEN

    def test_unknown_enum_member_returns_literal(self, coercer):
        result = coercer.coerce(field("BLUE", "Color", class_name_of(Color), ReferenceType.ENUM))
        assert result == "BLUE"

    def test_string(self, coercer):
        assert coercer.coerce(field("hello")) == "hello"

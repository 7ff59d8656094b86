"""Tests for type-directed value coercion."""

import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest
from pydantic import BaseModel

from minigql.core import (
    Coercer,
    CoercionError,
    ScalarRegistry,
    list_of,
    non_null,
    object_type,
    scalar,
)
from minigql.core.coercion import is_list_like, is_numeric

STRING = scalar("String")
INT = scalar("Int")
FLOAT = scalar("Float")
BOOLEAN = scalar("Boolean")
ID = scalar("ID")


@pytest.fixture
def coercer():
    return Coercer()


class TestStringAndID:
    """Tests for String and ID coercion."""

    @pytest.mark.parametrize("value, expected", [
        ("text", "text"),
        (42, "42"),
        (1.5, "1.5"),
    ])
    def test_string(self, coercer, value, expected):
        assert coercer.coerce(value, STRING) == expected

    def test_id(self, coercer):
        assert coercer.coerce(7, ID) == "7"

    def test_null_passes_through(self, coercer):
        assert coercer.coerce(None, STRING) is None
        assert coercer.coerce(None, ID) is None


class TestInt:
    """Tests for Int coercion."""

    @pytest.mark.parametrize("value, expected", [
        (5, 5),
        (-12, -12),
        ("42", 42),
        ("-3", -3),
        (Decimal("8"), 8),
    ])
    def test_valid(self, coercer, value, expected):
        result = coercer.coerce(value, INT)
        assert result == expected
        assert type(result) is int

    @pytest.mark.parametrize("value", ["1.0", "1abc", 3.0, 2.5, "", " 4", "042", True, [1], "abc"])
    def test_invalid(self, coercer, value):
        with pytest.raises(CoercionError, match="Value is not a valid Int"):
            coercer.coerce(value, INT)

    def test_null_passes_through(self, coercer):
        assert coercer.coerce(None, INT) is None


class TestFloat:
    """Tests for Float coercion."""

    @pytest.mark.parametrize("value, expected", [
        (1.5, 1.5),
        (2, 2.0),
        ("3.25", 3.25),
        ("1e3", 1000.0),
    ])
    def test_valid(self, coercer, value, expected):
        result = coercer.coerce(value, FLOAT)
        assert result == expected
        assert type(result) is float

    @pytest.mark.parametrize("value", ["abc", True, "inf", {"x": 1}])
    def test_invalid(self, coercer, value):
        with pytest.raises(CoercionError, match="Value is not a valid Float"):
            coercer.coerce(value, FLOAT)


class TestBoolean:
    """Pins the lenient Boolean contract, including the fallback cases."""

    @pytest.mark.parametrize("value", [True, "true", "TRUE", " yes ", "on", "1", 1])
    def test_true_forms(self, coercer, value):
        assert coercer.coerce(value, BOOLEAN) is True

    @pytest.mark.parametrize("value", [False, "false", "False", "off", "no", "0", "", 0])
    def test_false_forms(self, coercer, value):
        assert coercer.coerce(value, BOOLEAN) is False

    @pytest.mark.parametrize("value, expected", [
        ("maybe", True),
        (5, True),
        (0.0, False),
        (1.0, True),
        ([], False),
        ([0], True),
    ])
    def test_unrecognised_forms_use_truthiness(self, coercer, value, expected):
        assert coercer.coerce(value, BOOLEAN) is expected

    def test_null_passes_through(self, coercer):
        assert coercer.coerce(None, BOOLEAN) is None


class TestNonNull:
    """Tests for NonNull coercion."""

    def test_value_passes(self, coercer):
        assert coercer.coerce("x", non_null(STRING)) == "x"

    def test_null_fails_with_type_name(self, coercer):
        with pytest.raises(CoercionError, match=re.escape("Cannot return null for non-nullable type Int!.")):
            coercer.coerce(None, non_null(INT))

    def test_non_null_list(self, coercer):
        with pytest.raises(CoercionError, match=re.escape("non-nullable type [String]!.")):
            coercer.coerce(None, non_null(list_of(STRING)))

    def test_falsy_values_are_not_null(self, coercer):
        assert coercer.coerce(0, non_null(INT)) == 0
        assert coercer.coerce(False, non_null(BOOLEAN)) is False
        assert coercer.coerce("", non_null(STRING)) == ""


class TestList:
    """Tests for List coercion."""

    def test_null_list(self, coercer):
        assert coercer.coerce(None, list_of(STRING)) is None

    def test_elements_coerced_in_order(self, coercer):
        assert coercer.coerce([3, 1, 2], list_of(STRING)) == ["3", "1", "2"]

    def test_tuple_and_generator(self, coercer):
        assert coercer.coerce((1, 2), list_of(INT)) == [1, 2]
        assert coercer.coerce((n for n in "ab"), list_of(STRING)) == ["a", "b"]

    def test_single_value_is_wrapped(self, coercer):
        assert coercer.coerce("solo", list_of(STRING)) == ["solo"]
        assert coercer.coerce(4, list_of(INT)) == [4]

    def test_null_elements_in_nullable_list(self, coercer):
        assert coercer.coerce(["a", None], list_of(STRING)) == ["a", None]

    def test_nested_lists(self, coercer):
        assert coercer.coerce([[1], [2, 3]], list_of(list_of(INT))) == [[1], [2, 3]]

    def test_invalid_element_fails(self, coercer):
        with pytest.raises(CoercionError, match="Value is not a valid Int"):
            coercer.coerce([1, "x"], list_of(INT))


class TestObject:
    """Tests for Object coercion."""

    @pytest.fixture
    def point(self):
        return object_type("Point", {"x": INT})

    def test_null(self, coercer, point):
        assert coercer.coerce(None, point) is None

    def test_mapping(self, coercer, point):
        value = {"x": 1}
        result = coercer.coerce(value, point)
        assert result == {"x": 1}
        assert result is not value

    def test_pydantic_model(self, coercer, point):
        class Point(BaseModel):
            x: int

        assert coercer.coerce(Point(x=2), point) == {"x": 2}

    def test_plain_object(self, coercer, point):
        assert coercer.coerce(SimpleNamespace(x=3), point) == {"x": 3}

    def test_slotted_dataclass(self, coercer, point):
        @dataclass(slots=True)
        class Point:
            x: int
            y: int

        assert coercer.coerce(Point(1, 2), point) == {"x": 1, "y": 2}

    def test_slots_class(self, coercer, point):
        class Base:
            __slots__ = ("x",)

        class Point(Base):
            __slots__ = ("y", "z")

            def __init__(self):
                self.x = 1
                self.y = 2

        assert coercer.coerce(Point(), point) == {"x": 1, "y": 2}

    def test_dataclass_fields_only(self, coercer, point):
        @dataclass
        class Point:
            x: int
            label: str = "origin"

        assert coercer.coerce(Point(0), point) == {"x": 0, "label": "origin"}

    @pytest.mark.parametrize("value", ["text", 5, [1, 2], dict])
    def test_non_composite_fails(self, coercer, point, value):
        with pytest.raises(CoercionError, match="Value cannot be coerced to object type Point"):
            coercer.coerce(value, point)


class TestCustomScalars:
    """Tests for scalars outside the built-in set."""

    def test_registered_handler(self, coercer):
        result = coercer.coerce(datetime(2024, 1, 15, 10, 30), scalar("DateTime"))
        assert result == "2024-01-15T10:30:00"

    def test_unknown_scalar(self, coercer):
        with pytest.raises(CoercionError, match="Unknown scalar type: Money"):
            coercer.coerce("1.00", scalar("Money"))

    def test_custom_registry(self):
        class MoneyHandler:
            def serialize(self, value):
                return f"{value:.2f}"

        registry = ScalarRegistry()
        registry.register("Money", MoneyHandler())
        assert Coercer(registry).coerce(Decimal("3.5"), scalar("Money")) == "3.50"

    def test_custom_scalar_null(self, coercer):
        assert coercer.coerce(None, scalar("Money")) is None

    def test_unsupported_kind(self, coercer):
        weird = SimpleNamespace(kind="WEIRD", name="Weird")
        with pytest.raises(CoercionError, match="Unsupported type kind for coercion: WEIRD"):
            coercer.coerce("x", weird)


class TestHelpers:
    """Tests for numeric and list detection."""

    @pytest.mark.parametrize("value, expected", [
        (1, True),
        (1.5, True),
        (Decimal("2"), True),
        ("12", True),
        ("-1.5e3", True),
        (".5", True),
        (True, False),
        ("abc", False),
        ("", False),
        (None, False),
    ])
    def test_is_numeric(self, value, expected):
        assert is_numeric(value) is expected

    @pytest.mark.parametrize("value, expected", [
        ([1], True),
        ((1,), True),
        ({1}, True),
        ("abc", False),
        (b"abc", False),
        ({"a": 1}, False),
        (5, False),
    ])
    def test_is_list_like(self, value, expected):
        assert is_list_like(value) is expected

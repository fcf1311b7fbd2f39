"""Unit tests for converting captured substrings."""

import enum
from decimal import Decimal
from typing import Optional

import pytest

from stepdefiner import MatchedStringRepresentable, can_convert, convert_match, register_converter
from stepdefiner.matching import type_label


class Colour(enum.Enum):
    RED = "red"
    BLUE = 2


class Temperature:
    def __init__(self, degrees: int):
        self.degrees = degrees

    @classmethod
    def from_match(cls, text: str) -> Optional["Temperature"]:
        if not text.endswith("C"):
            return None
        return cls(int(text[:-1]))


class Fraction:
    def __init__(self, top: int, bottom: int):
        self.top = top
        self.bottom = bottom


@pytest.mark.parametrize(
    "text, target, expected",
    [
        ("42", int, 42),
        ("-7", int, -7),
        ("1.5", float, 1.5),
        ("0.10", Decimal, Decimal("0.10")),
        ("anything at all", str, "anything at all"),
        ("True", bool, True),
        ("no", bool, False),
        ("0", bool, False),
    ],
)
def test_builtin_conversions(text, target, expected):
    """Unit test for builtin conversions."""
    assert convert_match(text, target) == expected


@pytest.mark.parametrize(
    "text, target",
    [
        ("forty-two", int),
        ("1.5", int),
        ("", int),
        ("lots", float),
        ("1,50", Decimal),
        ("maybe", bool),
    ],
)
def test_builtin_conversion_failures_return_none(text, target):
    """Unit test for builtin conversion failures return none."""
    assert convert_match(text, target) is None


def test_enum_by_name_or_value():
    """Unit test for enum by name or value."""
    assert convert_match("RED", Colour) is Colour.RED
    assert convert_match("red", Colour) is Colour.RED
    assert convert_match("2", Colour) is Colour.BLUE
    assert convert_match("green", Colour) is None


def test_from_match_types():
    """Unit test for from match types."""
    assert isinstance(Temperature, MatchedStringRepresentable)
    assert convert_match("21C", Temperature).degrees == 21
    assert convert_match("21F", Temperature) is None


def test_register_converter_for_foreign_type():
    """Unit test for register converter for foreign type."""
    assert not can_convert(Fraction)

    @register_converter(Fraction)
    def to_fraction(text):
        top, _, bottom = text.partition("/")
        if not (top.isdigit() and bottom.isdigit()):
            return None
        return Fraction(int(top), int(bottom))

    assert can_convert(Fraction)
    half = convert_match("1/2", Fraction)
    assert (half.top, half.bottom) == (1, 2)
    assert convert_match("half", Fraction) is None


def test_unsupported_type_raises():
    """Unit test for unsupported type raises."""
    class Plain:
        pass

    assert not can_convert(Plain)
    with pytest.raises(TypeError, match="Plain"):
        convert_match("x", Plain)


def test_type_label():
    """Unit test for type label."""
    assert type_label(int) == "int"
    assert type_label(Colour) == "Colour"

"""Conversion of captured substrings into typed step arguments.

A type can be used as a capture target when it either implements
``MatchedStringRepresentable`` (a ``from_match`` classmethod) or has a
converter registered in this module. Converters return ``None`` when the
text does not convert; they do not raise.
"""

from __future__ import annotations

import enum
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Optional, Protocol, Type, TypeVar, runtime_checkable

T = TypeVar("T")

Converter = Callable[[str], Optional[Any]]

# Exact type -> converter. Filled at import time.
_CONVERTERS: Dict[type, Converter] = {}

_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0"})


@runtime_checkable
class MatchedStringRepresentable(Protocol):
    """A type that can build itself from a captured substring."""

    @classmethod
    def from_match(cls, text: str) -> Optional[Any]:
        """Return an instance for ``text`` or ``None`` if it does not parse."""
        ...


def register_converter(target: type) -> Callable[[Converter], Converter]:
    """Decorator registering ``func`` as the converter for ``target``.

    Use it for types you cannot add ``from_match`` to. A later registration
    for the same type replaces the earlier one.
    """

    def _wrap(func: Converter) -> Converter:
        _CONVERTERS[target] = func
        return func

    return _wrap


@register_converter(str)
def _convert_str(text: str) -> Optional[str]:
    return text


@register_converter(int)
def _convert_int(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


@register_converter(float)
def _convert_float(text: str) -> Optional[float]:
    try:
        return float(text)
    except ValueError:
        return None


@register_converter(Decimal)
def _convert_decimal(text: str) -> Optional[Decimal]:
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


@register_converter(bool)
def _convert_bool(text: str) -> Optional[bool]:
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return None


def _convert_enum(target: Type[enum.Enum], text: str) -> Optional[enum.Enum]:
    member = target.__members__.get(text)
    if member is not None:
        return member
    for member in target:
        if str(member.value) == text:
            return member
    return None


def _has_from_match(target: Any) -> bool:
    return callable(getattr(target, "from_match", None))


def can_convert(target: Any) -> bool:
    """Whether ``convert_match`` knows how to produce ``target`` values."""
    if _has_from_match(target) or target in _CONVERTERS:
        return True
    return isinstance(target, type) and issubclass(target, enum.Enum)


def convert_match(text: str, target: Type[T]) -> Optional[T]:
    """Convert a captured substring to ``target``.

    Returns ``None`` when the text does not represent a ``target`` value.

    Raises
    ------
    TypeError
        If ``target`` has no conversion capability at all.
    """
    if _has_from_match(target):
        return target.from_match(text)  # type: ignore[attr-defined]
    converter = _CONVERTERS.get(target)
    if converter is not None:
        return converter(text)
    if isinstance(target, type) and issubclass(target, enum.Enum):
        return _convert_enum(target, text)  # type: ignore[return-value]
    raise TypeError(
        f"No conversion from a matched string to {type_label(target)}. "
        "Implement from_match() or use register_converter()."
    )


def type_label(target: Any) -> str:
    """Human readable name of a capture target, for failure messages."""
    return getattr(target, "__qualname__", None) or repr(target)

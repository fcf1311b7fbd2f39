"""Failures reported while registering or dispatching steps.

None of these are raised by the step definers themselves. They are handed
to the host through ``record_failure`` and the host decides when the test
learns about them. They subclass ``AssertionError`` so a host that does
raise them gets an ordinary test failure.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from .host import StepLocation


class StepFailure(AssertionError):
    """Base class for every reported step problem."""

    def __init__(
        self,
        message: str,
        expression: str,
        location: Optional[StepLocation] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.expression = expression
        self.location = location or StepLocation.unknown()

    def __str__(self) -> str:
        if self.location.is_known:
            return f"{self.message} ({self.location})"
        return self.message


class ConversionFailure(StepFailure):
    """A captured substring could not be converted to the requested type."""

    def __init__(
        self,
        message: str,
        expression: str,
        match: str,
        target: Any,
        location: Optional[StepLocation] = None,
    ) -> None:
        super().__init__(message, expression, location)
        self.match = match
        self.target = target


class ArityMismatch(StepFailure):
    """Fewer substrings were captured than the step callback needs."""

    def __init__(
        self,
        message: str,
        expression: str,
        expected: int,
        found: int,
        location: Optional[StepLocation] = None,
    ) -> None:
        super().__init__(message, expression, location)
        self.expected = expected
        self.found = found


class StepNotFound(StepFailure):
    """No registered step matches the performed text."""


class AmbiguousStep(StepFailure):
    """More than one registered step matches the performed text."""

    def __init__(
        self,
        message: str,
        expression: str,
        candidates: Sequence[Any],
        location: Optional[StepLocation] = None,
    ) -> None:
        super().__init__(message, expression, location)
        self.candidates = tuple(candidates)


class InvalidStepExpression(StepFailure):
    """A step pattern is not a valid regular expression."""


class DuplicateStep(StepFailure):
    """The same pattern was registered more than once."""

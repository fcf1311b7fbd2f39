"""Base class for grouping step definitions.

Subclasses override :meth:`StepDefiner.define_steps` and register their
steps there::

    class CukeSteps(StepDefiner):

        def define_steps(self):
            self.step("I am hungry", self.get_hungry)

            @self.step_value(r"I have (\\d+) cukes in my belly", int)
            def cukes(count):
                self.belly = count

            self.step_pair(r"I eat (\\d+) (\\w+)", int, str, self.eat)

Every variant forwards the pattern unchanged to the host. Captured
substrings that cannot be converted, or that are missing, are reported to
the host and the callback is skipped for that step only.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, List, Optional, Sequence

from .failures import ArityMismatch, ConversionFailure, StepFailure
from .host import StepHandler, StepHost, StepLocation
from .matching import can_convert, convert_match, type_label

logger = logging.getLogger(__name__)

_MISSING = object()


def location_of(func: Callable[..., Any]) -> StepLocation:
    """File and first line of the code behind ``func``, if it has any."""
    code = getattr(inspect.unwrap(func), "__code__", None)
    if code is None:
        return StepLocation.unknown()
    return StepLocation(code.co_filename, code.co_firstlineno)


class StepDefiner:
    """Declares step definitions against a :class:`StepHost`.

    ``test`` is the host the steps are registered with, normally a fresh
    ``StepRegistry`` for the running test.
    """

    # Set to True on intermediate base classes that discovery should skip.
    abstract = False

    def __init__(self, test: StepHost) -> None:
        self.test = test

    def define_steps(self) -> None:
        """Override this to register your own step definitions."""

    # Registration variants ---------------------------------------------

    def step(
        self,
        expression: str,
        func: Optional[Callable[[], Any]] = None,
        *,
        location: Optional[StepLocation] = None,
    ) -> Any:
        """Register a step whose callback takes no arguments.

        Captured substrings, if the pattern has groups, are ignored.
        """

        def build(f: Callable[[], Any], where: StepLocation) -> StepHandler:
            def handler(matches: Sequence[str]) -> None:
                f()

            return handler

        return self._register(expression, func, location, build)

    def step_values(
        self,
        expression: str,
        target: type,
        func: Optional[Callable[[List[Any]], Any]] = None,
        *,
        location: Optional[StepLocation] = None,
    ) -> Any:
        """Register a step receiving every capture converted to ``target``.

        The callback gets a list in capture order. If any capture fails to
        convert the callback is not called.
        """
        self._require_convertible(target)

        def build(f: Callable[[List[Any]], Any], where: StepLocation) -> StepHandler:
            def handler(matches: Sequence[str]) -> None:
                converted = []
                for match in matches:
                    value = convert_match(match, target)
                    if value is None:
                        self._fail(
                            ConversionFailure(
                                f'Failed to convert "{match}" to {type_label(target)} in "{expression}"',
                                expression,
                                match,
                                target,
                                where,
                            )
                        )
                        return
                    converted.append(value)
                f(converted)

            return handler

        return self._register(expression, func, location, build)

    def step_value(
        self,
        expression: str,
        target: type,
        func: Optional[Callable[[Any], Any]] = None,
        *,
        location: Optional[StepLocation] = None,
    ) -> Any:
        """Register a step receiving only the first capture."""
        self._require_convertible(target)

        def build(f: Callable[[Any], Any], where: StepLocation) -> StepHandler:
            def handler(matches: Sequence[str]) -> None:
                if not matches:
                    self._fail(
                        ArityMismatch(
                            f'Expected single match not found in "{expression}"',
                            expression,
                            1,
                            0,
                            where,
                        )
                    )
                    return
                value = self._convert(matches[0], target, expression, where)
                if value is _MISSING:
                    return
                f(value)

            return handler

        return self._register(expression, func, location, build)

    def step_pair(
        self,
        expression: str,
        first: type,
        second: type,
        func: Optional[Callable[[Any, Any], Any]] = None,
        *,
        location: Optional[StepLocation] = None,
    ) -> Any:
        """Register a step receiving the first two captures.

        Each capture is converted to its own type; further captures are
        ignored.
        """
        self._require_convertible(first)
        self._require_convertible(second)

        def build(f: Callable[[Any, Any], Any], where: StepLocation) -> StepHandler:
            def handler(matches: Sequence[str]) -> None:
                if len(matches) < 2:
                    self._fail(
                        ArityMismatch(
                            f'Expected at least 2 matches, found {len(matches)} instead, from "{expression}"',
                            expression,
                            2,
                            len(matches),
                            where,
                        )
                    )
                    return
                value1 = self._convert(matches[0], first, expression, where)
                if value1 is _MISSING:
                    return
                value2 = self._convert(matches[1], second, expression, where)
                if value2 is _MISSING:
                    return
                f(value1, value2)

            return handler

        return self._register(expression, func, location, build)

    def perform_step(self, expression: str) -> None:
        """Run another step, found by matching ``expression`` in the host."""
        logger.debug("Performing step %r", expression)
        self.test.perform_step(expression)

    # Internals ----------------------------------------------------------

    def _register(
        self,
        expression: str,
        func: Optional[Callable[..., Any]],
        location: Optional[StepLocation],
        build: Callable[[Any, StepLocation], StepHandler],
    ) -> Any:
        if func is None:

            def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
                self._register(expression, f, location, build)
                return f

            return decorator

        if not callable(func):
            raise TypeError(f"Step callback for {expression!r} is not callable: {func!r}")
        where = location or location_of(func)
        self.test.add_step(expression, where, build(func, where))
        logger.debug("Defined step %r at %s", expression, where)
        return func

    def _convert(self, match: str, target: type, expression: str, where: StepLocation) -> Any:
        value = convert_match(match, target)
        if value is None:
            self._fail(
                ConversionFailure(
                    f'Could not convert "{match}" to {type_label(target)}, from "{expression}"',
                    expression,
                    match,
                    target,
                    where,
                )
            )
            return _MISSING
        return value

    def _fail(self, failure: StepFailure) -> None:
        logger.warning("Step failed: %s", failure)
        self.test.record_failure(failure)

    @staticmethod
    def _require_convertible(target: Any) -> None:
        if not can_convert(target):
            raise TypeError(
                f"Cannot use {type_label(target)} as a step argument type; "
                "implement from_match() or use register_converter()."
            )

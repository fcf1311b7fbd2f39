"""In-memory step host.

``StepRegistry`` keeps the step definitions of one test, matches performed
step text against them and collects the failures reported along the way.
It never raises those failures; test runner integrations drain them with
:meth:`StepRegistry.take_failures` and fail the test their own way.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Sequence, Tuple, Type, TypeVar

from .definer import StepDefiner
from .failures import AmbiguousStep, DuplicateStep, InvalidStepExpression, StepFailure, StepNotFound
from .host import StepHandler, StepLocation

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=StepDefiner)

DEFAULT_KEYWORDS: Tuple[str, ...] = ("Given", "When", "Then", "And", "But", "*")


@dataclass
class RegistryConfig:
    """Matching options for a :class:`StepRegistry`.

    Attributes
    ----------
    ignore_case: Compile step patterns case-insensitively.
    strip_keywords: Drop one leading Gherkin keyword from performed text.
        Keywords are matched case-insensitively only when ``ignore_case`` is set.
    keywords: The keywords recognised by ``strip_keywords``.
    """

    ignore_case: bool = False
    strip_keywords: bool = True
    keywords: Tuple[str, ...] = DEFAULT_KEYWORDS

    def keyword_prefix(self) -> Optional[Pattern[str]]:
        if not self.strip_keywords or not self.keywords:
            return None
        alternatives = "|".join(re.escape(k) for k in self.keywords)
        flags = re.IGNORECASE if self.ignore_case else 0
        return re.compile(rf"^\s*(?:{alternatives})\s+", flags)


@dataclass
class StepDefinition:
    """A registered pattern with its handler and where it was written."""

    expression: str
    location: StepLocation
    handler: StepHandler = field(repr=False)
    regex: Pattern[str] = field(repr=False)

    def match(self, text: str) -> Optional[List[str]]:
        """Captured groups when ``text`` matches entirely, else ``None``."""
        found = self.regex.fullmatch(text)
        if found is None:
            return None
        return [group if group is not None else "" for group in found.groups()]


class StepRegistry:
    """Step host holding the definitions and failures of a single test."""

    def __init__(self, config: Optional[RegistryConfig] = None) -> None:
        self.config = config or RegistryConfig()
        self._definitions: List[StepDefinition] = []
        self._failures: List[StepFailure] = []
        self._definers: List[StepDefiner] = []
        self._prefix = self.config.keyword_prefix()

    # StepHost -----------------------------------------------------------

    def add_step(self, expression: str, location: StepLocation, handler: StepHandler) -> None:
        for existing in self._definitions:
            if existing.expression == expression:
                self.record_failure(
                    DuplicateStep(
                        f'Step "{expression}" is already defined at {existing.location}',
                        expression,
                        location,
                    )
                )
                return

        flags = re.IGNORECASE if self.config.ignore_case else 0
        try:
            regex = re.compile(expression, flags)
        except re.error as e:
            self.record_failure(
                InvalidStepExpression(
                    f'Step pattern "{expression}" is not a valid regular expression: {e}',
                    expression,
                    location,
                )
            )
            return

        self._definitions.append(StepDefinition(expression, location, handler, regex))
        logger.debug("Registered step %r from %s", expression, location)

    def perform_step(self, expression: str) -> None:
        text = self.normalize(expression)
        candidates = self.find(text)

        if not candidates:
            self.record_failure(StepNotFound(f'Step definition not found for "{text}"', expression))
            return

        if len(candidates) > 1:
            listing = ", ".join(f'"{d.expression}" ({d.location})' for d, _ in candidates)
            self.record_failure(
                AmbiguousStep(
                    f'Multiple step definitions match "{text}": {listing}',
                    expression,
                    [d for d, _ in candidates],
                )
            )
            return

        definition, matches = candidates[0]
        logger.debug("Running step %r with %s", definition.expression, matches)
        definition.handler(matches)

    def record_failure(self, failure: StepFailure) -> None:
        logger.debug("Recorded step failure: %s", failure)
        self._failures.append(failure)

    # Queries ------------------------------------------------------------

    @property
    def definitions(self) -> Tuple[StepDefinition, ...]:
        return tuple(self._definitions)

    @property
    def failures(self) -> Tuple[StepFailure, ...]:
        return tuple(self._failures)

    def take_failures(self) -> List[StepFailure]:
        """Return the recorded failures and forget them."""
        failures, self._failures = self._failures, []
        return failures

    def find(self, text: str) -> List[Tuple[StepDefinition, List[str]]]:
        """Every definition matching ``text``, with its captures."""
        found = []
        for definition in self._definitions:
            matches = definition.match(text)
            if matches is not None:
                found.append((definition, matches))
        return found

    def define(self, *definers: Type[StepDefiner]) -> List[StepDefiner]:
        """Instantiate each definer class on this registry and define its steps."""
        instances = []
        for definer_class in definers:
            definer = definer_class(self)
            definer.define_steps()
            instances.append(definer)
        self._definers.extend(instances)
        logger.debug("Defined %d steps from %d definers", len(self._definitions), len(instances))
        return instances

    def definer(self, definer_class: Type[T]) -> T:
        """The instance of ``definer_class`` defined on this registry.

        Raises
        ------
        LookupError
            If no such definer has been defined here.
        """
        for definer in self._definers:
            if type(definer) is definer_class:
                return definer
        raise LookupError(f"{definer_class.__qualname__} has not been defined on this registry")

    def __len__(self) -> int:
        return len(self._definitions)

    def normalize(self, text: str) -> str:
        """Performed step text as it is matched against patterns."""
        if self._prefix is None:
            return text.strip()
        return self._prefix.sub("", text, count=1).strip()


def format_failures(failures: Sequence[StepFailure]) -> str:
    """One failure per line, numbered when there are several."""
    if len(failures) == 1:
        return str(failures[0])
    return "\n".join(f"{n}. {failure}" for n, failure in enumerate(failures, 1))

"""Step Definer Keywords for Robot Framework.

Runs step text against StepDefiner classes from Robot Framework suites.
Reported step failures become continuable failures, so the rest of the
test still runs and the test ends failed.

Usage:
    *** Settings ***
    Library    stepdefiner.robot_keywords.StepDefinerKeywords    tests.step_defs

    *** Test Cases ***
    Eating Cukes
        Perform step    Given I have 42 cukes in my belly
        Perform step    When I eat 2 cukes
"""

from typing import List, Optional, Sequence

from robot.api import ContinuableFailure, Failure
from robot.api.deco import keyword

from stepdefiner.discovery import collect_definers
from stepdefiner.failures import StepFailure
from stepdefiner.registry import RegistryConfig, StepRegistry, format_failures


class StepDefinerKeywords:
    """Keywords for performing steps defined by StepDefiner subclasses."""

    ROBOT_LIBRARY_SCOPE = "TEST"
    ROBOT_LIBRARY_DOC_FORMAT = "TEXT"

    def __init__(self, *modules: str, ignore_case: bool = False, strip_keywords: bool = True) -> None:
        """Initialize StepDefinerKeywords.

        Arguments:
            modules: Modules or packages containing StepDefiner subclasses
            ignore_case: Match step patterns case-insensitively
            strip_keywords: Drop a leading Given/When/Then/And/But from step text
        """
        self._modules = modules
        self._config = RegistryConfig(ignore_case=ignore_case, strip_keywords=strip_keywords)
        self._registry: Optional[StepRegistry] = None

    @property
    def registry(self) -> StepRegistry:
        if self._registry is None:
            self._registry = StepRegistry(self._config)
            self._registry.define(*collect_definers(*self._modules))
        return self._registry

    @keyword("Perform step")
    def perform_step(self, text: str) -> None:
        """Perform one step.

        Maps to scenario steps like:
        - "Perform step    Given I have 42 cukes in my belly"

        Arguments:
            text: Step text, with or without its Given/When/Then keyword
        """
        self._perform([text])

    @keyword("Perform steps")
    def perform_steps(self, *texts: str) -> None:
        """Perform several steps in order, reporting all failures at the end.

        Arguments:
            texts: Step texts
        """
        self._perform(texts)

    @keyword("Step should be defined")
    def step_should_be_defined(self, text: str) -> None:
        """Fail unless exactly one step definition matches ``text``.

        Arguments:
            text: Step text, with or without its Given/When/Then keyword
        """
        candidates = self.registry.find(self.registry.normalize(text))
        if len(candidates) != 1:
            raise Failure(f'Expected one step definition for "{text}", found {len(candidates)}')

    @keyword("Reset step definitions")
    def reset_step_definitions(self) -> None:
        """Discard the current registry; the next step rebuilds it."""
        self._registry = None

    def _perform(self, texts: Sequence[str]) -> None:
        """Perform each text in order and report what the registry recorded.

        Failures recorded before a step raised are reported together with
        that error, so they never leak into a later keyword.
        """
        failures: List[StepFailure] = []
        try:
            for text in texts:
                try:
                    self.registry.perform_step(text)
                finally:
                    failures.extend(self.registry.take_failures())
        except Exception as error:
            if failures:
                raise Failure(f"{error}\n{format_failures(failures)}") from error
            raise
        if failures:
            raise ContinuableFailure(format_failures(failures))

"""Mock step host for unit testing."""

from typing import Dict, List, Sequence, Tuple

from stepdefiner import StepFailure, StepHandler, StepLocation


class MockHost:
    """Records what a StepDefiner asks of its host.

    Registered handlers are not matched against anything; tests call
    :meth:`trigger` with the captures the host would have produced.
    """

    def __init__(self):
        self.steps: Dict[str, Tuple[StepLocation, StepHandler]] = {}
        self.performed: List[str] = []
        self.failures: List[StepFailure] = []

    def add_step(self, expression: str, location: StepLocation, handler: StepHandler) -> None:
        """Store the handler under its expression."""
        self.steps[expression] = (location, handler)

    def perform_step(self, expression: str) -> None:
        """Remember the performed text."""
        self.performed.append(expression)

    def record_failure(self, failure: StepFailure) -> None:
        """Collect the failure."""
        self.failures.append(failure)

    def trigger(self, expression: str, *matches: str) -> None:
        """Run the handler for ``expression`` with ``matches`` as captures."""
        _, handler = self.steps[expression]
        handler(list(matches))

    def location(self, expression: str) -> StepLocation:
        """Location recorded for ``expression``."""
        return self.steps[expression][0]

    @property
    def expressions(self) -> Sequence[str]:
        return list(self.steps)

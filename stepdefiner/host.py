"""The collaborator contract step definers register against.

A step host owns the registry of step definitions, matches free text
against them and reports failures back to the running test. ``StepRegistry``
is the in-memory implementation shipped with this package; test runners
may provide their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from .failures import StepFailure

# Receives the captured substrings of a matched step, in group order.
StepHandler = Callable[[Sequence[str]], None]


@dataclass(frozen=True)
class StepLocation:
    """Where a step definition was written. Diagnostics only."""

    file: str
    line: int

    @classmethod
    def unknown(cls) -> StepLocation:
        return cls("<unknown>", 0)

    @property
    def is_known(self) -> bool:
        return self.line > 0

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@runtime_checkable
class StepHost(Protocol):
    """Operations a step definer needs from the test it runs in."""

    def add_step(self, expression: str, location: StepLocation, handler: StepHandler) -> None:
        """Register ``handler`` for steps matching ``expression``."""
        ...

    def perform_step(self, expression: str) -> None:
        """Run the previously registered step matching ``expression``."""
        ...

    def record_failure(self, failure: StepFailure) -> None:
        """Report a non-fatal step failure to the running test."""
        ...

"""Regular-expression step definitions for Given/When/Then tests.

Step definitions live in StepDefiner subclasses and are registered against
a step host, normally a StepRegistry created for each test.
"""

from .definer import StepDefiner, location_of
from .discovery import all_definers, collect_definers
from .failures import (
    AmbiguousStep,
    ArityMismatch,
    ConversionFailure,
    DuplicateStep,
    InvalidStepExpression,
    StepFailure,
    StepNotFound,
)
from .host import StepHandler, StepHost, StepLocation
from .matching import MatchedStringRepresentable, can_convert, convert_match, register_converter
from .registry import RegistryConfig, StepDefinition, StepRegistry

__all__ = [
    "StepDefiner",
    "location_of",
    "all_definers",
    "collect_definers",
    "AmbiguousStep",
    "ArityMismatch",
    "ConversionFailure",
    "DuplicateStep",
    "InvalidStepExpression",
    "StepFailure",
    "StepNotFound",
    "StepHandler",
    "StepHost",
    "StepLocation",
    "MatchedStringRepresentable",
    "can_convert",
    "convert_match",
    "register_converter",
    "RegistryConfig",
    "StepDefinition",
    "StepRegistry",
]

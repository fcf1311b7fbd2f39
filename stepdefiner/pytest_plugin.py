"""pytest plugin providing a per-test step registry.

Enabled through the ``pytest11`` entry point. Configure it in ``pytest.ini``
or ``pyproject.toml``::

    [tool.pytest.ini_options]
    step_definitions = ["tests.step_defs"]
    step_ignore_case = false

Step failures recorded on the registry during a test fail that test once
its body has finished, so every reported failure shows up together.
"""

from __future__ import annotations

from typing import List, Type

import pytest

from .definer import StepDefiner
from .discovery import collect_definers
from .registry import RegistryConfig, StepRegistry, format_failures

registry_key = pytest.StashKey[StepRegistry]()


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        "step_definitions",
        type="linelist",
        default=[],
        help="Modules or packages whose StepDefiner subclasses populate step_registry.",
    )
    parser.addini(
        "step_ignore_case",
        type="bool",
        default=False,
        help="Match step patterns case-insensitively.",
    )
    parser.addini(
        "step_strip_keywords",
        type="bool",
        default=True,
        help="Drop a leading Given/When/Then/And/But from performed steps.",
    )


@pytest.fixture
def step_registry_config(pytestconfig: pytest.Config) -> RegistryConfig:
    """Registry options read from the ini file."""
    return RegistryConfig(
        ignore_case=pytestconfig.getini("step_ignore_case"),
        strip_keywords=pytestconfig.getini("step_strip_keywords"),
    )


@pytest.fixture
def step_definers(pytestconfig: pytest.Config) -> List[Type[StepDefiner]]:
    """Definer classes for step_registry. Override to choose them per test."""
    names = pytestconfig.getini("step_definitions")
    if not names:
        return []
    return collect_definers(*names)


@pytest.fixture
def step_registry(
    request: pytest.FixtureRequest,
    step_registry_config: RegistryConfig,
    step_definers: List[Type[StepDefiner]],
) -> StepRegistry:
    """A fresh registry with every step definer defined on it."""
    registry = StepRegistry(step_registry_config)
    registry.define(*step_definers)
    request.node.stash[registry_key] = registry
    return registry


@pytest.hookimpl(wrapper=True)
def pytest_runtest_call(item: pytest.Item):
    result = yield
    registry = item.stash.get(registry_key, None)
    if registry is not None:
        failures = registry.take_failures()
        if failures:
            pytest.fail(format_failures(failures), pytrace=False)
    return result

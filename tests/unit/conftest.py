"""Unit test conftest.

Provides a mock host and a plain registry so step definers can be tested
without going through the pytest plugin.
"""

from unittest.mock import Mock

import pytest

from stepdefiner import StepRegistry
from tests.unit.mocks import MockHost


@pytest.fixture
def host() -> MockHost:
    """Mock step host fixture."""
    return MockHost()


@pytest.fixture
def callback() -> Mock:
    """Step callback that records its calls."""
    return Mock(name="callback")


@pytest.fixture
def registry() -> StepRegistry:
    """Fresh registry with default options."""
    return StepRegistry()

"""Root conftest.py - register pytest-bdd step functions and test helpers.

pytest-bdd only finds step functions in test modules, conftest files and
plugins, so the step function module is loaded as a plugin here. The
StepDefiner classes in tests/step_defs are picked up separately through the
step_definitions ini option.
"""

pytest_plugins = [
    "pytester",
    "tests.step_defs.bdd_steps",
]

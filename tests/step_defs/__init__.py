"""Step definitions package for BDD tests.

cukes_steps holds StepDefiner classes, collected through the step_definitions
ini option. bdd_steps holds the pytest-bdd step functions, registered in the
root conftest.py.
"""

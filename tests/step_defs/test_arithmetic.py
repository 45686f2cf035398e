"""
Step definitions for the Arithmetic feature.

Shared steps (engine setup, running programs, stack assertions) live in
conftest.py; this feature needs nothing beyond them.
"""
from pytest_bdd import scenarios

# Load scenarios from feature file
scenarios("../features/arithmetic.feature")

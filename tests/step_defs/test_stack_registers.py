"""Step definitions for the Operand Stack and Register File feature."""
from pytest_bdd import scenarios

# Load scenarios from feature file
scenarios("../features/stack_registers.feature")

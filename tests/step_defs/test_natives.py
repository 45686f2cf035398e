"""
Step definitions for the Native Function Bridge feature.

Natives here are plain functions and closures capturing test state, which
is how hosts bind their own behavior to CallNative.
"""
from typing import Optional

from pytest_bdd import given, parsers, scenarios, then

from cubevm.kernel import ExecutionContext, Number, OperandStack

# Load scenarios from feature file
scenarios("../features/natives.feature")


# =============================================================================
# Given Steps
# =============================================================================


@given(parsers.parse('a native "{name}" that doubles a number'))
def native_double(test_context, name: str):
    def double(stack: OperandStack) -> Number:
        return Number(stack.pop_number() * 2)

    test_context["engine"].register_function(name, double)


@given(parsers.parse('a native "{name}" that adds two numbers'))
def native_addnum(test_context, name: str):
    def addnum(stack: OperandStack) -> Number:
        rhs = stack.pop_number()
        lhs = stack.pop_number()
        return Number(lhs + rhs)

    test_context["engine"].register_function(name, addnum)


@given(parsers.parse('a native "{name}" that records its calls'))
def native_noop(test_context, name: str):
    test_context["calls"] = 0

    def noop(stack: OperandStack) -> None:
        test_context["calls"] += 1

    test_context["engine"].register_function(name, noop)


@given(parsers.parse('a native "{name}" that returns {value:d}'))
def native_constant(test_context, name: str, value: int):
    test_context["engine"].register_function(name, lambda stack: Number(value))


@given(parsers.parse('a native "{name}" that emits through the context'))
def native_shout(test_context, name: str):
    def shout(stack: OperandStack, _ctx: Optional[ExecutionContext] = None) -> None:
        assert _ctx is test_context["engine"].context
        _ctx.emit(stack.pop().as_text().upper())

    test_context["engine"].register_function(name, shout)


# =============================================================================
# Then Steps
# =============================================================================


@then(parsers.parse("the native was called {count:d} times"))
def native_call_count(test_context, count: int):
    assert test_context["calls"] == count

"""
Shared step definitions for the engine features.

Programs are written inline in the feature files as `;`-separated
instruction constructors, e.g. "PushNumber(5); PushNumber(2); Subtract()".
"""
import math
from typing import Any, Dict, List

import pytest
from pytest_bdd import given, parsers, then, when

from cubevm import kernel
from cubevm.kernel import ExecutionContext, VmEngine, VmFault
from cubevm.lib import install_std


# Only instruction and value constructors are visible to inline programs
NAMESPACE: Dict[str, Any] = {name: getattr(kernel, name) for name in kernel.__all__}
NAMESPACE["inf"] = math.inf


def evaluate(source: str) -> Any:
    return eval(source, {"__builtins__": {}}, NAMESPACE)  # noqa: S307


def build_program(source: str) -> List[Any]:
    return [evaluate(part.strip()) for part in source.split(";") if part.strip()]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def test_context():
    """Shared context for passing data between steps."""
    return {
        "engine": None,
        "fault": None,
        "output": [],
        "input_lines": [],
    }


def _make_engine(test_context, seed=None) -> VmEngine:
    context = ExecutionContext(
        seed=seed,
        output_sink=test_context["output"].append,
        input_source=lambda: test_context["input_lines"].pop(0),
    )
    engine = VmEngine(context=context)
    test_context["engine"] = engine
    return engine


# =============================================================================
# Given Steps
# =============================================================================


@given("a fresh engine")
def fresh_engine(test_context):
    """Engine with empty stack, registers and function table."""
    _make_engine(test_context)


@given(parsers.parse("a fresh engine seeded with {seed:d}"))
def fresh_seeded_engine(test_context, seed: int):
    _make_engine(test_context, seed=seed)


@given("the standard natives are installed")
def standard_natives(test_context):
    install_std(test_context["engine"])


@given(parsers.parse('the input lines "{lines}"'))
def input_lines(test_context, lines: str):
    test_context["input_lines"].extend(lines.split("|"))


# =============================================================================
# When Steps
# =============================================================================


@when(parsers.parse('I run "{source}"'))
def run_program(test_context, source: str):
    """Execute a program, keeping any fault for the Then steps."""
    test_context["fault"] = None
    try:
        test_context["engine"].execute(build_program(source))
    except VmFault as exc:
        test_context["fault"] = exc


# =============================================================================
# Then Steps
# =============================================================================


@then("the run succeeds")
def run_succeeds(test_context):
    fault = test_context["fault"]
    assert fault is None, f"Expected success, got {fault.kind}: {fault}"


@then(parsers.parse('the run fails with "{kind}"'))
def run_fails(test_context, kind: str):
    fault = test_context["fault"]
    assert fault is not None, "Expected a fault, the program ran to completion"
    assert fault.kind == kind, f"Expected '{kind}', got '{fault.kind}': {fault}"


@then(parsers.parse("the fault is at instruction {ip:d}"))
def fault_location(test_context, ip: int):
    assert test_context["fault"].ip == ip


@then(parsers.parse('the top of the stack is "{expected}"'))
def top_of_stack(test_context, expected: str):
    actual = test_context["engine"].stack_top()
    assert actual == evaluate(expected), f"Expected {expected}, got {actual!r}"


@then(parsers.parse("the stack depth is {depth:d}"))
def stack_depth(test_context, depth: int):
    assert len(test_context["engine"].stack) == depth


@then("the stack is empty")
def stack_empty(test_context):
    assert len(test_context["engine"].stack) == 0


@then(parsers.parse('register {index:d} holds "{expected}"'))
def register_holds(test_context, index: int, expected: str):
    assert test_context["engine"].registers.get(index) == evaluate(expected)


@then(parsers.parse('the output is "{lines}"'))
def output_is(test_context, lines: str):
    assert test_context["output"] == lines.split("|")


@then("nothing was output")
def nothing_output(test_context):
    assert test_context["output"] == []

"""
Pytest configuration and shared fixtures for cube VM tests.
"""
from typing import Callable, List

import pytest

from cubevm.kernel import ExecutionContext, VmEngine


@pytest.fixture
def output() -> List[str]:
    """Lines emitted through the I/O membrane."""
    return []


@pytest.fixture
def make_engine(output) -> Callable[..., VmEngine]:
    """Build engines that write to `output` and read from a scripted list."""

    def factory(inputs=(), seed=None) -> VmEngine:
        pending = list(inputs)
        context = ExecutionContext(
            seed=seed,
            output_sink=output.append,
            input_source=lambda: pending.pop(0),
        )
        return VmEngine(context=context)

    return factory

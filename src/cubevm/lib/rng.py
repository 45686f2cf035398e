"""
Domain: Randomness

Natives:
  - rand: pop max, then min; return a uniform integer in [min, max]
"""
from __future__ import annotations

import math
import random
from typing import Optional

from ..kernel.registry import NativeFn
from ..kernel.schema import Number
from ..kernel.stack import OperandStack

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def truncate_i32(num: float) -> int:
    """Truncate toward zero into the 32-bit range; NaN becomes 0."""
    if math.isnan(num):
        return 0
    if num <= _I32_MIN:
        return _I32_MIN
    if num >= _I32_MAX:
        return _I32_MAX
    return int(num)


def make_rand(seed: Optional[int] = None) -> NativeFn:
    """Build a rand native with its own generator, seeded for reproducible runs."""
    rng = random.Random(seed)

    def rand(stack: OperandStack) -> Number:
        high = truncate_i32(stack.pop_number())
        low = truncate_i32(stack.pop_number())
        if low > high:
            raise ValueError(f"rand: empty range [{low}, {high}]")
        return Number(float(rng.randint(low, high)))

    return rand

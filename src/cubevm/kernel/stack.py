"""
Operand stack and register file: the only mutable state of a program.
"""
from __future__ import annotations

from typing import Iterator, List, Optional

from .errors import RegisterOutOfBounds, StackUnderflow, TypeMismatch, UninitializedRegister
from .schema import Number, StackValue


REGISTER_COUNT = 9


class OperandStack:
    """LIFO workspace shared by instructions and native functions."""

    def __init__(self) -> None:
        self._items: List[StackValue] = []

    def push(self, value: StackValue) -> None:
        self._items.append(value)

    def pop(self) -> StackValue:
        if not self._items:
            raise StackUnderflow("Pop from an empty stack")
        return self._items.pop()

    def pop_number(self) -> float:
        """Pop a value that must be a Number and return its payload."""
        value = self.pop()
        if not isinstance(value, Number):
            raise TypeMismatch(f"Expected a Number, got {value.kind}")
        return value.value

    def pop_many(self, count: int) -> List[StackValue]:
        """Pop `count` values and return them in push order.

        Values popped before an underflow stay popped.
        """
        popped = [self.pop() for _ in range(count)]
        popped.reverse()
        return popped

    def peek(self) -> StackValue:
        if not self._items:
            raise StackUnderflow("Inspecting the top of an empty stack")
        return self._items[-1]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[StackValue]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"OperandStack({self._items!r})"


class RegisterFile:
    """Fixed bank of polymorphic value slots, all empty at creation."""

    def __init__(self, size: int = REGISTER_COUNT) -> None:
        self._slots: List[Optional[StackValue]] = [None] * size

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._slots):
            raise RegisterOutOfBounds(
                f"Register {index} is outside 0..{len(self._slots) - 1}"
            )

    def store(self, index: int, value: StackValue) -> None:
        self._check(index)
        self._slots[index] = value

    def load(self, index: int) -> StackValue:
        self._check(index)
        value = self._slots[index]
        if value is None:
            raise UninitializedRegister(f"Register {index} was never stored into")
        return value

    def get(self, index: int) -> Optional[StackValue]:
        """Non-failing read for hosts and tests; empty slots are None."""
        self._check(index)
        return self._slots[index]

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Optional[StackValue]]:
        return iter(self._slots)

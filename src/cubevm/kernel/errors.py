"""
Faults: the ways a program can abort.

Every fault is fatal to the current execution. The engine never catches
them; the host decides whether to report, log, or crash (see runner.py).
"""
from __future__ import annotations

from typing import Any, Optional


class VmFault(Exception):
    """Base class for all execution faults."""

    kind = "vm_fault"

    def __init__(
        self,
        message: str,
        ip: Optional[int] = None,
        instruction: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.ip = ip
        self.instruction = instruction

    def locate(self, ip: int, instruction: Any) -> None:
        """Record where the fault happened, unless an inner frame already did."""
        if self.ip is None:
            self.ip = ip
            self.instruction = instruction

    def __str__(self) -> str:
        if self.ip is None:
            return self.message
        return f"{self.message} (at instruction {self.ip}: {self.instruction!r})"


class StackUnderflow(VmFault):
    kind = "stack_underflow"


class TypeMismatch(VmFault):
    kind = "type_mismatch"


class UninitializedRegister(VmFault):
    kind = "uninitialized_register"


class RegisterOutOfBounds(VmFault):
    kind = "register_out_of_bounds"


class UndefinedFunction(VmFault):
    kind = "undefined_function"


class InvalidNumericLiteral(VmFault):
    kind = "invalid_numeric_literal"


class UnreachableOpcode(VmFault):
    kind = "unreachable_opcode"

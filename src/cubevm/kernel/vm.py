"""
Cube Virtual Machine: the execution loop.

A VmEngine owns an operand stack, a fixed register file and a native
function table. `execute` runs one instruction sequence from index 0 until a
Terminate instruction or the end of the sequence. State survives between
calls, so a host can feed a program in several pieces.

Binary operations pop the right-hand operand first: pushing 3 then 4 and
running Subtract computes 3 - 4.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, Optional, Sequence

from .errors import TypeMismatch, UnreachableOpcode, VmFault
from .registry import NativeFn, NativeRegistry
from .schema import (
    Add,
    Bool,
    CallNative,
    Concat,
    Divide,
    ExecutionContext,
    Instruction,
    Jump,
    JumpIfEqual,
    JumpIfGreater,
    JumpIfLess,
    JumpIfOne,
    JumpIfZero,
    LoadRegister,
    Multiply,
    Number,
    Pop,
    PushBool,
    PushNumber,
    PushString,
    RESERVED_OPCODES,
    StackValue,
    StoreRegister,
    String,
    Subtract,
    Terminate,
    ToNumber,
)
from .stack import OperandStack, RegisterFile

logger = logging.getLogger(__name__)

# step() result when the program must stop
HALT = None

Handler = Callable[[Any, int], Optional[int]]


def ieee_divide(lhs: float, rhs: float) -> float:
    """Float division that yields inf/NaN on a zero divisor instead of raising."""
    if rhs == 0.0:
        if lhs == 0.0 or math.isnan(lhs):
            return math.nan
        return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)
    return lhs / rhs


ARITHMETIC: Dict[type, Callable[[float, float], float]] = {
    Add: lambda lhs, rhs: lhs + rhs,
    Subtract: lambda lhs, rhs: lhs - rhs,
    Multiply: lambda lhs, rhs: lhs * rhs,
    Divide: ieee_divide,
}

COMPARISONS: Dict[type, Callable[[float, float], bool]] = {
    JumpIfGreater: lambda lhs, rhs: lhs > rhs,
    JumpIfLess: lambda lhs, rhs: lhs < rhs,
}


class VmEngine:
    def __init__(self, context: Optional[ExecutionContext] = None) -> None:
        self._stack = OperandStack()
        self._registers = RegisterFile()
        self._functions = NativeRegistry()
        self._context = context

        self._handlers: Dict[type, Handler] = {
            PushNumber: self._push_literal,
            PushString: self._push_literal,
            PushBool: self._push_literal,
            StoreRegister: self._store_register,
            LoadRegister: self._load_register,
            Pop: self._pop,
            ToNumber: self._to_number,
            CallNative: self._call_native,
            Jump: self._jump,
            JumpIfZero: self._jump_if_zero,
            JumpIfOne: self._jump_if_one,
            JumpIfEqual: self._jump_if_equal,
            Terminate: self._terminate,
            Concat: self._concat,
        }
        for op in ARITHMETIC:
            self._handlers[op] = self._arithmetic
        for op in COMPARISONS:
            self._handlers[op] = self._compare
        for op in RESERVED_OPCODES:
            self._handlers[op] = self._reserved

    # -------------------------------------------------------------------------
    # Public surface
    # -------------------------------------------------------------------------

    @property
    def stack(self) -> OperandStack:
        return self._stack

    @property
    def registers(self) -> RegisterFile:
        return self._registers

    @property
    def functions(self) -> NativeRegistry:
        return self._functions

    @property
    def context(self) -> Optional[ExecutionContext]:
        return self._context

    def register_function(self, name: str, handler: NativeFn) -> None:
        """Bind a native function; re-registering a name replaces it."""
        self._functions.register(name, handler)

    def stack_top(self) -> StackValue:
        """Return the top of the stack without removing it."""
        return self._stack.peek()

    def execute(self, instructions: Sequence[Instruction]) -> None:
        """
        Run a program from its first instruction.

        Returns normally on Terminate or when the instruction pointer leaves
        the program. Any VmFault propagates to the caller with the faulting
        instruction pointer attached; nothing is rolled back.
        """
        ip: Optional[int] = 0
        while ip is not HALT and 0 <= ip < len(instructions):
            ip = self.step(instructions, ip)

    def step(self, instructions: Sequence[Instruction], ip: int) -> Optional[int]:
        """
        Execute the instruction at `ip`.

        Returns:
            The index of the next instruction to run, or None to halt.
        """
        if not 0 <= ip < len(instructions):
            raise IndexError(f"Instruction pointer {ip} is outside 0..{len(instructions) - 1}")

        instruction = instructions[ip]
        handler = self._handlers.get(type(instruction))
        if handler is None:
            raise TypeError(f"Not a cube VM instruction: {instruction!r}")

        logger.debug("%04d %r depth=%d", ip, instruction, len(self._stack))
        try:
            return handler(instruction, ip)
        except VmFault as exc:
            exc.locate(ip, instruction)
            logger.debug("fault %s: %s", exc.kind, exc)
            raise

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    def _push_literal(self, instr: Any, ip: int) -> Optional[int]:
        if isinstance(instr, PushNumber):
            self._stack.push(Number(instr.value))
        elif isinstance(instr, PushString):
            self._stack.push(String(instr.value))
        else:
            self._stack.push(Bool(instr.value))
        return ip + 1

    def _store_register(self, instr: StoreRegister, ip: int) -> Optional[int]:
        self._registers.store(instr.index, self._stack.pop())
        return ip + 1

    def _load_register(self, instr: LoadRegister, ip: int) -> Optional[int]:
        self._stack.push(self._registers.load(instr.index))
        return ip + 1

    def _pop(self, instr: Pop, ip: int) -> Optional[int]:
        self._stack.pop()
        return ip + 1

    def _arithmetic(self, instr: Any, ip: int) -> Optional[int]:
        rhs = self._stack.pop_number()
        lhs = self._stack.pop_number()
        self._stack.push(Number(ARITHMETIC[type(instr)](lhs, rhs)))
        return ip + 1

    def _to_number(self, instr: ToNumber, ip: int) -> Optional[int]:
        value = self._stack.pop()
        self._stack.push(Number(value.as_number()))
        return ip + 1

    def _concat(self, instr: Concat, ip: int) -> Optional[int]:
        values = self._stack.pop_many(instr.count)
        self._stack.push(String("".join(value.as_text() for value in values)))
        return ip + 1

    def _call_native(self, instr: CallNative, ip: int) -> Optional[int]:
        record = self._functions.get(instr.name)

        kwargs: Dict[str, Any] = {}
        if record.wants_context and self._context is not None:
            kwargs["_ctx"] = self._context

        logger.debug("call %s depth=%d", instr.name, len(self._stack))
        result = record.handler(self._stack, **kwargs)
        if result is not None:
            self._stack.push(result)
        return ip + 1

    def _jump(self, instr: Jump, ip: int) -> Optional[int]:
        return instr.target

    def _jump_if_zero(self, instr: JumpIfZero, ip: int) -> Optional[int]:
        value = self._stack.pop()
        if isinstance(value, Number):
            taken = value.value == 0.0
        elif isinstance(value, Bool):
            taken = not value.value
        else:
            raise TypeMismatch(f"JumpIfZero needs a Number or Bool, got {value.kind}")
        return instr.target if taken else ip + 1

    def _jump_if_one(self, instr: JumpIfOne, ip: int) -> Optional[int]:
        value = self._stack.pop()
        if isinstance(value, Number):
            taken = value.value == 1.0
        elif isinstance(value, Bool):
            taken = value.value
        else:
            raise TypeMismatch(f"JumpIfOne needs a Number or Bool, got {value.kind}")
        return instr.target if taken else ip + 1

    def _jump_if_equal(self, instr: JumpIfEqual, ip: int) -> Optional[int]:
        rhs = self._stack.pop()
        lhs = self._stack.pop()
        return instr.target if lhs == rhs else ip + 1

    def _compare(self, instr: Any, ip: int) -> Optional[int]:
        rhs = self._stack.pop_number()
        lhs = self._stack.pop_number()
        return instr.target if COMPARISONS[type(instr)](lhs, rhs) else ip + 1

    def _terminate(self, instr: Terminate, ip: int) -> Optional[int]:
        return HALT

    def _reserved(self, instr: Any, ip: int) -> Optional[int]:
        raise UnreachableOpcode(
            f"{type(instr).__name__} is reserved and not supported by this engine"
        )

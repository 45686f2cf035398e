"""
Schema: the value model and the instruction set of the cube VM.

Values and instructions are frozen pydantic dataclasses so they are
validated once at construction and can be passed around by value.
"""
from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt
from pydantic.dataclasses import dataclass

from .errors import InvalidNumericLiteral


# =============================================================================
# Values
# =============================================================================


_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:inf|infinity|nan|\d+\.?\d*(?:e[+-]?\d+)?|\.\d+(?:e[+-]?\d+)?)",
    re.IGNORECASE,
)


def parse_number(text: str) -> float:
    """Parse a floating point literal, rejecting whitespace and separators."""
    if not _FLOAT_LITERAL.fullmatch(text):
        raise InvalidNumericLiteral(f"Cannot convert {text!r} to a number")
    return float(text)


def format_number(num: float) -> str:
    """Natural decimal text: no exponent, no trailing zeros."""
    if math.isnan(num):
        return "NaN"
    if math.isinf(num):
        return "inf" if num > 0 else "-inf"
    text = format(Decimal(repr(num)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class _Value:
    """Structural equality shared by the value kinds: same kind, same payload."""

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.value))

    @property
    def kind(self) -> str:
        return type(self).__name__

    def as_text(self) -> str:
        raise NotImplementedError

    def as_number(self) -> float:
        raise NotImplementedError


@dataclass(frozen=True, eq=False)
class Number(_Value):
    value: float

    def as_text(self) -> str:
        return format_number(self.value)

    def as_number(self) -> float:
        return self.value


@dataclass(frozen=True, eq=False)
class String(_Value):
    value: str

    def as_text(self) -> str:
        return self.value

    def as_number(self) -> float:
        return parse_number(self.value)


@dataclass(frozen=True, eq=False)
class Bool(_Value):
    value: bool

    def as_text(self) -> str:
        return "true" if self.value else "false"

    def as_number(self) -> float:
        return 1.0 if self.value else 0.0


StackValue = Union[Number, String, Bool]


# =============================================================================
# Instructions
# =============================================================================
#
# Literal pushes


@dataclass(frozen=True)
class PushNumber:
    value: float


@dataclass(frozen=True)
class PushString:
    value: str


@dataclass(frozen=True)
class PushBool:
    value: bool


# Register transfer. Indices are range-checked when executed.


@dataclass(frozen=True)
class StoreRegister:
    index: int


@dataclass(frozen=True)
class LoadRegister:
    index: int


@dataclass(frozen=True)
class Pop:
    pass


# Arithmetic: the first pushed operand is the left-hand side.


@dataclass(frozen=True)
class Add:
    pass


@dataclass(frozen=True)
class Subtract:
    pass


@dataclass(frozen=True)
class Multiply:
    pass


@dataclass(frozen=True)
class Divide:
    pass


@dataclass(frozen=True)
class ToNumber:
    pass


@dataclass(frozen=True)
class CallNative:
    name: str


# Control flow. Targets are absolute indices into the executing program.


@dataclass(frozen=True)
class Jump:
    target: NonNegativeInt


@dataclass(frozen=True)
class JumpIfZero:
    target: NonNegativeInt


@dataclass(frozen=True)
class JumpIfOne:
    target: NonNegativeInt


@dataclass(frozen=True)
class JumpIfEqual:
    target: NonNegativeInt


@dataclass(frozen=True)
class JumpIfGreater:
    target: NonNegativeInt


@dataclass(frozen=True)
class JumpIfLess:
    target: NonNegativeInt


@dataclass(frozen=True)
class Terminate:
    pass


@dataclass(frozen=True)
class Concat:
    count: NonNegativeInt


# Reserved: named variables and user-defined calls have no semantics yet.


@dataclass(frozen=True)
class StoreVariable:
    name: str


@dataclass(frozen=True)
class LoadVariable:
    name: str


@dataclass(frozen=True)
class CallFunction:
    name: str


@dataclass(frozen=True)
class Return:
    pass


RESERVED_OPCODES = (StoreVariable, LoadVariable, CallFunction, Return)

Instruction = Union[
    PushNumber,
    PushString,
    PushBool,
    StoreRegister,
    LoadRegister,
    Pop,
    Add,
    Subtract,
    Multiply,
    Divide,
    ToNumber,
    CallNative,
    Jump,
    JumpIfZero,
    JumpIfOne,
    JumpIfEqual,
    JumpIfGreater,
    JumpIfLess,
    Terminate,
    Concat,
    StoreVariable,
    LoadVariable,
    CallFunction,
    Return,
]


# =============================================================================
# Host context
# =============================================================================


class ExecutionContext(BaseModel):
    """Context handed to native functions that ask for it.

    The output_sink and input_source implement the I/O membrane: natives never
    touch stdin/stdout directly when a sink or source is configured. The CLI
    leaves both unset, tests pass a list's append and a scripted reader.
    """

    seed: Optional[int] = None

    output_sink: Optional[Callable[[str], None]] = Field(default=None, exclude=True)
    input_source: Optional[Callable[[], str]] = Field(default=None, exclude=True)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def emit(self, content: str) -> None:
        """Send a line of output to the configured sink, or stdout as fallback."""
        if self.output_sink:
            self.output_sink(content)
        else:
            print(content)

    def read_line(self, message: str) -> str:
        """Show a prompt and read one line, without its line ending."""
        if self.input_source:
            if self.output_sink:
                self.output_sink(message)
            else:
                print(message, end="", flush=True)
            line = self.input_source()
        else:
            line = input(message)
        return line.rstrip("\r\n")

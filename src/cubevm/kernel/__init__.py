"""
Kernel: The machinery of the cube VM.

This module contains the execution infrastructure:
- schema: Values, instructions and the host execution context
- errors: The fault taxonomy
- stack: Operand stack and register file
- registry: Native function table
- vm: The execution loop
- runner: Host-side result reporting

The kernel is distinct from lib/ (the sample native functions).
Kernel = machinery. Lib = host library.
"""
from .errors import (
    InvalidNumericLiteral,
    RegisterOutOfBounds,
    StackUnderflow,
    TypeMismatch,
    UndefinedFunction,
    UninitializedRegister,
    UnreachableOpcode,
    VmFault,
)
from .schema import (
    Add,
    Bool,
    CallFunction,
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
    LoadVariable,
    Multiply,
    Number,
    Pop,
    PushBool,
    PushNumber,
    PushString,
    Return,
    StackValue,
    StoreRegister,
    StoreVariable,
    String,
    Subtract,
    Terminate,
    ToNumber,
)
from .stack import REGISTER_COUNT, OperandStack, RegisterFile
from .registry import NativeRegistry
from .vm import VmEngine
from .runner import RunResult, run_program

__all__ = [
    # Errors
    "VmFault",
    "StackUnderflow",
    "TypeMismatch",
    "UninitializedRegister",
    "RegisterOutOfBounds",
    "UndefinedFunction",
    "InvalidNumericLiteral",
    "UnreachableOpcode",
    # Values
    "StackValue",
    "Number",
    "String",
    "Bool",
    # Instructions
    "Instruction",
    "PushNumber",
    "PushString",
    "PushBool",
    "StoreRegister",
    "LoadRegister",
    "Pop",
    "Add",
    "Subtract",
    "Multiply",
    "Divide",
    "ToNumber",
    "CallNative",
    "Jump",
    "JumpIfZero",
    "JumpIfOne",
    "JumpIfEqual",
    "JumpIfGreater",
    "JumpIfLess",
    "Terminate",
    "Concat",
    "StoreVariable",
    "LoadVariable",
    "CallFunction",
    "Return",
    # Context
    "ExecutionContext",
    # Machine state
    "REGISTER_COUNT",
    "OperandStack",
    "RegisterFile",
    # Registry
    "NativeRegistry",
    # VM
    "VmEngine",
    # Runner
    "RunResult",
    "run_program",
]

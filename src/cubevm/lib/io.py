"""
Domain: I/O (Membrane)

The only natives allowed to touch stdin/stdout, and only through the
ExecutionContext when one is injected.

Natives:
  - log: pop one value and emit its text form as a line
  - prompt: pop one value, show it as a prompt and push back the typed line
"""
from __future__ import annotations

from typing import Optional

from ..kernel.schema import ExecutionContext, StackValue, String
from ..kernel.stack import OperandStack


def sys_log(stack: OperandStack, _ctx: Optional[ExecutionContext] = None) -> None:
    """Native: log

    Routes output through the context sink if available, falls back to
    stdout otherwise.
    """
    text = stack.pop().as_text()
    if _ctx:
        _ctx.emit(text)
    else:
        print(text)
    return None


def prompt(stack: OperandStack, _ctx: Optional[ExecutionContext] = None) -> StackValue:
    """Native: prompt

    Shows the popped value (without a newline) and returns the next input
    line as a String, line ending stripped.
    """
    message = stack.pop().as_text()
    if _ctx is None:
        _ctx = ExecutionContext()
    return String(_ctx.read_line(message))

"""
Program Runner: the host-side boundary around VmEngine.execute.

The engine itself never catches a fault. Hosts that want a result record
instead of an exception (the CLI, REPL-style drivers) go through
run_program, which turns a VmFault into a RunResult.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from .errors import StackUnderflow, VmFault
from .schema import Instruction
from .vm import VmEngine

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result of running one program."""
    ok: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error_kind: Optional[str] = None
    error_message: Optional[str] = None
    ip: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: Dict[str, Any] = {"ok": self.ok, "data": self.data}
        if not self.ok:
            result["error_kind"] = self.error_kind
            result["error_message"] = self.error_message
            result["ip"] = self.ip
        return result


def snapshot(engine: VmEngine) -> Dict[str, Any]:
    """Describe the engine state in plain Python values."""
    try:
        top = engine.stack_top().as_text()
    except StackUnderflow:
        top = None
    return {
        "depth": len(engine.stack),
        "top": top,
        "registers": [
            None if value is None else value.as_text() for value in engine.registers
        ],
    }


def run_program(engine: VmEngine, instructions: Sequence[Instruction]) -> RunResult:
    """
    Execute a program and report how it ended.

    Only VmFault is converted; anything else raised by a native function is
    a host bug and propagates.
    """
    try:
        engine.execute(instructions)
    except VmFault as exc:
        logger.info("program aborted: %s", exc)
        return RunResult(
            ok=False,
            data=snapshot(engine),
            error_kind=exc.kind,
            error_message=exc.message,
            ip=exc.ip,
        )
    return RunResult(ok=True, data=snapshot(engine))

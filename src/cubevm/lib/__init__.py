"""
Lib: sample native functions for hosts and demos.

These live outside the kernel; the engine only knows them through
VmEngine.register_function.
"""
from __future__ import annotations

from typing import Dict, Iterable, Optional

from ..kernel.registry import NativeFn
from ..kernel.vm import VmEngine
from .io import prompt, sys_log
from .rng import make_rand

STD_NATIVES = ("log", "prompt", "rand")


def std_natives(seed: Optional[int] = None) -> Dict[str, NativeFn]:
    """Fresh name -> native mapping; `rand` gets its own generator."""
    return {
        "log": sys_log,
        "prompt": prompt,
        "rand": make_rand(seed),
    }


def install_std(engine: VmEngine, names: Optional[Iterable[str]] = None) -> None:
    """Register the standard natives (or only `names`) on an engine.

    The rand seed comes from the engine's ExecutionContext when it has one.
    """
    seed = engine.context.seed if engine.context else None
    natives = std_natives(seed)
    selected = STD_NATIVES if names is None else tuple(names)
    for name in selected:
        if name not in natives:
            raise KeyError(f"Unknown standard native: {name}")
        engine.register_function(name, natives[name])


__all__ = ["STD_NATIVES", "install_std", "make_rand", "prompt", "std_natives", "sys_log"]

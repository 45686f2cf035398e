from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional

from .errors import UndefinedFunction
from .schema import StackValue


NativeFn = Callable[..., Optional[StackValue]]


@dataclass
class NativeRecord:
    name: str
    handler: NativeFn
    wants_context: bool = False


def _accepts_context(handler: NativeFn) -> bool:
    try:
        sig = inspect.signature(handler)
    except (TypeError, ValueError):
        return False
    return "_ctx" in sig.parameters or any(
        p.kind == inspect.Parameter.VAR_KEYWORD for p in sig.parameters.values()
    )


class NativeRegistry:
    """Name -> host function table consulted by CallNative.

    A native takes the operand stack, pops whatever it needs and optionally
    returns one value for the engine to push. Natives that declare `_ctx`
    (or **kwargs) also receive the engine's ExecutionContext.
    """

    def __init__(self) -> None:
        self._registry: Dict[str, NativeRecord] = {}

    def register(self, name: str, handler: NativeFn) -> None:
        """Bind `name` to `handler`, replacing any previous binding."""
        self._registry[name] = NativeRecord(
            name=name,
            handler=handler,
            wants_context=_accepts_context(handler),
        )

    def get(self, name: str) -> NativeRecord:
        try:
            return self._registry[name]
        except KeyError:
            raise UndefinedFunction(f"Native function {name!r} is not registered") from None

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __iter__(self) -> Iterator[str]:
        return iter(self._registry)

    def __len__(self) -> int:
        return len(self._registry)

"""
Demo programs: hand-assembled instruction sequences.

There is no cubelang front-end yet, so each demo carries the source it
stands for in its docstring and the instructions are written out with
resolved jump targets.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from .kernel.schema import (
    CallNative,
    Concat,
    Instruction,
    Jump,
    JumpIfGreater,
    JumpIfLess,
    LoadRegister,
    PushNumber,
    PushString,
    StoreRegister,
    Subtract,
    Terminate,
    ToNumber,
)


def name_age() -> List[Instruction]:
    """
    cubelang equivalent:

        name is prompt("Hello! What is your name? ")

        loop
            age is num(prompt("Hi {name}, how old are you? "))

            if age >= 100
                log("Wow, you are old. Get younger.")
                terminate
            else if age <= 0
                log("Lol. Sure. That ain't right.")
            else
                break
            end
        end

        log("That's cool, {name}, you're {age} years old!")
    """
    return [
        PushString("Hello! What is your name? "),
        CallNative("prompt"),
        StoreRegister(0),
        # 3: loop head
        PushString("Hi "),
        LoadRegister(0),
        PushString(", how old are you? "),
        Concat(3),
        CallNative("prompt"),
        ToNumber(),
        StoreRegister(1),
        # 10
        LoadRegister(1),
        PushNumber(100),
        JumpIfLess(16),
        PushString("Wow, you are old. Get younger."),
        CallNative("log"),
        Terminate(),
        # 16
        LoadRegister(1),
        PushNumber(0),
        JumpIfGreater(22),
        PushString("Lol. Sure. That ain't right."),
        CallNative("log"),
        Jump(3),
        # 22
        PushString("That's cool, "),
        LoadRegister(0),
        PushString(", you're "),
        LoadRegister(1),
        PushString(" years old!"),
        Concat(5),
        CallNative("log"),
    ]


def number_game(rounds: int = 50) -> List[Instruction]:
    """
    cubelang equivalent:

        count is {rounds}
        while count > 0
            log(rand(1, 50))
            count is count - 1
        end
    """
    return [
        PushNumber(rounds),
        StoreRegister(0),
        # 2: loop head
        LoadRegister(0),
        PushNumber(0),
        JumpIfGreater(6),
        Jump(15),
        # 6: body
        PushNumber(1),
        PushNumber(50),
        CallNative("rand"),
        CallNative("log"),
        LoadRegister(0),
        PushNumber(1),
        Subtract(),
        StoreRegister(0),
        Jump(2),
    ]


@dataclass
class Demo:
    name: str
    description: str
    build: Callable[..., List[Instruction]]
    natives: Tuple[str, ...]
    takes_rounds: bool = False


DEMOS: Dict[str, Demo] = {
    "name-age": Demo(
        name="name-age",
        description="Ask for a name and an age, then greet",
        build=name_age,
        natives=("log", "prompt"),
    ),
    "number-game": Demo(
        name="number-game",
        description="Log a run of random numbers between 1 and 50",
        build=number_game,
        natives=("log", "rand"),
        takes_rounds=True,
    ),
}

"""Abstract commands and their rendering into one protocol line."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union


@dataclass(frozen=True)
class Idle:
    def render(self) -> str:
        return "WAIT"


@dataclass(frozen=True)
class Reinforce:
    cell: int
    strength: int

    def __post_init__(self):
        if self.strength <= 0:
            raise ValueError("Strength must be positive")

    def render(self) -> str:
        return f"BEACON {self.cell} {self.strength}"


@dataclass(frozen=True)
class Connect:
    source: int
    target: int
    strength: int

    def __post_init__(self):
        if self.strength <= 0:
            raise ValueError("Strength must be positive")
        if self.source == self.target:
            raise ValueError("Cannot connect a cell to itself")

    def render(self) -> str:
        return f"LINE {self.source} {self.target} {self.strength}"


@dataclass(frozen=True)
class Announce:
    text: str

    def render(self) -> str:
        # A ';' would split the command line.
        return f"MESSAGE {self.text.replace(';', ',')}"


Command = Union[Idle, Reinforce, Connect, Announce]


def format_actions(commands: Sequence[Command]) -> str:
    return ";".join(c.render() for c in commands) if commands else "WAIT"

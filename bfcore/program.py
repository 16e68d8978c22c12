"""
Program loading for the Brainfuck engine.

Source text is reduced to the eight instruction symbols (everything else is a
comment) and the brackets are paired up front, so loop jumps are a single
dictionary lookup at run time.
"""

from dataclasses import dataclass, field
from typing import Dict, List

INSTRUCTIONS = "><+-.,[]"


class ParseError(SyntaxError):
    """Raised when a program's brackets do not pair up."""

    def __init__(self, char: str, index: int):
        super().__init__(f"Unmatched '{char}' at index {index}")
        self.char = char
        self.index = index


@dataclass(frozen=True)
class Program:
    code: str = ""
    jump_table: Dict[int, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.code)

    def __getitem__(self, index: int) -> str:
        return self.code[index]


def filter_source(source: str) -> str:
    """Keep only valid BF commands."""
    return ''.join(c for c in source if c in INSTRUCTIONS)


def build_jump_table(code: str) -> Dict[int, int]:
    """Build a table mapping bracket positions for efficient jumping.

    Every '[' maps to its matching ']' and back. An unmatched ']' fails as
    soon as it is seen; leftover '[' fail with the index of the first one.
    """
    jump_table: Dict[int, int] = {}
    stack: List[int] = []

    for i, cmd in enumerate(code):
        if cmd == '[':
            stack.append(i)
        elif cmd == ']':
            if not stack:
                raise ParseError(']', i)
            start = stack.pop()
            jump_table[start] = i
            jump_table[i] = start

    if stack:
        raise ParseError('[', stack[0])

    return jump_table


def compile_program(source: str) -> Program:
    code = filter_source(source)
    return Program(code=code, jump_table=build_jump_table(code))

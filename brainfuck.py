#!/usr/bin/env python3
"""
Resumable Brainfuck Engine

Brainfuck is an esoteric programming language with only 8 commands:
    >   Move the pointer to the right (wrapping at the tape ends)
    <   Move the pointer to the left (wrapping at the tape ends)
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the character signified by the cell at the pointer
    ,   Input a character and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are treated as comments and ignored.

Unlike a run-to-completion interpreter, the engine keeps its whole state
between calls: step(n) executes at most n instructions and pauses, a ','
with no buffered input suspends with WAITING_FOR_INPUT until add_input()
supplies more, and get_state() can be called at any pause.

Cells are bounded to [min_value, max_value]; a '+' or '-' that would leave
that range stops the program with OVERFLOW_ERROR / UNDERFLOW_ERROR, leaving
the cell and the instruction pointer where they were.

step(None) runs until the program finishes, fails or waits for input. On a
program that never stops, it never returns; pass a finite budget when the
caller needs control back.
"""

from collections import deque
from typing import Optional

from bfcore.inspector import EngineState, snapshot
from bfcore.program import ParseError, Program, compile_program
from bfcore.status import ExecutionStatus
from bfcore.tape import (DEFAULT_TAPE_SIZE, MAX_SAFE_INTEGER, MIN_SAFE_INTEGER,
                         CellOverflow, CellUnderflow, Tape, check_tape_settings)

__all__ = ["BrainfuckEngine", "ExecutionStatus", "EngineState", "ParseError"]

_MAX_CODE_POINT = 0x10FFFF


def _to_char(value: int) -> str:
    if 0 <= value <= _MAX_CODE_POINT:
        return chr(value)
    # Out-of-range cells wrap into a byte
    return chr(value % 256)


class BrainfuckEngine:
    def __init__(self, tape_size: int = DEFAULT_TAPE_SIZE,
                 min_value: int = MIN_SAFE_INTEGER,
                 max_value: int = MAX_SAFE_INTEGER,
                 trace: bool = False):
        self.tape = Tape(tape_size, min_value, max_value)
        self.trace = trace
        self.reset()

    @property
    def tape_size(self) -> int:
        return self.tape.size

    @property
    def data_pointer(self) -> int:
        return self.tape.pointer

    def reset(self) -> None:
        """Drop the program and return to the freshly constructed state."""
        self.tape.clear()
        self.program = Program()
        self.instruction_pointer = 0
        self.input_buffer = deque()
        self.output = []
        self.total_steps = 0
        self.status = ExecutionStatus.READY

    def load(self, source: str, initial_input: str = "",
             tape_size: Optional[int] = None,
             min_value: Optional[int] = None,
             max_value: Optional[int] = None) -> None:
        """Reset the engine and load new source code.

        Tape size and value bounds, when given, replace the current ones
        (same as building a new engine with them). Raises ParseError on
        unbalanced brackets, leaving the engine in PARSER_ERROR.
        """
        if tape_size is not None or min_value is not None or max_value is not None:
            size = self.tape.size if tape_size is None else tape_size
            low = self.tape.min_value if min_value is None else min_value
            high = self.tape.max_value if max_value is None else max_value
            check_tape_settings(size, low, high)
            self.tape = Tape(size, low, high)

        self.reset()
        try:
            self.program = compile_program(source)
        except ParseError:
            self.status = ExecutionStatus.PARSER_ERROR
            raise

        self.input_buffer.extend(initial_input or "")
        self.status = ExecutionStatus.RUNNING if self.program.code else ExecutionStatus.FINISHED

    def add_input(self, text: str) -> ExecutionStatus:
        """Append to the input buffer. Never executes instructions."""
        self.input_buffer.extend(text)
        if self.status is ExecutionStatus.WAITING_FOR_INPUT:
            self.status = ExecutionStatus.RUNNING
        return self.status

    def get_output(self) -> str:
        return ''.join(self.output)

    def get_state(self, window_radius: Optional[int] = None) -> EngineState:
        """Snapshot of the engine; without a radius the whole tape is included."""
        return snapshot(
            status=self.status,
            program=self.program,
            tape=self.tape,
            instruction_pointer=self.instruction_pointer,
            output=self.get_output(),
            input_length=len(self.input_buffer),
            total_steps=self.total_steps,
            window_radius=window_radius,
        )

    def run(self, limit: Optional[int] = None) -> ExecutionStatus:
        """Run until the program stops, or for at most limit instructions."""
        return self.step(limit)

    def step(self, max_steps: Optional[int] = 1) -> ExecutionStatus:
        """Execute up to max_steps instructions (None = no cap) and return the status."""
        if max_steps is not None:
            if isinstance(max_steps, bool) or not isinstance(max_steps, int):
                raise TypeError(f"max_steps must be an int or None, got {max_steps!r}")
            if max_steps < 0:
                raise ValueError(f"max_steps must be >= 0, got {max_steps}")

        if self.status.is_terminal or max_steps == 0:
            return self.status
        if self.status is ExecutionStatus.WAITING_FOR_INPUT:
            if not self.input_buffer:
                return self.status
            self.status = ExecutionStatus.RUNNING

        code = self.program.code
        jump_table = self.program.jump_table
        tape = self.tape
        steps_taken = 0

        while max_steps is None or steps_taken < max_steps:
            if self.instruction_pointer >= len(code):
                self.status = ExecutionStatus.FINISHED
                break

            cmd = code[self.instruction_pointer]

            if self.trace:
                print(f"Step {self.total_steps:2d}: IP={self.instruction_pointer:2d} CMD='{cmd}' "
                      f"PTR={tape.pointer} CELL={tape.read()}")

            if cmd == '>':
                tape.move_right()

            elif cmd == '<':
                tape.move_left()

            elif cmd == '+' or cmd == '-':
                try:
                    if cmd == '+':
                        tape.increment()
                    else:
                        tape.decrement()
                except CellOverflow:
                    self.status = ExecutionStatus.OVERFLOW_ERROR
                    return self.status
                except CellUnderflow:
                    self.status = ExecutionStatus.UNDERFLOW_ERROR
                    return self.status

            elif cmd == '.':
                self.output.append(_to_char(tape.read()))

            elif cmd == ',':
                if not self.input_buffer:
                    # Retry the same ',' once input arrives
                    self.status = ExecutionStatus.WAITING_FOR_INPUT
                    return self.status
                try:
                    tape.write(ord(self.input_buffer[0]))
                except CellOverflow:
                    self.status = ExecutionStatus.OVERFLOW_ERROR
                    return self.status
                except CellUnderflow:
                    self.status = ExecutionStatus.UNDERFLOW_ERROR
                    return self.status
                self.input_buffer.popleft()

            elif cmd == '[':
                if tape.read() == 0:
                    self.instruction_pointer = jump_table[self.instruction_pointer]

            elif cmd == ']':
                if tape.read() != 0:
                    self.instruction_pointer = jump_table[self.instruction_pointer]

            self.instruction_pointer += 1
            steps_taken += 1
            self.total_steps += 1

        return self.status

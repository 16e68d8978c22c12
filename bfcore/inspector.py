"""
Read-only snapshots of a running or halted engine.
"""

import json
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from bfcore.program import Program
from bfcore.status import ExecutionStatus
from bfcore.tape import Tape

END_OF_PROGRAM = "EOF"


@dataclass(frozen=True)
class EngineState:
    """Point-in-time view of the engine."""
    status: ExecutionStatus
    instruction_pointer: int
    data_pointer: int
    tape_window: List[int]
    tape_window_start_index: int
    output: str
    input_buffer_length: int
    next_instruction: str
    total_steps: int

    @property
    def current_cell(self) -> Optional[int]:
        """Value under the data pointer, if the window includes it."""
        offset = self.data_pointer - self.tape_window_start_index
        if 0 <= offset < len(self.tape_window):
            return self.tape_window[offset]
        return None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['status'] = self.status.value
        return data

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def snapshot(status: ExecutionStatus, program: Program, tape: Tape,
             instruction_pointer: int, output: str, input_length: int,
             total_steps: int, window_radius: Optional[int] = None) -> EngineState:
    """Build an EngineState. Only the requested tape window is copied."""
    start, view = tape.window(window_radius)
    if instruction_pointer < len(program):
        next_instruction = program[instruction_pointer]
    else:
        next_instruction = END_OF_PROGRAM

    return EngineState(
        status=status,
        instruction_pointer=instruction_pointer,
        data_pointer=tape.pointer,
        tape_window=view.tolist(),
        tape_window_start_index=start,
        output=output,
        input_buffer_length=input_length,
        next_instruction=next_instruction,
        total_steps=total_steps,
    )

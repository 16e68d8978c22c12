"""
Named debugger operations over a single engine.

Each method takes plain arguments and returns the text reply a tool-dispatch
layer sends back to its caller. One DebugSession owns one engine; callers that
share a session must not issue overlapping calls.
"""

from typing import Optional

from brainfuck import BrainfuckEngine
from bfcore.config import EngineConfig
from bfcore.inspector import EngineState
from bfcore.program import ParseError
from bfcore.status import ExecutionStatus


def summarize(status: ExecutionStatus, state: EngineState) -> str:
    """Human-readable summary after a step or run."""
    if status is ExecutionStatus.FINISHED:
        msg = f'Program Finished in {state.total_steps} steps.\nOutput: "{state.output}"'
    elif status is ExecutionStatus.WAITING_FOR_INPUT:
        msg = f'PAUSED: Waiting for Input at step {state.total_steps}.\nOutput so far: "{state.output}"'
    else:
        msg = f"Status: {status.value}"
    msg += f"\nPointer at [{state.data_pointer}]: {state.current_cell}"
    return msg


class DebugSession:
    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.engine = self._new_engine(self.config)

    @staticmethod
    def _new_engine(config: EngineConfig) -> BrainfuckEngine:
        return BrainfuckEngine(config.tape_size, config.min_value, config.max_value, trace=config.trace)

    def load_code(self, code: str, initial_input: Optional[str] = None,
                  tape_size: Optional[int] = None,
                  min_value: Optional[int] = None,
                  max_value: Optional[int] = None) -> str:
        """Reset the debugger and load new source code."""
        config = self.config.merged(tape_size=tape_size, min_value=min_value,
                                    max_value=max_value).validate()
        self.engine = self._new_engine(config)
        try:
            self.engine.load(code, initial_input or "")
        except ParseError as e:
            return f"Parser Error: {e}"
        return "Code loaded. Engine reset."

    def step(self, count: int = 1) -> str:
        """Execute count instructions and summarize the resulting state."""
        if count < 1:
            raise ValueError(f"count must be >= 1, got {count}")
        return self._advance(count)

    def run(self, limit: Optional[int] = None) -> str:
        """Run until the program finishes or waits for input.

        Without a limit an endless program blocks the caller for good.
        """
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        return self._advance(limit)

    def _advance(self, count: Optional[int]) -> str:
        status = self.engine.step(count)
        # Only the cell under the pointer is reported
        state = self.engine.get_state(window_radius=0)
        return summarize(status, state)

    def add_input(self, text: str) -> str:
        status = self.engine.add_input(text)
        return f"Input added. Status: {status.value}"

    def get_state(self, window_radius: Optional[int] = None) -> str:
        return self.engine.get_state(window_radius).to_json(indent=2)

    def read_output(self) -> str:
        return self.engine.get_output()

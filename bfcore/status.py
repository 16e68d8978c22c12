from enum import Enum


class ExecutionStatus(Enum):
    READY = "READY"
    RUNNING = "RUNNING"
    WAITING_FOR_INPUT = "WAITING_FOR_INPUT"
    FINISHED = "FINISHED"
    PARSER_ERROR = "PARSER_ERROR"
    OVERFLOW_ERROR = "OVERFLOW_ERROR"
    UNDERFLOW_ERROR = "UNDERFLOW_ERROR"

    @property
    def is_terminal(self) -> bool:
        """No further instruction can run until a new program is loaded."""
        return self is ExecutionStatus.FINISHED or self.name.endswith("_ERROR")

    def __str__(self) -> str:
        return self.value

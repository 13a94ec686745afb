"""
Generation flow state machine: idle -> generating -> done | error.
"""
from enum import Enum


class FlowStatus(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    DONE = "done"
    ERROR = "error"


class FlowBusyError(Exception):
    """Raised when a flow is started while it is already generating."""
    pass


class FlowState:
    """
    Status flag plus the human-readable status line shown by the page.

    Only ``begin`` may leave idle/done/error; the terminal states are entered
    from generating.
    """

    def __init__(self):
        self.status = FlowStatus.IDLE
        self.message = ""

    @property
    def is_generating(self) -> bool:
        return self.status == FlowStatus.GENERATING

    def begin(self, message: str) -> None:
        if self.is_generating:
            raise FlowBusyError("Generation already in progress")
        self.status = FlowStatus.GENERATING
        self.message = message

    def update(self, message: str) -> None:
        self.message = message

    def finish(self, message: str = "") -> None:
        self._leave(FlowStatus.DONE, message)

    def fail(self, message: str = "") -> None:
        self._leave(FlowStatus.ERROR, message)

    def reset(self) -> None:
        self.status = FlowStatus.IDLE
        self.message = ""

    def _leave(self, status: FlowStatus, message: str) -> None:
        if not self.is_generating:
            raise RuntimeError(f"Cannot move to {status.value} from {self.status.value}")
        self.status = status
        self.message = message

    def to_dict(self) -> dict:
        return {"status": self.status.value, "message": self.message}

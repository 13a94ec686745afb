"""
Generation job model shared by the gateway and the poller.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class JobKind(str, Enum):
    """Kind of media a job produces."""
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


class JobStatus(str, Enum):
    """Prediction statuses reported by the provider."""
    STARTING = "starting"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"


FAILURE_STATUSES = frozenset({JobStatus.FAILED.value, JobStatus.CANCELED.value})


@dataclass
class GenerationJob:
    """
    One asynchronous unit of work submitted to a provider.

    ``status`` keeps the provider's own string so unknown states pass through
    untouched; ``output`` is the raw provider output (a URL or a list of URLs).
    """
    id: str
    kind: JobKind
    status: str
    output: Any = None
    error: Optional[str] = None

    @classmethod
    def from_prediction(cls, kind: JobKind, prediction: Dict[str, Any]) -> "GenerationJob":
        return cls(
            id=prediction.get("id"),
            kind=kind,
            status=prediction.get("status"),
            output=prediction.get("output"),
            error=prediction.get("error"),
        )

    @property
    def succeeded(self) -> bool:
        return self.status == JobStatus.SUCCEEDED.value

    @property
    def failed(self) -> bool:
        return self.status in FAILURE_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self.succeeded or self.failed

    @property
    def output_url(self) -> Optional[str]:
        """First output URL; image models return a list, video models a string."""
        if isinstance(self.output, list):
            return self.output[0] if self.output else None
        return self.output or None

"""
Jobs: generation job model, poller and batch orchestrator.
"""
from .models import GenerationJob, JobKind, JobStatus
from .poller import IMAGE_POLL, VIDEO_POLL, JobPoller, PollPolicy
from .batch import BatchOrchestrator

__all__ = [
    "GenerationJob",
    "JobKind",
    "JobStatus",
    "JobPoller",
    "PollPolicy",
    "IMAGE_POLL",
    "VIDEO_POLL",
    "BatchOrchestrator",
]

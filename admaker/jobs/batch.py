"""
Batch Orchestrator - grouped fan-out of independent generation tasks.

Tasks run concurrently inside a group of ``group_size``; the next group starts
only when every task of the current one has settled. Each result lands in the
slot of its original index, whatever order the tasks finish in.
"""
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

TaskFactory = Callable[[], Awaitable[Optional[T]]]
SlotCallback = Callable[[int, Optional[T]], None]
GroupCallback = Callable[[int, int], None]

DEFAULT_GROUP_SIZE = 3


class BatchOrchestrator:
    """
    Run task factories in fixed-size groups.

    Key behaviours:
    1. Factories are called lazily, so a group's requests start together
    2. A raising task resolves its slot to None; the batch carries on
    3. ``on_slot`` fires once per slot, in completion order
    """

    def __init__(self, group_size: int = DEFAULT_GROUP_SIZE):
        if group_size < 1:
            raise ValueError("group_size must be at least 1")
        self.group_size = group_size

    async def run(
        self,
        tasks: Sequence[TaskFactory],
        slots: Optional[List[Optional[T]]] = None,
        on_slot: Optional[SlotCallback] = None,
        on_group: Optional[GroupCallback] = None,
    ) -> List[Optional[T]]:
        """
        Execute ``tasks`` group by group.

        Args:
            tasks: Zero-argument callables returning awaitables
            slots: Existing result list to write into (same length as tasks)
            on_slot: Called with (index, result) as each slot resolves
            on_group: Called with (group_index, group_count) before a group starts

        Returns:
            The slot list
        """
        if slots is None:
            slots = [None] * len(tasks)
        elif len(slots) != len(tasks):
            raise ValueError(f"Expected {len(tasks)} slots, got {len(slots)}")

        group_count = (len(tasks) + self.group_size - 1) // self.group_size
        logger.info(f"[BATCH] Running {len(tasks)} tasks in {group_count} groups of {self.group_size}")

        for group_index in range(group_count):
            start = group_index * self.group_size
            indices = range(start, min(start + self.group_size, len(tasks)))

            if on_group:
                on_group(group_index, group_count)

            await asyncio.gather(*(
                self._run_slot(index, tasks[index], slots, on_slot) for index in indices
            ))

        succeeded = sum(1 for slot in slots if slot is not None)
        logger.info(f"[BATCH] {succeeded}/{len(tasks)} slots resolved")
        return slots

    async def _run_slot(
        self,
        index: int,
        factory: TaskFactory,
        slots: List[Optional[T]],
        on_slot: Optional[SlotCallback],
    ) -> None:
        try:
            result = await factory()
        except Exception as e:
            logger.error(f"[BATCH] Task {index + 1} failed: {e}")
            result = None

        slots[index] = result
        if on_slot:
            on_slot(index, result)

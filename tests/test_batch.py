"""
Tests for grouped fan-out.
"""
import asyncio
import functools

import pytest

from admaker.jobs import BatchOrchestrator


def test_rejects_empty_groups():
    with pytest.raises(ValueError):
        BatchOrchestrator(group_size=0)


def test_results_land_in_their_own_slot():
    async def task(index, delay):
        await asyncio.sleep(delay)
        return f"result-{index}"

    # Later indices finish first within each group
    delays = [0.03, 0.02, 0.01, 0.03, 0.02, 0.01, 0.02]
    tasks = [functools.partial(task, i, d) for i, d in enumerate(delays)]
    completed = []

    slots = asyncio.run(BatchOrchestrator(3).run(tasks, on_slot=lambda i, r: completed.append(i)))

    assert slots == [f"result-{i}" for i in range(7)]
    assert completed[:3] == [2, 1, 0]
    assert sorted(completed) == list(range(7))


def test_groups_run_one_after_another():
    running = 0
    peak = 0
    order = []

    async def task(index):
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        order.append(index)
        await asyncio.sleep(0.01)
        running -= 1
        return index

    groups = []
    tasks = [functools.partial(task, i) for i in range(8)]
    asyncio.run(BatchOrchestrator(3).run(tasks, on_group=lambda g, n: groups.append((g, n))))

    assert peak == 3
    assert groups == [(0, 3), (1, 3), (2, 3)]
    assert sorted(order[:3]) == [0, 1, 2]
    assert sorted(order[3:6]) == [3, 4, 5]


def test_failing_task_resolves_to_none():
    async def ok(value):
        return value

    async def boom():
        raise RuntimeError("provider exploded")

    tasks = [functools.partial(ok, "a"), boom, functools.partial(ok, "c"), functools.partial(ok, "d")]
    seen = {}

    slots = asyncio.run(BatchOrchestrator(3).run(tasks, on_slot=seen.__setitem__))

    assert slots == ["a", None, "c", "d"]
    assert seen == {0: "a", 1: None, 2: "c", 3: "d"}


def test_writes_into_existing_slots():
    async def value(v):
        return v

    slots = ["old", "old"]
    result = asyncio.run(BatchOrchestrator().run([functools.partial(value, 1), functools.partial(value, 2)], slots))

    assert result is slots
    assert slots == [1, 2]


def test_slot_count_must_match():
    async def value():
        return 1

    with pytest.raises(ValueError):
        asyncio.run(BatchOrchestrator().run([value], slots=[None, None]))


def test_empty_batch():
    assert asyncio.run(BatchOrchestrator().run([])) == []

"""固定延迟调度器测试。

大部分用例使用假时钟 + 记录型调度器驱动；最后一个用例用真实的 AsyncIOScheduler 做短时校验。
"""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timedelta, timezone

import pytest

from openapi_loader.infrastructure.scheduler.fixed_delay import FixedDelayScheduler

from scheduler_fakes import FakeClock, RecordingScheduler

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def _scheduler(job, clock: FakeClock, backend: RecordingScheduler) -> FixedDelayScheduler:
    return FixedDelayScheduler(
        job,
        initial_delay=timedelta(minutes=5),
        interval=timedelta(minutes=30),
        job_id="refresh",
        scheduler=backend,
        clock=clock,
    )


@pytest.mark.asyncio
async def test_first_run_waits_for_initial_delay() -> None:
    clock = FakeClock(T0)
    backend = RecordingScheduler()

    async def job() -> None:
        return None

    scheduler = _scheduler(job, clock, backend)
    scheduler.start()

    assert backend.running is True
    assert scheduler.running is True
    assert backend.run_dates == [T0 + timedelta(minutes=5)]


@pytest.mark.asyncio
async def test_next_run_is_interval_after_completion() -> None:
    """固定延迟：下一次时间从上一次执行结束算起。"""

    clock = FakeClock(T0)
    backend = RecordingScheduler()
    calls: list[datetime] = []

    async def slow_job() -> None:
        calls.append(clock())
        clock.advance(timedelta(minutes=2))  # 模拟耗时 2 分钟

    scheduler = _scheduler(slow_job, clock, backend)
    scheduler.start()

    clock.advance(timedelta(minutes=5))
    await backend.fire("refresh")
    assert backend.run_dates[-1] == T0 + timedelta(minutes=5 + 2 + 30)

    clock.now = backend.run_dates[-1]
    await backend.fire("refresh")
    assert backend.run_dates[-1] == T0 + timedelta(minutes=37 + 2 + 30)

    assert calls == [T0 + timedelta(minutes=5), T0 + timedelta(minutes=37)]


@pytest.mark.asyncio
async def test_failing_job_is_still_rescheduled() -> None:
    clock = FakeClock(T0)
    backend = RecordingScheduler()

    async def broken_job() -> None:
        raise RuntimeError("boom")

    scheduler = _scheduler(broken_job, clock, backend)
    scheduler.start()

    with pytest.raises(RuntimeError):
        await backend.fire("refresh")

    assert "refresh" in backend.jobs
    assert backend.run_dates[-1] == T0 + timedelta(minutes=30)


@pytest.mark.asyncio
async def test_shutdown_stops_rescheduling() -> None:
    clock = FakeClock(T0)
    backend = RecordingScheduler()
    calls = 0

    async def job() -> None:
        nonlocal calls
        calls += 1

    scheduler = _scheduler(job, clock, backend)
    scheduler.start()
    func, _ = backend.jobs["refresh"]

    scheduler.shutdown()
    assert backend.jobs == {}
    assert backend.running is False

    # 已经在执行中的任务结束后不会再登记
    await func()
    assert calls == 1
    assert backend.jobs == {}


def test_start_is_idempotent() -> None:
    clock = FakeClock(T0)
    backend = RecordingScheduler()

    async def job() -> None:
        return None

    scheduler = _scheduler(job, clock, backend)
    scheduler.start()
    scheduler.start()

    assert len(backend.run_dates) == 1


@pytest.mark.parametrize(
    "initial_delay, interval",
    [
        (timedelta(seconds=-1), timedelta(minutes=1)),
        (timedelta(0), timedelta(0)),
        (timedelta(0), timedelta(seconds=-5)),
    ],
)
def test_invalid_delays_are_rejected(initial_delay: timedelta, interval: timedelta) -> None:
    async def job() -> None:
        return None

    with pytest.raises(ValueError):
        FixedDelayScheduler(job, initial_delay=initial_delay, interval=interval, scheduler=RecordingScheduler())


@pytest.mark.asyncio
async def test_real_scheduler_spacing() -> None:
    """真实 AsyncIOScheduler：首次执行不早于初始延迟，相邻执行间隔不小于 interval。"""

    initial_delay = 0.1
    interval = 0.2
    starts: list[float] = []
    ends: list[float] = []
    done = asyncio.Event()

    async def job() -> None:
        starts.append(time.monotonic())
        await asyncio.sleep(0.05)
        ends.append(time.monotonic())
        if len(ends) >= 3:
            done.set()

    scheduler = FixedDelayScheduler(
        job,
        initial_delay=timedelta(seconds=initial_delay),
        interval=timedelta(seconds=interval),
        job_id="real",
    )
    began = time.monotonic()
    scheduler.start()
    try:
        await asyncio.wait_for(done.wait(), timeout=5)
    finally:
        scheduler.shutdown()

    tolerance = 0.02
    assert starts[0] - began >= initial_delay - tolerance
    for previous_end, next_start in zip(ends, starts[1:]):
        assert next_start - previous_end >= interval - tolerance


@pytest.mark.asyncio
async def test_real_scheduler_keeps_running_when_next_run_is_already_due() -> None:
    """interval 极小时，下一次登记时已到期，调度链也不能中断。"""

    calls = 0
    done = asyncio.Event()

    async def job() -> None:
        nonlocal calls
        calls += 1
        if calls >= 5:
            done.set()

    scheduler = FixedDelayScheduler(
        job,
        initial_delay=timedelta(0),
        interval=timedelta(microseconds=1),
        job_id="tight",
    )
    scheduler.start()
    try:
        await asyncio.wait_for(done.wait(), timeout=5)
    finally:
        scheduler.shutdown()

    assert calls >= 5

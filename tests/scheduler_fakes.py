"""调度相关的测试替身（假时钟、记录型 APScheduler）。"""

from __future__ import annotations

from datetime import datetime, timedelta


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class RecordingScheduler:
    """只记录登记动作的 APScheduler 替身。"""

    def __init__(self) -> None:
        self.running = False
        self.jobs: dict[str, tuple] = {}
        self.run_dates: list[datetime] = []

    def start(self) -> None:
        self.running = True

    def add_job(self, func, trigger, id, replace_existing, misfire_grace_time, max_instances):
        assert replace_existing is True
        assert max_instances >= 2
        self.jobs[id] = (func, trigger)
        self.run_dates.append(trigger.run_date)

    def get_job(self, job_id):
        return self.jobs.get(job_id)

    def remove_job(self, job_id):
        del self.jobs[job_id]

    def shutdown(self, wait=True):
        self.running = False

    async def fire(self, job_id: str) -> None:
        """模拟 APScheduler：一次性任务触发后先移除再执行。"""
        func, _ = self.jobs.pop(job_id)
        await func()

"""Tests for daily reminder scheduling."""

import asyncio
from datetime import datetime, timedelta

import pytest

from micro_tutor.reminders import ReminderScheduler, next_fire_time, parse_time


class TestNextFireTime:
    def test_later_today(self):
        now = datetime(2026, 3, 10, 7, 0)
        assert next_fire_time("08:30", now) == datetime(2026, 3, 10, 8, 30)

    def test_already_passed_rolls_to_tomorrow(self):
        now = datetime(2026, 3, 10, 9, 0)
        assert next_fire_time("08:30", now) == datetime(2026, 3, 11, 8, 30)

    def test_exact_time_rolls_to_tomorrow(self):
        now = datetime(2026, 3, 10, 8, 30)
        assert next_fire_time("08:30", now) == datetime(2026, 3, 11, 8, 30)

    @pytest.mark.parametrize("value", ["", "8", "25:00", "08:61", "ab:cd"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_time(value)


class TestReminderScheduler:
    async def test_fires_and_reschedules(self, monkeypatch):
        delays = []
        real_sleep = asyncio.sleep

        async def fake_sleep(delay):
            delays.append(delay)
            await real_sleep(0)

        monkeypatch.setattr("micro_tutor.reminders.asyncio.sleep", fake_sleep)

        fired = []

        async def callback(at):
            fired.append(at)

        scheduler = ReminderScheduler(clock=lambda: datetime(2026, 3, 10, 8, 0))
        handle = scheduler.schedule_daily("user_1", "08:30", callback)
        for _ in range(10):
            await real_sleep(0)
        handle.cancel()

        assert len(fired) >= 2
        assert fired[0] == datetime(2026, 3, 10, 8, 30)
        assert fired[1] == datetime(2026, 3, 11, 8, 30)
        assert delays[0] == 30 * 60
        assert delays[1] == 24 * 3600 + 30 * 60

    async def test_early_wake_up_fires_once_per_day(self, monkeypatch):
        real_sleep = asyncio.sleep
        # Wall clock reads just short of the target after every sleep
        now = [datetime(2026, 3, 10, 8, 0)]

        async def fake_sleep(delay):
            now[0] = now[0] + timedelta(seconds=delay) - timedelta(milliseconds=5)
            await real_sleep(0)

        monkeypatch.setattr("micro_tutor.reminders.asyncio.sleep", fake_sleep)
        fired = []

        async def callback(at):
            fired.append(at)

        scheduler = ReminderScheduler(clock=lambda: now[0])
        handle = scheduler.schedule_daily("user_1", "08:30", callback)
        for _ in range(10):
            await real_sleep(0)
        handle.cancel()

        assert len(fired) >= 2
        assert len(set(fired)) == len(fired)
        assert fired[:2] == [datetime(2026, 3, 10, 8, 30), datetime(2026, 3, 11, 8, 30)]

    async def test_shutdown_waits_for_loops(self):
        scheduler = ReminderScheduler()

        async def callback(at):
            pass

        first = scheduler.schedule_daily("user_1", "06:00", callback)
        second = scheduler.schedule_daily("user_2", "07:00", callback)
        await scheduler.shutdown()

        assert first.task.done() and second.task.done()
        assert first.task.cancelled() and second.task.cancelled()
        assert scheduler.get("user_1") is None

    async def test_replacing_cancels_previous(self):
        scheduler = ReminderScheduler()

        async def callback(at):
            pass

        first = scheduler.schedule_daily("user_1", "06:00", callback)
        second = scheduler.schedule_daily("user_1", "07:00", callback)
        for _ in range(3):
            await asyncio.sleep(0)

        assert not first.active
        assert second.active
        assert scheduler.get("user_1") is second
        scheduler.cancel_all()
        for _ in range(3):
            await asyncio.sleep(0)
        assert not second.active

    async def test_callback_error_does_not_stop_loop(self, monkeypatch):
        real_sleep = asyncio.sleep

        async def fake_sleep(delay):
            await real_sleep(0)

        monkeypatch.setattr("micro_tutor.reminders.asyncio.sleep", fake_sleep)
        calls = []

        async def callback(at):
            calls.append(at)
            raise RuntimeError("push failed")

        scheduler = ReminderScheduler(clock=lambda: datetime(2026, 3, 10, 8, 0))
        handle = scheduler.schedule_daily("user_1", "09:00", callback)
        for _ in range(10):
            await real_sleep(0)
        handle.cancel()
        assert len(calls) >= 2

    def test_invalid_time_rejected(self):
        with pytest.raises(ValueError):
            ReminderScheduler().schedule_daily("user_1", "99:99", None)

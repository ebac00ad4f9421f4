"""Daily study reminders."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, time, timedelta

import structlog

logger = structlog.get_logger()

ReminderCallback = Callable[[datetime], Awaitable[None]]


def parse_time(value: str) -> time:
    """Parse ``HH:MM`` into a time. Raises ValueError if malformed."""
    hours, _, minutes = value.partition(":")
    if not (hours.isdigit() and minutes.isdigit()):
        raise ValueError(f"Invalid reminder time: {value!r}")
    return time(int(hours), int(minutes))


def next_fire_time(value: str, now: datetime) -> datetime:
    """Next occurrence of ``HH:MM`` strictly after ``now``."""
    at = datetime.combine(now.date(), parse_time(value))
    if at <= now:
        at += timedelta(days=1)
    return at


class ReminderHandle:
    """A running daily reminder."""

    def __init__(self, time_of_day: str, task: asyncio.Task):
        self.time_of_day = time_of_day
        self.task = task

    @property
    def active(self) -> bool:
        return not self.task.done()

    def cancel(self) -> None:
        self.task.cancel()


class ReminderScheduler:
    """Runs one reminder loop per key, replacing any earlier one for that key.

    Args:
        clock: Returns the current time.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock
        self._handles: dict[str, ReminderHandle] = {}

    def schedule_daily(self, key: str, time_of_day: str, callback: ReminderCallback) -> ReminderHandle:
        """Start calling ``callback`` every day at ``time_of_day``.

        Must be called from a running event loop.

        Raises:
            ValueError: ``time_of_day`` is not a valid ``HH:MM``.
        """
        parse_time(time_of_day)
        self.cancel(key)
        task = asyncio.get_running_loop().create_task(self._run(key, time_of_day, callback))
        handle = ReminderHandle(time_of_day, task)
        self._handles[key] = handle
        logger.info("reminder_scheduled", key=key, time=time_of_day)
        return handle

    def get(self, key: str) -> ReminderHandle | None:
        return self._handles.get(key)

    def cancel(self, key: str) -> None:
        handle = self._handles.pop(key, None)
        if handle is not None:
            handle.cancel()

    def cancel_all(self) -> None:
        for key in list(self._handles):
            self.cancel(key)

    async def shutdown(self) -> None:
        """Cancel every reminder and wait for the loops to exit."""
        tasks = [handle.task for handle in self._handles.values()]
        self.cancel_all()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(self, key: str, time_of_day: str, callback: ReminderCallback) -> None:
        fire_at = next_fire_time(time_of_day, self._clock())
        while True:
            delay = (fire_at - self._clock()).total_seconds()
            await asyncio.sleep(max(delay, 0.0))
            try:
                await callback(fire_at)
            except Exception:
                logger.exception("reminder_callback_failed", key=key)
            # Next occurrence counts from the scheduled time, never from the clock
            fire_at += timedelta(days=1)

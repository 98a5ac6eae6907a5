"""
Cancellable scheduled tasks.

The controller never holds raw timer handles. It schedules through a
Scheduler and keeps the returned ScheduledTask, whose ``cancel()`` is safe
to call at any time, any number of times.
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Optional


class ScheduledTask:
    """Handle for a one-shot or repeating callback."""

    def __init__(self, repeating: bool = False):
        self.repeating = repeating
        self._cancelled = False
        self._finished = False
        self._cancel_hook: Optional[Callable[[], None]] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        """True until the task fires (one-shot) or is cancelled."""
        return not (self._cancelled or self._finished)

    def bind(self, cancel_hook: Callable[[], None]) -> None:
        """Attach the backend's cancel function for the currently armed timer."""
        self._cancel_hook = cancel_hook

    def finish(self) -> None:
        """Mark a one-shot task as fired."""
        self._finished = True
        self._cancel_hook = None

    def cancel(self) -> bool:
        """
        Cancel the task.

        Returns:
            True if the task was active, False if it had already fired or
            been cancelled
        """
        if not self.active:
            return False
        self._cancelled = True
        hook, self._cancel_hook = self._cancel_hook, None
        if hook is not None:
            hook()
        return True


class Scheduler(ABC):
    """
    Abstract time source and timer backend.

    Implementations must run callbacks on the same thread as the caller.
    """

    @abstractmethod
    def now(self) -> float:
        """Current time in seconds on the scheduler's clock."""
        pass

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        """Run ``callback`` once after ``delay`` seconds."""
        pass

    @abstractmethod
    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask:
        """Run ``callback`` every ``interval`` seconds until cancelled."""
        pass


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """
        Args:
            loop: Event loop to use; defaults to the running loop at first use

        Scheduling without a running loop raises RuntimeError.
        """
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask()

        def fire():
            if not task.active:
                return
            task.finish()
            callback()

        handle = self.loop.call_later(delay, fire)
        task.bind(handle.cancel)
        return task

    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(repeating=True)
        loop = self.loop

        def fire():
            if not task.active:
                return
            # Re-arm first so a callback that cancels the task cancels the next run
            handle = loop.call_later(interval, fire)
            task.bind(handle.cancel)
            callback()

        first = loop.call_later(interval, fire)
        task.bind(first.cancel)
        return task


class TaskSlot:
    """Holds at most one task; installing a new one cancels the old one."""

    def __init__(self, name: str = ""):
        self.name = name
        self.task: Optional[ScheduledTask] = None

    @property
    def pending(self) -> bool:
        return self.task is not None and self.task.active

    def replace(self, task: Optional[ScheduledTask]) -> Optional[ScheduledTask]:
        """Cancel the current task (if any) and hold ``task`` instead."""
        self.cancel()
        self.task = task
        return task

    def cancel(self) -> bool:
        """Cancel and drop the held task; True if something was cancelled."""
        task, self.task = self.task, None
        if task is None:
            return False
        return task.cancel()

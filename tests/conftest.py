"""
Pytest configuration and global fixtures.
"""
import heapq
import itertools
import sys
from pathlib import Path

import pytest
from loguru import logger

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.models import Branch, Person
from interaction.controller import OrgChartController
from interaction.scheduler import ScheduledTask, Scheduler
from serving.org_chart_service import OrgChartService


class ManualScheduler(Scheduler):
    """Virtual-clock scheduler; time only moves when a test calls advance()."""

    def __init__(self):
        self.time = 0.0
        self._queue = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self.time

    def _push(self, due, task, fire):
        heapq.heappush(self._queue, (due, next(self._seq), task, fire))

    def call_later(self, delay, callback):
        task = ScheduledTask()

        def fire():
            task.finish()
            callback()

        self._push(self.time + delay, task, fire)
        return task

    def call_every(self, interval, callback):
        task = ScheduledTask(repeating=True)

        def fire():
            self._push(self.time + interval, task, fire)
            callback()

        self._push(self.time + interval, task, fire)
        return task

    def advance(self, seconds):
        """Move the clock forward, firing due callbacks in order."""
        target = self.time + seconds
        while self._queue and self._queue[0][0] <= target + 1e-9:
            due, _, task, fire = heapq.heappop(self._queue)
            self.time = max(self.time, due)
            if task.active:
                fire()
        self.time = target

    @property
    def pending(self) -> int:
        return sum(1 for _, _, task, _ in self._queue if task.active)


class BrokenScheduler(Scheduler):
    """Scheduler whose timers are unavailable (no event loop)."""

    def now(self):
        return 0.0

    def call_later(self, delay, callback):
        raise RuntimeError("no running event loop")

    def call_every(self, interval, callback):
        raise RuntimeError("no running event loop")


@pytest.fixture
def manual_scheduler():
    """Deterministic scheduler driven by advance()."""
    return ManualScheduler()


@pytest.fixture
def broken_scheduler():
    return BrokenScheduler()


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def sample_entities():
    """
    Small organization:

        HQ (branch)
        ├── Alice Johnson (CEO)
        │   ├── Bob Smith (CTO)
        │   │   └── Dave Brown (Engineer)
        │   └── Carol White (CFO)
        West (branch)
        └── Erin Green (Sales)
    """
    return [
        Person(id='2', first_name='Bob', last_name='Smith', role='CTO', reports_to='1', branch_id='hq'),
        Person(id='1', first_name='Alice', last_name='Johnson', role='CEO', reports_to='hq', branch_id='hq'),
        Branch(id='hq', first_name='HQ', role='Head Office'),
        Person(id='4', first_name='Dave', last_name='Brown', role='Engineer', reports_to='2', branch_id='hq'),
        Person(id='3', first_name='Carol', last_name='White', role='CFO', reports_to='1', branch_id='hq'),
        Branch(id='west', first_name='West', role='Regional Office'),
        Person(id='5', first_name='Erin', last_name='Green', role='Sales', reports_to='west', branch_id='west'),
    ]


@pytest.fixture
def chart(sample_entities):
    """Chart service over the sample entities."""
    return OrgChartService(sample_entities)


@pytest.fixture
def controller(chart, manual_scheduler):
    """Controller with default timings on the manual scheduler."""
    ctrl = OrgChartController(chart, manual_scheduler)
    yield ctrl
    ctrl.dispose()


@pytest.fixture
def recorder(controller):
    """Record every controller event as (name, detail) pairs."""
    events = []
    for name in ('select', 'activate', 'hierarchyChange', 'delete', 'longPressProgress', 'error'):
        controller.on(name, lambda detail, name=name: events.append((name, detail)))
    return events

"""Interaction package - Scheduling, state machine and the chart controller."""

from .scheduler import ScheduledTask, Scheduler, AsyncioScheduler, TaskSlot
from .state import InteractionMode, InteractionState, PendingClick, Dragging, LongPress
from .events import EventEmitter
from .controller import OrgChartController

__all__ = [
    'ScheduledTask',
    'Scheduler',
    'AsyncioScheduler',
    'TaskSlot',
    'InteractionMode',
    'InteractionState',
    'PendingClick',
    'Dragging',
    'LongPress',
    'EventEmitter',
    'OrgChartController',
]

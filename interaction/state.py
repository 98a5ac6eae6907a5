"""
Interaction state machine.

Two independent tracks:
- click: a first click waiting out the double-click window
- gesture: a drag or a long-press, at most one at a time

Each track owns one task slot, so leaving a track's state always cancels
its timer without touching the other track. A tile double-click arrives as
pointer-down/up/click twice, so a long-press starting must not cancel the
pending click.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .scheduler import ScheduledTask, TaskSlot


class InteractionMode(Enum):
    IDLE = "idle"
    PENDING_CLICK = "pending_click"
    DRAGGING = "dragging"
    LONG_PRESSING = "long_pressing"


@dataclass
class PendingClick:
    """A first click waiting to see whether a second one follows."""
    node_id: str


@dataclass
class Dragging:
    """A tile being dragged, and the tile currently under the pointer."""
    dragged_id: str
    drop_target_id: Optional[str] = None


@dataclass
class LongPress:
    """A held pointer counting down to deletion."""
    target_id: str
    origin_x: float
    origin_y: float
    started_at: float
    progress: float = 0.0


Gesture = Union[Dragging, LongPress]
ModePayload = Union[PendingClick, Dragging, LongPress]

_GESTURE_MODES = {
    Dragging: InteractionMode.DRAGGING,
    LongPress: InteractionMode.LONG_PRESSING,
}


class InteractionState:
    """Pending click plus the active gesture, each with its own task slot."""

    def __init__(self):
        self.click: Optional[PendingClick] = None
        self.gesture: Optional[Gesture] = None
        self._click_slot = TaskSlot("click")
        self._gesture_slot = TaskSlot("gesture")

    @property
    def mode(self) -> InteractionMode:
        """Active gesture mode, else PENDING_CLICK, else IDLE."""
        if self.gesture is not None:
            return _GESTURE_MODES[type(self.gesture)]
        if self.click is not None:
            return InteractionMode.PENDING_CLICK
        return InteractionMode.IDLE

    @property
    def has_pending_task(self) -> bool:
        return self._click_slot.pending or self._gesture_slot.pending

    def enter(self, payload: ModePayload, task: Optional[ScheduledTask] = None) -> ModePayload:
        """
        Install a payload on its track, cancelling that track's old task.

        Args:
            payload: PendingClick for the click track, Dragging or LongPress
                for the gesture track
            task: Timer owned by the new state, if any

        Returns:
            The installed payload
        """
        if isinstance(payload, PendingClick):
            self._click_slot.replace(task)
            self.click = payload
        else:
            self._gesture_slot.replace(task)
            self.gesture = payload
        return payload

    def clear_click(self) -> None:
        self._click_slot.cancel()
        self.click = None

    def clear_gesture(self) -> None:
        self._gesture_slot.cancel()
        self.gesture = None

    def clear(self) -> None:
        """Return to idle, cancelling every outstanding task."""
        self.clear_click()
        self.clear_gesture()

    @property
    def pending_click(self) -> Optional[PendingClick]:
        return self.click

    @property
    def dragging(self) -> Optional[Dragging]:
        return self.gesture if isinstance(self.gesture, Dragging) else None

    @property
    def long_press(self) -> Optional[LongPress]:
        return self.gesture if isinstance(self.gesture, LongPress) else None

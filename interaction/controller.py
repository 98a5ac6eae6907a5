"""
Org Chart Interaction Controller

Turns raw pointer input into chart intents:
- click / double-click disambiguation (select vs. activate)
- drag-and-drop reparenting, unlinking and deletion
- long-press deletion with a progress countdown
- selection and highlight state

Structural changes go through OrgChartService, which mutates the caller's
entity list and rebuilds the forest before the next render.
"""
import math
from typing import Callable, Optional

from loguru import logger

from core.constants import (
    CONTROLLER_EVENTS,
    DOUBLE_CLICK_DELAY_MS,
    ERROR_REPARENT_CYCLE,
    ERROR_SCHEDULER_UNAVAILABLE,
    EVENT_ACTIVATE,
    EVENT_DELETE,
    EVENT_ERROR,
    EVENT_HIERARCHY_CHANGE,
    EVENT_LONG_PRESS_PROGRESS,
    EVENT_SELECT,
    LONG_PRESS_DURATION_MS,
    LONG_PRESS_MOVE_THRESHOLD_PX,
    LONG_PRESS_TICK_MS,
    REPARENT_CYCLE_POLICIES,
)
from core.exceptions import ReparentCycleError
from core.models import (
    Entity,
    EntityEventDetail,
    ErrorDetail,
    HierarchyChangeDetail,
    ProgressDetail,
)
from serving.org_chart_service import OrgChartService

from .events import EventEmitter, Handler
from .scheduler import ScheduledTask, Scheduler
from .state import Dragging, InteractionMode, InteractionState, LongPress, PendingClick


class OrgChartController:
    """Per-chart interaction controller."""

    def __init__(
        self,
        chart: OrgChartService,
        scheduler: Scheduler,
        double_click_delay: float = DOUBLE_CLICK_DELAY_MS / 1000.0,
        long_press_duration: float = LONG_PRESS_DURATION_MS / 1000.0,
        long_press_tick: float = LONG_PRESS_TICK_MS / 1000.0,
        long_press_move_threshold: float = LONG_PRESS_MOVE_THRESHOLD_PX,
        editable: bool = True,
        reparent_cycle_policy: str = 'repair',
        scroll_handler: Optional[Callable[[str], None]] = None
    ):
        """
        Initialize the controller.

        Args:
            chart: Chart service owning entities and forest
            scheduler: Timer backend
            double_click_delay: Seconds a first click waits for a second one
            long_press_duration: Seconds a pointer must be held to delete
            long_press_tick: Seconds between long-press progress updates
            long_press_move_threshold: Pixels of travel that abort a long-press
            editable: When False, drag and long-press input is ignored
            reparent_cycle_policy: 'repair' lets the rebuild break cycles,
                'reject' refuses the drop and emits an error event
            scroll_handler: Rendering callback for scroll_to_user
        """
        if reparent_cycle_policy not in REPARENT_CYCLE_POLICIES:
            raise ValueError(f"Unknown reparent cycle policy: {reparent_cycle_policy}")

        self.chart = chart
        self.scheduler = scheduler
        self.double_click_delay = double_click_delay
        self.long_press_duration = long_press_duration
        self.long_press_tick = long_press_tick
        self.long_press_move_threshold = long_press_move_threshold
        self.editable = editable
        self.reparent_cycle_policy = reparent_cycle_policy
        self.scroll_handler = scroll_handler

        self.events = EventEmitter(CONTROLLER_EVENTS)
        self.state = InteractionState()
        self.selected_id: Optional[str] = None
        self.highlighted_id: Optional[str] = None
        self.disposed = False

    def on(self, name: str, handler: Handler) -> Callable[[], bool]:
        """Subscribe to a controller event; returns an unsubscribe callable."""
        return self.events.on(name, handler)

    # ------------------------------------------------------------------
    # State exposed to the rendering layer
    # ------------------------------------------------------------------

    @property
    def mode(self) -> InteractionMode:
        return self.state.mode

    @property
    def dragged_id(self) -> Optional[str]:
        dragging = self.state.dragging
        return dragging.dragged_id if dragging else None

    @property
    def drop_target_id(self) -> Optional[str]:
        dragging = self.state.dragging
        return dragging.drop_target_id if dragging else None

    @property
    def show_drop_zones(self) -> bool:
        return self.state.dragging is not None

    @property
    def long_press_target_id(self) -> Optional[str]:
        press = self.state.long_press
        return press.target_id if press else None

    @property
    def long_press_progress(self) -> float:
        press = self.state.long_press
        return press.progress if press else 0.0

    # ------------------------------------------------------------------
    # Public methods
    # ------------------------------------------------------------------

    def get_selected(self) -> Optional[Entity]:
        """Entity for the current selection, or None if unset or gone."""
        return self.chart.find_entity(self.selected_id)

    def highlight_user(self, entity_id: str) -> None:
        self.highlighted_id = entity_id

    def clear_highlight(self) -> None:
        self.highlighted_id = None

    def scroll_to_user(self, entity_id: str) -> bool:
        """
        Ask the rendering layer to bring a tile into view.

        Returns:
            True if a scroll handler was called
        """
        if self.scroll_handler is None or self.chart.find_node(entity_id) is None:
            return False
        self.scroll_handler(entity_id)
        return True

    def dispose(self) -> None:
        """Cancel every outstanding timer and drop all state and handlers."""
        if self.disposed:
            return
        self.state.clear()
        self.events.clear()
        self.selected_id = None
        self.highlighted_id = None
        self.disposed = True
        logger.debug("Controller disposed")

    # ------------------------------------------------------------------
    # Clicks
    # ------------------------------------------------------------------

    def click(self, node_id: str) -> None:
        """
        Handle a tile click.

        The first click is held for ``double_click_delay``; a second click in
        that window cancels it and activates instead.
        """
        if self.disposed:
            return

        if self.state.pending_click is not None:
            self.state.clear_click()
            self._activate(node_id)
            return

        task = self._schedule(self.double_click_delay, lambda: self._select(node_id), node_id)
        if task is not None:
            self.state.enter(PendingClick(node_id=node_id), task)

    def _select(self, node_id: str) -> None:
        self.state.clear_click()
        entity = self.chart.find_entity(node_id)
        if entity is not None:
            self.selected_id = node_id
            self.events.emit(EVENT_SELECT, EntityEventDetail(id=node_id, entity=entity))

    def _activate(self, node_id: str) -> None:
        entity = self.chart.find_entity(node_id)
        if entity is not None:
            self.events.emit(EVENT_ACTIVATE, EntityEventDetail(id=node_id, entity=entity))

    # ------------------------------------------------------------------
    # Drag and drop
    # ------------------------------------------------------------------

    def drag_start(self, node_id: str) -> None:
        """Start dragging a tile; reveals the unlink/delete drop zones."""
        if not self._can_edit("drag"):
            return
        # a drag is never the first half of a double-click
        self.state.clear_click()
        self.state.enter(Dragging(dragged_id=node_id))

    def drag_over(self, target_id: Optional[str] = None) -> None:
        """Track the tile under the pointer; drop zones pass no target."""
        dragging = self.state.dragging
        if dragging is not None and target_id:
            dragging.drop_target_id = target_id

    def drag_leave(self) -> None:
        dragging = self.state.dragging
        if dragging is not None:
            dragging.drop_target_id = None

    def drop(self, target_id: str) -> Optional[HierarchyChangeDetail]:
        """Drop onto a tile: the dragged entity now reports to ``target_id``."""
        dragged_id = self._end_drag()
        if dragged_id is None or not self._can_edit("drop"):
            return None
        return self._reparent(dragged_id, target_id)

    def drop_on_unlink(self) -> Optional[HierarchyChangeDetail]:
        """Drop onto the unlink zone: the dragged entity becomes a root."""
        dragged_id = self._end_drag()
        if dragged_id is None or not self._can_edit("unlink"):
            return None
        return self._reparent(dragged_id, None)

    def drop_on_delete(self) -> Optional[Entity]:
        """Drop onto the delete zone: the dragged entity is removed."""
        dragged_id = self._end_drag()
        if dragged_id is None or not self._can_edit("delete"):
            return None
        return self._delete(dragged_id)

    def drag_end(self) -> None:
        """Drag finished or cancelled anywhere."""
        self._end_drag()

    def _end_drag(self) -> Optional[str]:
        dragging = self.state.dragging
        if dragging is None:
            return None
        self.state.clear_gesture()
        return dragging.dragged_id

    # ------------------------------------------------------------------
    # Long press
    # ------------------------------------------------------------------

    def pointer_down(self, node_id: str, x: float, y: float) -> None:
        """
        Start the long-press countdown on a tile.

        A pending single click is left alone, so the pointer-down of a
        double-click's second click still lets that click activate.
        """
        if not self._can_edit("long-press"):
            return
        task = self._schedule(self.long_press_tick, self._tick_long_press, node_id, repeating=True)
        if task is None:
            return
        press = LongPress(
            target_id=node_id,
            origin_x=x,
            origin_y=y,
            started_at=self.scheduler.now(),
        )
        self.state.enter(press, task)

    def pointer_move(self, x: float, y: float) -> None:
        """Abort the long-press once the pointer strays past the threshold."""
        press = self.state.long_press
        if press is None:
            return
        if math.hypot(x - press.origin_x, y - press.origin_y) > self.long_press_move_threshold:
            logger.debug(f"Long-press on {press.target_id} aborted by pointer movement")
            self.state.clear_gesture()

    def pointer_up(self) -> None:
        """Release before completion cancels the countdown."""
        if self.state.long_press is not None:
            self.state.clear_gesture()

    def _tick_long_press(self) -> None:
        press = self.state.long_press
        if press is None:
            return
        elapsed = self.scheduler.now() - press.started_at
        press.progress = min(elapsed / self.long_press_duration, 1.0)
        self.events.emit(
            EVENT_LONG_PRESS_PROGRESS,
            ProgressDetail(id=press.target_id, progress=press.progress),
        )
        if press.progress >= 1.0:
            self.state.clear_gesture()
            self._delete(press.target_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _can_edit(self, action: str) -> bool:
        if self.disposed:
            return False
        if not self.editable:
            logger.debug(f"Ignoring {action}: chart is read-only")
            return False
        return True

    def _schedule(
        self,
        delay: float,
        callback: Callable[[], None],
        entity_id: Optional[str] = None,
        repeating: bool = False
    ) -> Optional[ScheduledTask]:
        try:
            if repeating:
                return self.scheduler.call_every(delay, callback)
            return self.scheduler.call_later(delay, callback)
        except RuntimeError as e:
            logger.error(f"Scheduler unavailable: {e}")
            self._emit_error(ERROR_SCHEDULER_UNAVAILABLE, str(e), entity_id)
            return None

    def _reparent(self, entity_id: str, new_parent_id: Optional[str]) -> Optional[HierarchyChangeDetail]:
        try:
            detail = self.chart.reparent(
                entity_id,
                new_parent_id,
                reject_cycles=self.reparent_cycle_policy == 'reject',
            )
        except ReparentCycleError as e:
            logger.warning(str(e))
            self._emit_error(ERROR_REPARENT_CYCLE, str(e), entity_id)
            return None

        if detail is not None:
            self.events.emit(EVENT_HIERARCHY_CHANGE, detail)
        return detail

    def _delete(self, entity_id: str) -> Optional[Entity]:
        entity = self.chart.remove(entity_id)
        if entity is not None:
            self.events.emit(EVENT_DELETE, EntityEventDetail(id=entity_id, entity=entity))
        return entity

    def _emit_error(self, code: str, message: str, entity_id: Optional[str] = None) -> None:
        self.events.emit(EVENT_ERROR, ErrorDetail(code=code, message=message, entity_id=entity_id))

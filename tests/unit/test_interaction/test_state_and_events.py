"""
Unit tests for interaction.state and interaction.events modules.
"""
import pytest

from interaction.events import EventEmitter
from interaction.state import Dragging, InteractionMode, InteractionState, LongPress, PendingClick


class TestInteractionState:
    """Tests for the mode state machine."""

    def test_starts_idle(self):
        state = InteractionState()
        assert state.mode is InteractionMode.IDLE
        assert state.pending_click is None

    def test_modes(self):
        state = InteractionState()

        state.enter(PendingClick(node_id='1'))
        assert state.mode is InteractionMode.PENDING_CLICK

        state.enter(Dragging(dragged_id='1'))
        assert state.mode is InteractionMode.DRAGGING
        assert state.pending_click is not None

        state.enter(LongPress(target_id='1', origin_x=0, origin_y=0, started_at=0.0))
        assert state.mode is InteractionMode.LONG_PRESSING
        assert state.dragging is None

        state.clear_gesture()
        assert state.mode is InteractionMode.PENDING_CLICK

    def test_gesture_keeps_click_task(self, manual_scheduler):
        """Test a gesture on its own track leaves the click timer running."""
        fired = []
        state = InteractionState()
        click_task = manual_scheduler.call_later(0.3, lambda: fired.append('select'))
        state.enter(PendingClick(node_id='1'), click_task)

        press_task = manual_scheduler.call_every(0.016, lambda: None)
        state.enter(LongPress(target_id='1', origin_x=0, origin_y=0, started_at=0.0), press_task)
        state.clear_gesture()
        manual_scheduler.advance(1.0)

        assert press_task.cancelled
        assert not click_task.cancelled
        assert fired == ['select']

    def test_enter_cancels_same_track_task(self, manual_scheduler):
        """Test replacing a gesture cancels the old gesture's timer."""
        state = InteractionState()
        first = manual_scheduler.call_every(0.016, lambda: None)
        state.enter(LongPress(target_id='1', origin_x=0, origin_y=0, started_at=0.0), first)

        state.enter(Dragging(dragged_id='1'))

        assert first.cancelled
        assert not state.has_pending_task

    def test_clear(self, manual_scheduler):
        state = InteractionState()
        click_task = manual_scheduler.call_later(0.3, lambda: None)
        press_task = manual_scheduler.call_every(0.016, lambda: None)
        state.enter(PendingClick(node_id='1'), click_task)
        state.enter(LongPress(target_id='1', origin_x=0, origin_y=0, started_at=0.0), press_task)

        state.clear()

        assert state.mode is InteractionMode.IDLE
        assert click_task.cancelled
        assert press_task.cancelled


class TestEventEmitter:
    """Tests for EventEmitter."""

    def test_emit_in_order(self):
        emitter = EventEmitter()
        calls = []
        emitter.on('x', lambda d: calls.append(('a', d)))
        emitter.on('x', lambda d: calls.append(('b', d)))

        assert emitter.emit('x', 1) == 2
        assert calls == [('a', 1), ('b', 1)]

    def test_unsubscribe(self):
        emitter = EventEmitter()
        calls = []
        unsubscribe = emitter.on('x', calls.append)

        assert unsubscribe() is True
        assert emitter.emit('x', 1) == 0
        assert calls == []

    def test_unknown_event_rejected(self):
        emitter = EventEmitter(['select'])
        with pytest.raises(ValueError):
            emitter.on('selected', lambda d: None)
        with pytest.raises(ValueError):
            emitter.emit('selected')

    def test_handler_errors_propagate(self):
        emitter = EventEmitter()

        def broken(detail):
            raise RuntimeError('handler failed')

        emitter.on('x', broken)
        with pytest.raises(RuntimeError):
            emitter.emit('x')

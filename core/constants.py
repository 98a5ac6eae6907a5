"""
Constants and default values for the org-chart hierarchy engine.
"""
from enum import Enum


class EntityKind(str, Enum):
    """Discriminant for the Person/Branch tagged union."""
    PERSON = "person"
    BRANCH = "branch"


class FilterMode(str, Enum):
    """Branch filter modes understood by the rendering layer."""
    NONE = "none"
    HIGHLIGHT = "highlight"
    ISOLATE = "isolate"


# Timing defaults (milliseconds)
DOUBLE_CLICK_DELAY_MS = 300
LONG_PRESS_DURATION_MS = 4000
LONG_PRESS_TICK_MS = 16

# Pointer travel (pixels) tolerated before a long-press is aborted
LONG_PRESS_MOVE_THRESHOLD_PX = 10

# Reparent policies for drops that would close a reporting cycle
REPARENT_CYCLE_POLICIES = ('repair', 'reject')

# Duplicate id handling at build time
DUPLICATE_ID_POLICIES = ('last_wins', 'reject')

# Controller event names
EVENT_SELECT = 'select'
EVENT_ACTIVATE = 'activate'
EVENT_HIERARCHY_CHANGE = 'hierarchyChange'
EVENT_DELETE = 'delete'
EVENT_LONG_PRESS_PROGRESS = 'longPressProgress'
EVENT_ERROR = 'error'

CONTROLLER_EVENTS = (
    EVENT_SELECT,
    EVENT_ACTIVATE,
    EVENT_HIERARCHY_CHANGE,
    EVENT_DELETE,
    EVENT_LONG_PRESS_PROGRESS,
    EVENT_ERROR,
)

# Error event codes
ERROR_REPARENT_CYCLE = 'reparent_cycle_rejected'
ERROR_SCHEDULER_UNAVAILABLE = 'scheduler_unavailable'

# loguru level names accepted by the log_level setting
LOG_LEVELS = ('TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL')

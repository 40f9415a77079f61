"""Order lifecycle states."""

from enum import Enum


class OrderStatus(str, Enum):
    """Checkout lifecycle state of an order."""

    CREATED = "created"
    SESSION_REQUESTED = "session_requested"
    SESSION_ACTIVE = "session_active"
    COMPLETED = "completed"
    ABANDONED = "abandoned"

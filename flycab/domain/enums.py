"""Domain enumerations."""

import enum


class SelectionPhase(str, enum.Enum):
    EMPTY = "EMPTY"
    PICKUP_ONLY = "PICKUP_ONLY"
    BOTH = "BOTH"


class NotificationKind(str, enum.Enum):
    SUCCESS = "success"
    ERROR = "error"

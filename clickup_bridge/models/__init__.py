"""Data models for review events, review comments and notification results (Pydantic)."""

from clickup_bridge.models.outcome import NotificationOutcome, NotificationReport
from clickup_bridge.models.review_comment import ReviewComment
from clickup_bridge.models.review_event import (
    APPROVED,
    CHANGES_REQUESTED,
    HANDLED_STATES,
    ReviewEvent,
)

__all__ = [
    "APPROVED",
    "CHANGES_REQUESTED",
    "HANDLED_STATES",
    "NotificationOutcome",
    "NotificationReport",
    "ReviewComment",
    "ReviewEvent",
]

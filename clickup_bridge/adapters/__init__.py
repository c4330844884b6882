"""Outbound API adapters: Git hosting platform and task tracker."""

from clickup_bridge.adapters.base import (
    GitPlatformAdapter,
    GitPlatformError,
    TaskTrackerAdapter,
    TaskTrackerError,
)

__all__ = [
    "GitPlatformAdapter",
    "GitPlatformError",
    "TaskTrackerAdapter",
    "TaskTrackerError",
]

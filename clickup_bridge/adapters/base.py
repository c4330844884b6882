"""Abstract bases for the Git platform and task tracker adapters."""

from abc import ABC, abstractmethod
from typing import List

from clickup_bridge.models import ReviewComment


class AdapterError(Exception):
    """Raised when an outbound API call fails.

    ``status_code`` and ``body`` are set when the server answered; both
    are None for transport errors (DNS, connection reset, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class GitPlatformError(AdapterError):
    """Raised when a Git platform API call fails."""

    pass


class TaskTrackerError(AdapterError):
    """Raised when a task tracker API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """Read-only view of a Git hosting platform (GitHub)."""

    @abstractmethod
    def list_pr_commit_messages(self, repo: str, pr_number: int) -> List[str]:
        """Commit messages of a pull request, in API order."""
        ...

    @abstractmethod
    def list_review_comments(self, repo: str, pr_number: int, review_id: int) -> List[ReviewComment]:
        """Comments belonging to one review, in API order."""
        ...


class TaskTrackerAdapter(ABC):
    """Write access to a task tracker (ClickUp)."""

    @abstractmethod
    def add_tag(self, task_id: str, tag_name: str) -> None:
        """Add a tag to a task."""
        ...

    @abstractmethod
    def add_comment(self, task_id: str, text: str) -> None:
        """Post a plain-text comment on a task."""
        ...

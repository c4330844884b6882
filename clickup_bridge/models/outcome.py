"""Per-task notification outcome and the aggregated report."""

from typing import List

from pydantic import BaseModel, Field


class NotificationOutcome(BaseModel):
    """Result of the tag call and the comment call for one task."""

    task_id: str
    tag_succeeded: bool = False
    comment_succeeded: bool = False


class NotificationReport(BaseModel):
    """Everything one notifier run did. Empty when no task IDs were found."""

    task_ids: List[str] = Field(default_factory=list)
    tag_name: str = ""
    message: str = ""
    outcomes: List[NotificationOutcome] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.task_ids)

    @property
    def tag_success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.tag_succeeded)

    @property
    def comment_success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.comment_succeeded)

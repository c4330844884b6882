"""Pull request review event (pull_request_review webhook, action=submitted)."""

from pydantic import BaseModel, ConfigDict

APPROVED = "approved"
CHANGES_REQUESTED = "changes_requested"

# Review states the notifier acts on; everything else is skipped by the gate
HANDLED_STATES = (APPROVED, CHANGES_REQUESTED)


class ReviewEvent(BaseModel):
    """PR and review metadata for one invocation. Immutable."""

    model_config = ConfigDict(frozen=True)

    pr_number: int
    pr_title: str
    branch_name: str
    repo_owner: str
    repo_name: str
    pr_url: str
    reviewer_name: str
    review_id: int
    review_body: str = ""
    review_state: str

    @property
    def repo(self) -> str:
        """Full repository name (owner/name)."""
        return f"{self.repo_owner}/{self.repo_name}"

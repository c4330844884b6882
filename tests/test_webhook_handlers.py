"""Tests for the pull_request_review gate, payload parsing and dispatch."""

import copy
from unittest.mock import Mock, patch

import pytest
from pydantic import ValidationError

from clickup_bridge.config import AppConfig, ClickUpConfig, ConfigError, GitHubConfig
from clickup_bridge.models import ReviewEvent
from clickup_bridge.webhook.handlers import handle_github_event, parse_review_event, should_handle

PAYLOAD = {
    "action": "submitted",
    "review": {
        "id": 901,
        "user": {"login": "alice"},
        "body": "Please fix",
        "state": "changes_requested",
    },
    "pull_request": {
        "number": 12,
        "title": "CU-abc123 Add login",
        "head": {"ref": "feature/cu_def456-login"},
        "html_url": "https://github.com/owner/repo/pull/12",
    },
    "repository": {"name": "repo", "owner": {"login": "owner"}},
}


@pytest.fixture
def payload() -> dict:
    return copy.deepcopy(PAYLOAD)


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        github=GitHubConfig(token="gh-token", api_url="https://api.github.com"),
        clickup=ClickUpConfig(api_key="pk_key", api_url="https://api.clickup.com/api/v2"),
    )


class TestShouldHandle:
    """Gate: review + pull_request present and state approved/changes_requested."""

    def test_changes_requested_and_approved_pass(self, payload: dict) -> None:
        """Both handled states pass the gate."""
        assert should_handle(payload) is True
        payload["review"]["state"] = "approved"
        assert should_handle(payload) is True

    @pytest.mark.parametrize("state", ["commented", "dismissed", "APPROVED", None])
    def test_other_states_skipped(self, payload: dict, state: str | None) -> None:
        """Only exact lowercase handled states pass."""
        payload["review"]["state"] = state
        assert should_handle(payload) is False

    @pytest.mark.parametrize("key", ["review", "pull_request"])
    def test_missing_objects_skipped(self, payload: dict, key: str) -> None:
        """Payload without review or pull_request is skipped."""
        del payload[key]
        assert should_handle(payload) is False

    def test_empty_payload_skipped(self) -> None:
        """Empty payload is skipped."""
        assert should_handle({}) is False


class TestParseReviewEvent:
    """parse_review_event maps payload fields to ReviewEvent."""

    def test_fields(self, payload: dict) -> None:
        """Payload fields map onto ReviewEvent; repo is owner/name."""
        event = parse_review_event(payload)
        assert event == ReviewEvent(
            pr_number=12,
            pr_title="CU-abc123 Add login",
            branch_name="feature/cu_def456-login",
            repo_owner="owner",
            repo_name="repo",
            pr_url="https://github.com/owner/repo/pull/12",
            reviewer_name="alice",
            review_id=901,
            review_body="Please fix",
            review_state="changes_requested",
        )
        assert event.repo == "owner/repo"

    def test_null_body_becomes_empty(self, payload: dict) -> None:
        """Null review body is stored as empty string."""
        payload["review"]["body"] = None
        assert parse_review_event(payload).review_body == ""

    def test_missing_required_field_raises(self, payload: dict) -> None:
        """Malformed payload propagates KeyError to the caller."""
        del payload["pull_request"]["head"]
        with pytest.raises(KeyError):
            parse_review_event(payload)

    def test_event_is_immutable(self, payload: dict) -> None:
        """ReviewEvent is frozen for the run."""
        event = parse_review_event(payload)
        with pytest.raises(ValidationError):
            event.pr_number = 1


class TestHandleGithubEvent:
    """handle_github_event gates, builds adapters and runs the notifier."""

    def test_dispatches_to_notifier(self, config: AppConfig, payload: dict) -> None:
        """Injected adapters are used; IDs from branch and title are notified."""
        github = Mock()
        github.list_pr_commit_messages.return_value = []
        github.list_review_comments.return_value = []
        tracker = Mock()

        report = handle_github_event(config, "pull_request_review", payload, github=github, tracker=tracker)

        assert report is not None
        assert set(report.task_ids) == {"abc123", "def456"}
        assert tracker.add_tag.call_count == 2
        github.list_review_comments.assert_called_once_with("owner/repo", 12, 901)

    def test_other_event_name_skipped(self, config: AppConfig, payload: dict) -> None:
        """A different event name never reaches the notifier."""
        github = Mock()
        tracker = Mock()
        assert handle_github_event(config, "pull_request", payload, github=github, tracker=tracker) is None
        github.list_pr_commit_messages.assert_not_called()

    def test_empty_event_name_uses_payload_gate(self, config: AppConfig, payload: dict) -> None:
        """No event name: the payload gate alone decides."""
        payload["review"]["state"] = "commented"
        github = Mock()
        assert handle_github_event(config, "", payload, github=github, tracker=Mock()) is None
        github.list_pr_commit_messages.assert_not_called()

    def test_builds_adapters_from_config(self, config: AppConfig, payload: dict) -> None:
        """Adapters are built from resolved secrets, URLs and timeout."""
        with (
            patch("clickup_bridge.webhook.handlers.GitHubAdapter") as gh_cls,
            patch("clickup_bridge.webhook.handlers.ClickUpAdapter") as cu_cls,
            patch("clickup_bridge.webhook.handlers.notify_review") as notify,
        ):
            handle_github_event(config, "pull_request_review", payload)

        gh_cls.assert_called_once_with(token="gh-token", api_url="https://api.github.com", timeout=30)
        cu_cls.assert_called_once_with(api_key="pk_key", api_url="https://api.clickup.com/api/v2", timeout=30)
        notify.assert_called_once()
        assert notify.call_args[0][1] is gh_cls.return_value
        assert notify.call_args[0][2] is cu_cls.return_value

    def test_missing_clickup_key_raises(self, payload: dict, monkeypatch: pytest.MonkeyPatch) -> None:
        """No ClickUp key anywhere: ConfigError when building the adapter."""
        for key in ("CLICKUP_API_KEY", "CLICKUP_API_KEY_FILE", "INPUT_CLICKUP-API-KEY", "INPUT_CLICKUP_API_KEY"):
            monkeypatch.delenv(key, raising=False)
        config = AppConfig(github=GitHubConfig(token="gh"), clickup=ClickUpConfig(api_key=None))
        with pytest.raises(ConfigError):
            handle_github_event(config, "pull_request_review", payload, github=Mock())

"""Handle GitHub pull_request_review events.

Applies the trigger gate (review + pull_request present, state approved or
changes_requested), parses the payload into a ReviewEvent and delegates to
the review notifier.
"""

import logging
from typing import Any, Dict

from clickup_bridge.adapters.base import GitPlatformAdapter, TaskTrackerAdapter
from clickup_bridge.adapters.clickup import ClickUpAdapter
from clickup_bridge.adapters.github import GitHubAdapter
from clickup_bridge.config import AppConfig, ConfigError
from clickup_bridge.models import HANDLED_STATES, NotificationReport, ReviewEvent
from clickup_bridge.notifier import notify_review

LOG_NAME = "clickup_bridge.webhook.handlers"

REVIEW_EVENT = "pull_request_review"


def should_handle(payload: Dict[str, Any], log: logging.Logger | None = None) -> bool:
    """True if payload is a PR review with a state the notifier acts on."""
    logger = log or logging.getLogger(LOG_NAME)
    if not payload.get("review") or not payload.get("pull_request"):
        logger.info("This is not a pull request review event. Skipping.")
        return False
    state = payload["review"].get("state")
    if state not in HANDLED_STATES:
        logger.info('PR review state is "%s". Skipping ClickUp update.', state)
        return False
    return True


def parse_review_event(payload: Dict[str, Any]) -> ReviewEvent:
    """Build ReviewEvent from a pull_request_review webhook payload.

    Required fields are indexed directly; a missing one raises KeyError.
    """
    pull = payload["pull_request"]
    review = payload["review"]
    repository = payload["repository"]
    return ReviewEvent(
        pr_number=pull["number"],
        pr_title=pull["title"],
        branch_name=pull["head"]["ref"],
        repo_owner=repository["owner"]["login"],
        repo_name=repository["name"],
        pr_url=pull["html_url"],
        reviewer_name=review["user"]["login"],
        review_id=review["id"],
        review_body=review.get("body") or "",
        review_state=review["state"],
    )


def _make_github_adapter(config: AppConfig) -> GitHubAdapter:
    token = config.github_token_resolved
    if not token:
        raise ConfigError("GitHub token is not set (GITHUB_TOKEN, GITHUB_TOKEN_FILE or input github-token)")
    return GitHubAdapter(token=token, api_url=config.github.api_url, timeout=config.http.timeout)


def _make_clickup_adapter(config: AppConfig) -> ClickUpAdapter:
    api_key = config.clickup_api_key_resolved
    if not api_key:
        raise ConfigError(
            "ClickUp API key is not set (CLICKUP_API_KEY, CLICKUP_API_KEY_FILE or input clickup-api-key)"
        )
    return ClickUpAdapter(api_key=api_key, api_url=config.clickup.api_url, timeout=config.http.timeout)


def handle_github_event(
    config: AppConfig,
    event: str,
    payload: Dict[str, Any],
    github: GitPlatformAdapter | None = None,
    tracker: TaskTrackerAdapter | None = None,
    log: logging.Logger | None = None,
) -> NotificationReport | None:
    """Handle a GitHub event payload.

    Returns the notifier report, or None when the event was skipped. An
    empty event name means "unknown" and only the payload gate applies.
    """
    logger = log or logging.getLogger(LOG_NAME)

    if event and event != REVIEW_EVENT:
        logger.info("Event %s is not %s. Skipping.", event, REVIEW_EVENT)
        return None
    if not should_handle(payload, log=logger):
        return None

    review_event = parse_review_event(payload)
    github = github or _make_github_adapter(config)
    tracker = tracker or _make_clickup_adapter(config)
    return notify_review(review_event, github, tracker, log=logger)

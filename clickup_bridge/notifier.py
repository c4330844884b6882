"""
Propagate a PR review outcome to the ClickUp tasks the PR references.

Task IDs are collected from the branch name, the PR title and every commit
message. Each unique task gets a tag and a comment describing the review.
Failures of individual calls are logged and counted; they never abort the run.
"""

import logging
from typing import List, Tuple

from clickup_bridge.adapters.base import (
    AdapterError,
    GitPlatformAdapter,
    GitPlatformError,
    TaskTrackerAdapter,
    TaskTrackerError,
)
from clickup_bridge.extract import extract_task_ids
from clickup_bridge.models import (
    APPROVED,
    CHANGES_REQUESTED,
    NotificationOutcome,
    NotificationReport,
    ReviewComment,
    ReviewEvent,
)

APPROVED_TAG = "Pull request approved"
CHANGES_REQUESTED_TAG = "Changes requested on pull request"

LOG_NAME = "clickup_bridge.notifier"


def _log_api_error(logger: logging.Logger, headline: str, error: AdapterError) -> None:
    """Log a failed call with HTTP status and response body when the server answered."""
    logger.error(headline)
    if error.status_code is not None:
        logger.error("Status: %s", error.status_code)
        logger.error("Response: %s", error.body)
    else:
        logger.error("%s", error)


def _fetch_commit_messages(
    github: GitPlatformAdapter,
    event: ReviewEvent,
    logger: logging.Logger,
) -> List[str]:
    try:
        return github.list_pr_commit_messages(event.repo, event.pr_number)
    except GitPlatformError as e:
        _log_api_error(logger, "Error fetching commit messages:", e)
        return []


def _fetch_review_comments(
    github: GitPlatformAdapter,
    event: ReviewEvent,
    logger: logging.Logger,
) -> List[ReviewComment]:
    try:
        return github.list_review_comments(event.repo, event.pr_number, event.review_id)
    except GitPlatformError as e:
        _log_api_error(logger, "Error fetching review comments:", e)
        return []


def collect_task_ids(
    event: ReviewEvent,
    github: GitPlatformAdapter,
    log: logging.Logger | None = None,
) -> List[str]:
    """Unique task IDs from branch name, PR title and commit messages.

    Order of first appearance is kept (branch, title, commits).
    """
    logger = log or logging.getLogger(LOG_NAME)
    task_ids = extract_task_ids(event.branch_name) + extract_task_ids(event.pr_title)

    commit_messages = _fetch_commit_messages(github, event, logger)
    logger.info("Found %s commits in the PR.", len(commit_messages))
    for message in commit_messages:
        task_ids.extend(extract_task_ids(message))

    return list(dict.fromkeys(task_ids))


def build_review_message(event: ReviewEvent, review_comments: List[ReviewComment]) -> Tuple[str, str]:
    """Return (tag_name, comment_text) for the review state.

    Raises ValueError for states other than approved / changes_requested.
    """
    if event.review_state == APPROVED:
        return APPROVED_TAG, f"{event.reviewer_name} has approved → {event.pr_url}"

    if event.review_state != CHANGES_REQUESTED:
        raise ValueError(f"Unsupported review state: {event.review_state!r}")

    text = f"{event.reviewer_name} has requested changes → {event.pr_url}\n\n"
    if event.review_body.strip():
        text += f"**Review comment:**\n{event.review_body}\n\n"
    if review_comments:
        text += "**Requested changes:**\n"
        for index, comment in enumerate(review_comments, 1):
            text += f"{index}. **{comment.path}** - {comment.body}\n"
    return CHANGES_REQUESTED_TAG, text


def _notify_task(
    tracker: TaskTrackerAdapter,
    task_id: str,
    tag_name: str,
    message: str,
    logger: logging.Logger,
) -> NotificationOutcome:
    outcome = NotificationOutcome(task_id=task_id)

    try:
        tracker.add_tag(task_id, tag_name)
        outcome.tag_succeeded = True
        logger.info('Successfully added "%s" tag to ClickUp task %s.', tag_name, task_id)
    except TaskTrackerError as e:
        _log_api_error(logger, f"Error adding tag to task {task_id}:", e)

    try:
        tracker.add_comment(task_id, message)
        outcome.comment_succeeded = True
        logger.info("Successfully added comment to ClickUp task %s.", task_id)
    except TaskTrackerError as e:
        _log_api_error(logger, f"Error adding comment to task {task_id}:", e)

    return outcome


def notify_review(
    event: ReviewEvent,
    github: GitPlatformAdapter,
    tracker: TaskTrackerAdapter,
    log: logging.Logger | None = None,
) -> NotificationReport:
    """
    Tag and comment every ClickUp task referenced by the PR.

    1. Collect unique task IDs; return an empty report if there are none.
    2. For changes_requested, fetch the comments of this review.
    3. Build tag name and comment text.
    4. For each task: add tag, then add comment (independent attempts).
    """
    logger = log or logging.getLogger(LOG_NAME)

    logger.info("PR #%s: %s", event.pr_number, event.pr_title)
    logger.info("Branch Name: %s", event.branch_name)
    logger.info("Review by: %s", event.reviewer_name)
    logger.info("Review state: %s", event.review_state)

    task_ids = collect_task_ids(event, github, log=logger)
    if not task_ids:
        logger.info("No ClickUp task IDs found in branch name, PR title, or commit messages.")
        return NotificationReport()

    logger.info("Found %s unique ClickUp Task IDs: %s", len(task_ids), ", ".join(task_ids))

    review_comments: List[ReviewComment] = []
    if event.review_state == CHANGES_REQUESTED:
        review_comments = _fetch_review_comments(github, event, logger)
        logger.info("Found %s review comments.", len(review_comments))

    tag_name, message = build_review_message(event, review_comments)

    outcomes = [_notify_task(tracker, task_id, tag_name, message, logger) for task_id in task_ids]
    report = NotificationReport(task_ids=task_ids, tag_name=tag_name, message=message, outcomes=outcomes)

    logger.info(
        'Successfully tagged %s out of %s ClickUp tasks with "%s".',
        report.tag_success_count,
        report.total,
        tag_name,
    )
    logger.info(
        "Successfully added comments to %s out of %s ClickUp tasks.",
        report.comment_success_count,
        report.total,
    )
    return report

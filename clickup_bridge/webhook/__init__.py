"""GitHub webhook event gate and dispatch."""

from clickup_bridge.webhook.handlers import handle_github_event, parse_review_event, should_handle

__all__ = ["handle_github_event", "parse_review_event", "should_handle"]

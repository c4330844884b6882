"""ClickUp review bridge entry point.

Runs once per pull_request_review event: reads the event payload (by default
from GITHUB_EVENT_PATH, as set by GitHub Actions), tags and comments the
referenced ClickUp tasks, and exits. Partial API failures are only logged;
the exit status is non-zero only when an unexpected error escapes.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

from clickup_bridge.config import LoggingConfig, load_config
from clickup_bridge.logging import BridgeLogging
from clickup_bridge.webhook.handlers import handle_github_event

LOG_NAME = "clickup_bridge.main"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="clickup-bridge",
        description="Tag and comment ClickUp tasks referenced by a reviewed GitHub pull request",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: $CLICKUP_BRIDGE_CONFIG; none = env only)",
    )
    parser.add_argument(
        "--event-path",
        type=Path,
        default=None,
        help="Path to webhook payload JSON (default: $GITHUB_EVENT_PATH)",
    )
    parser.add_argument(
        "--event-name",
        default=None,
        help="Webhook event name (default: $GITHUB_EVENT_NAME)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def _load_payload(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def _report_failure(error: Exception) -> None:
    """Log the error; under GitHub Actions this becomes an ::error:: annotation."""
    logging.getLogger(LOG_NAME).exception("Action failed: %s", error)


def main(argv: list[str] | None = None) -> int:
    """Entry point for clickup-bridge."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except Exception as e:
        BridgeLogging(LoggingConfig()).setup()
        _report_failure(e)
        return 1

    BridgeLogging(config.logging).setup()
    log = logging.getLogger(LOG_NAME)

    if args.check:
        print(
            "Config OK:",
            "github token set" if config.github_token_resolved else "github token missing",
            "|",
            "clickup key set" if config.clickup_api_key_resolved else "clickup key missing",
        )
        return 0

    event_path = args.event_path or os.environ.get("GITHUB_EVENT_PATH")
    event_name = args.event_name if args.event_name is not None else os.environ.get("GITHUB_EVENT_NAME", "")

    try:
        if not event_path:
            raise ValueError("No event payload: pass --event-path or set GITHUB_EVENT_PATH")
        payload = _load_payload(Path(event_path))
        log.debug("Event %s loaded from %s", event_name or "(unknown)", event_path)
        handle_github_event(config, event_name, payload)
    except Exception as e:
        _report_failure(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""ClickUp review bridge: push GitHub PR review outcomes to ClickUp tasks."""

__version__ = "0.1.0"

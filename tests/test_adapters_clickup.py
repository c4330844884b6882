"""Unit tests for ClickUp adapter (mocked API)."""

from unittest.mock import Mock, patch

import pytest
import requests

from clickup_bridge.adapters.base import TaskTrackerError
from clickup_bridge.adapters.clickup import ClickUpAdapter


@pytest.fixture
def adapter() -> ClickUpAdapter:
    return ClickUpAdapter(api_key="pk_test")


def _ok() -> Mock:
    resp = Mock()
    resp.status_code = 200
    resp.json.return_value = {}
    return resp


def test_session_headers(adapter: ClickUpAdapter) -> None:
    """API key is sent as-is in Authorization; JSON content type."""
    assert adapter._session.headers["Authorization"] == "pk_test"
    assert adapter._session.headers["Content-Type"] == "application/json"


def test_add_tag_posts_quoted_tag(adapter: ClickUpAdapter) -> None:
    """add_tag POSTs an empty JSON body to the URL-quoted tag path."""
    with patch.object(adapter._session, "request", return_value=_ok()) as req:
        adapter.add_tag("abc123", "Pull request approved")

    call_args = req.call_args
    assert call_args[0][0] == "POST"
    assert call_args[0][1] == "https://api.clickup.com/api/v2/task/abc123/tag/Pull%20request%20approved"
    assert call_args[1].get("json") == {}


def test_add_comment_posts_comment_text(adapter: ClickUpAdapter) -> None:
    """add_comment POSTs comment_text."""
    with patch.object(adapter._session, "request", return_value=_ok()) as req:
        adapter.add_comment("abc123", "alice has approved → https://x")

    call_args = req.call_args
    assert call_args[0][0] == "POST"
    assert call_args[0][1] == "https://api.clickup.com/api/v2/task/abc123/comment"
    assert call_args[1].get("json") == {"comment_text": "alice has approved → https://x"}


def test_error_response_raises(adapter: ClickUpAdapter) -> None:
    """Non-2xx raises TaskTrackerError with status and raw body."""
    resp = Mock()
    resp.status_code = 401
    resp.text = '{"err":"Token invalid","ECODE":"OAUTH_025"}'
    resp.json.return_value = {"err": "Token invalid", "ECODE": "OAUTH_025"}

    with patch.object(adapter._session, "request", return_value=resp):
        with pytest.raises(TaskTrackerError) as exc_info:
            adapter.add_comment("abc123", "hi")
    assert exc_info.value.status_code == 401
    assert exc_info.value.body == resp.text
    assert str(exc_info.value) == "401: Token invalid"


def test_network_error_wrapped(adapter: ClickUpAdapter) -> None:
    """Timeouts become TaskTrackerError without status."""
    with patch.object(adapter._session, "request", side_effect=requests.Timeout("read timed out")):
        with pytest.raises(TaskTrackerError) as exc_info:
            adapter.add_tag("abc123", "x")
    assert exc_info.value.status_code is None

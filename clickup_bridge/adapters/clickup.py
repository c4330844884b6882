"""ClickUp API v2 adapter."""

from typing import Any, Dict
from urllib.parse import quote

import requests

from clickup_bridge.adapters.base import TaskTrackerAdapter, TaskTrackerError


class ClickUpAdapter(TaskTrackerAdapter):
    """ClickUp REST API implementation (personal API token auth)."""

    def __init__(self, api_key: str, api_url: str = "https://api.clickup.com/api/v2", timeout: float = 30) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        # ClickUp expects the raw token, no "Bearer" prefix
        self._session.headers["Authorization"] = api_key
        self._session.headers["Content-Type"] = "application/json"

    def _request(self, method: str, path: str, json: Dict[str, Any] | None = None) -> requests.Response:
        url = f"{self._api_url}{path}"
        try:
            resp = self._session.request(method, url, json=json, timeout=self._timeout)
        except requests.RequestException as e:
            raise TaskTrackerError(str(e)) from e
        if resp.status_code >= 400:
            body = resp.text or resp.reason or ""
            msg = body or str(resp.status_code)
            try:
                msg = resp.json().get("err", msg)
            except Exception:
                pass
            raise TaskTrackerError(f"{resp.status_code}: {msg}", status_code=resp.status_code, body=body)
        return resp

    def add_tag(self, task_id: str, tag_name: str) -> None:
        path = f"/task/{quote(task_id, safe='')}/tag/{quote(tag_name, safe='')}"
        self._request("POST", path, json={})

    def add_comment(self, task_id: str, text: str) -> None:
        self._request("POST", f"/task/{quote(task_id, safe='')}/comment", json={"comment_text": text})

"""GitHub API adapter."""

from typing import Any, Dict, List

import requests

from clickup_bridge.adapters.base import GitPlatformAdapter, GitPlatformError
from clickup_bridge.models import ReviewComment

PER_PAGE = 100


def _review_comment_from_api(data: Dict[str, Any]) -> ReviewComment:
    return ReviewComment(
        body=data.get("body") or "",
        path=data.get("path") or "",
        position=data.get("position"),
    )


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST API implementation."""

    def __init__(self, token: str, api_url: str = "https://api.github.com", timeout: float = 30) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        if path.startswith("http"):
            url = path
        else:
            url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, params=params, json=json, timeout=self._timeout)
        except requests.RequestException as e:
            raise GitPlatformError(str(e)) from e
        if resp.status_code >= 400:
            body = resp.text or resp.reason or ""
            msg = body or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except Exception:
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}", status_code=resp.status_code, body=body)
        return resp

    def _get_paginated(self, path: str) -> List[Dict[str, Any]]:
        """GET every page of a list endpoint, following Link rel="next"."""
        items: List[Dict[str, Any]] = []
        url: str | None = path
        params: Dict[str, Any] | None = {"per_page": PER_PAGE}
        while url:
            resp = self._request("GET", url, params=params)
            try:
                page = resp.json()
            except ValueError as e:
                raise GitPlatformError(
                    f"{resp.status_code}: response is not JSON", status_code=resp.status_code, body=resp.text
                ) from e
            if page is None:
                page = []
            if not isinstance(page, list):
                raise GitPlatformError(
                    f"{resp.status_code}: expected a JSON list", status_code=resp.status_code, body=resp.text
                )
            items.extend(page)
            links = getattr(resp, "links", None) or {}
            url = (links.get("next") or {}).get("url")
            # next URL already carries the query string
            params = None
        return items

    def list_pr_commit_messages(self, repo: str, pr_number: int) -> List[str]:
        data = self._get_paginated(f"/repos/{repo}/pulls/{pr_number}/commits")
        return [(d.get("commit") or {}).get("message") or "" for d in data]

    def list_review_comments(self, repo: str, pr_number: int, review_id: int) -> List[ReviewComment]:
        data = self._get_paginated(f"/repos/{repo}/pulls/{pr_number}/reviews/{review_id}/comments")
        return [_review_comment_from_api(d) for d in data]

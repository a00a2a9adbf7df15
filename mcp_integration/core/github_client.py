import logging
from typing import Any, Dict, List, Optional

import httpx

from mcp_integration.core.errors import ServiceError

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


class GithubClient:
    """
    Thin wrapper over the GitHub REST API. Every method returns display text.
    """

    def __init__(
        self,
        token: str = "",
        timeout: float = 30.0,
        base_url: str = GITHUB_API_URL,
        http_client: Optional[httpx.Client] = None,
    ):
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.base_url = base_url.rstrip("/")
        self._headers = headers
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        accept: Optional[str] = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        headers = dict(self._headers)
        if accept:
            headers["Accept"] = accept
        try:
            response = self._client.request(method, url, json=json_body, params=params, headers=headers)
        except httpx.HTTPError as e:
            raise ServiceError(f"{method} {url}: {e}") from e

        if response.is_error:
            raise ServiceError(f"{method} {url}: {response.status_code} {_error_message(response)}")
        return response

    def _json(self, method: str, path: str, **kwargs) -> Any:
        response = self._request(method, path, **kwargs)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise ServiceError(f"{method} {path}: invalid JSON response") from e

    def get_pull_request(self, owner: str, repo: str, number: int) -> str:
        pr = self._json("GET", f"/repos/{owner}/{repo}/pulls/{number}")
        return _format_pull_request(pr)

    def get_pull_request_diff(self, owner: str, repo: str, number: int) -> str:
        # Unified diff is the most readable format for review.
        response = self._request(
            "GET", f"/repos/{owner}/{repo}/pulls/{number}", accept="application/vnd.github.diff"
        )
        return response.text

    def create_issue(self, owner: str, repo: str, title: str, body: str) -> str:
        issue = self._json("POST", f"/repos/{owner}/{repo}/issues", json_body={"title": title, "body": body})
        return _format_issue(issue)

    def create_pull_request(self, owner: str, repo: str, title: str, body: str, head: str, base: str) -> str:
        pr = self._json(
            "POST",
            f"/repos/{owner}/{repo}/pulls",
            json_body={"title": title, "body": body, "head": head, "base": base},
        )
        return _format_pull_request(pr)

    def get_comments(self, owner: str, repo: str, number: int) -> str:
        comments = self._json("GET", f"/repos/{owner}/{repo}/issues/{number}/comments")
        return "".join(_format_comment(c) + "\n" for c in comments)

    def add_comment(self, owner: str, repo: str, number: int, body: str) -> str:
        comment = self._json("POST", f"/repos/{owner}/{repo}/issues/{number}/comments", json_body={"body": body})
        return _format_comment(comment)

    def assign_copilot(self, owner: str, repo: str, number: int, assignees: List[str]) -> str:
        issue = self._json(
            "POST", f"/repos/{owner}/{repo}/issues/{number}/assignees", json_body={"assignees": assignees}
        )
        return _format_issue(issue)

    def create_branch(self, owner: str, repo: str, branch_name: str, sha: str) -> str:
        ref = self._json(
            "POST",
            f"/repos/{owner}/{repo}/git/refs",
            json_body={"ref": f"refs/heads/{branch_name}", "sha": sha},
        )
        obj = ref.get("object") or {}
        return f"Ref: {ref.get('ref', '')}\nSHA: {obj.get('sha', '')}\nURL: {ref.get('url', '')}"

    def create_repository(self, name: str, description: str, private: bool) -> str:
        # Created for the authenticated user.
        repo = self._json(
            "POST", "/user/repos", json_body={"name": name, "description": description, "private": private}
        )
        return _format_repository(repo)

    def get_commit(self, owner: str, repo: str, sha: str) -> str:
        commit = self._json("GET", f"/repos/{owner}/{repo}/git/commits/{sha}")
        author = commit.get("author") or {}
        return (
            f"SHA: {commit.get('sha', '')}\n"
            f"Author: {author.get('name', '')} <{author.get('email', '')}>\n"
            f"Date: {author.get('date', '')}\n"
            f"Message: {commit.get('message', '')}\n"
            f"URL: {commit.get('html_url', '')}"
        )

    def get_issue(self, owner: str, repo: str, number: int) -> str:
        issue = self._json("GET", f"/repos/{owner}/{repo}/issues/{number}")
        return _format_issue(issue)

    def get_release_by_tag(self, owner: str, repo: str, tag_name: str) -> str:
        release = self._json("GET", f"/repos/{owner}/{repo}/releases/tags/{tag_name}")
        return (
            f"Name: {release.get('name') or ''}\n"
            f"Tag: {release.get('tag_name', '')}\n"
            f"Draft: {release.get('draft', False)}\n"
            f"Prerelease: {release.get('prerelease', False)}\n"
            f"Published: {release.get('published_at') or ''}\n"
            f"URL: {release.get('html_url', '')}\n"
            f"Body: {release.get('body') or ''}"
        )

    def get_tag(self, owner: str, repo: str, tag_name: str) -> str:
        # The API has no lookup by tag name, so list and filter.
        tags = self._json("GET", f"/repos/{owner}/{repo}/tags")
        for tag in tags:
            if tag.get("name") == tag_name:
                return f"Tag: {tag['name']}\nCommit: {(tag.get('commit') or {}).get('sha', '')}"
        return "Tag not found"

    def list_branches(self, owner: str, repo: str) -> str:
        branches = self._json("GET", f"/repos/{owner}/{repo}/branches")
        return "".join(
            f"Branch: {b.get('name', '')}\nSHA: {(b.get('commit') or {}).get('sha', '')}\n\n" for b in branches
        )

    def list_commits(self, owner: str, repo: str) -> str:
        commits = self._json("GET", f"/repos/{owner}/{repo}/commits")
        lines = []
        for c in commits:
            detail = c.get("commit") or {}
            author = detail.get("author") or {}
            message = (detail.get("message") or "").splitlines()
            lines.append(
                f"SHA: {c.get('sha', '')}\n"
                f"Author: {author.get('name', '')}\n"
                f"Date: {author.get('date', '')}\n"
                f"Message: {message[0] if message else ''}\n"
            )
        return "".join(line + "\n" for line in lines)

    def get_workflows(self, owner: str, repo: str) -> str:
        data = self._json("GET", f"/repos/{owner}/{repo}/actions/workflows")
        return "".join(
            f"Workflow: {w.get('name', '')}\nID: {w.get('id', '')}\nState: {w.get('state', '')}\n\n"
            for w in data.get("workflows", [])
        )

    def run_workflow(self, owner: str, repo: str, workflow_id: str, ref: str) -> str:
        self._request(
            "POST", f"/repos/{owner}/{repo}/actions/workflows/{workflow_id}/dispatches", json_body={"ref": ref}
        )
        return "Workflow run successfully"

    def _search(self, kind: str, query: str, sort: str) -> List[Dict[str, Any]]:
        data = self._json("GET", f"/search/{kind}", params={"q": query, "sort": sort, "order": "desc"})
        return data.get("items", [])

    def search_code(self, query: str) -> str:
        return "".join(
            f"File: {item.get('name', '')}\n"
            f"Repo: {(item.get('repository') or {}).get('full_name', '')}\n"
            f"URL: {item.get('html_url', '')}\n\n"
            for item in self._search("code", query, "indexed")
        )

    def search_issues(self, query: str) -> str:
        return "".join(_format_search_issue(i) for i in self._search("issues", query, "updated"))

    def search_pull_requests(self, query: str) -> str:
        # Pull requests are issues as far as search is concerned.
        return "".join(_format_search_issue(i) for i in self._search("issues", f"{query} is:pr", "updated"))

    def search_repositories(self, query: str) -> str:
        return "".join(
            f"Name: {r.get('full_name', '')}\n"
            f"Description: {r.get('description') or ''}\n"
            f"Stars: {r.get('stargazers_count', 0)}\n"
            f"URL: {r.get('html_url', '')}\n\n"
            for r in self._search("repositories", query, "stars")
        )


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text
    if isinstance(payload, dict) and payload.get("message"):
        return payload["message"]
    return response.text


def _login(user: Optional[Dict[str, Any]]) -> str:
    return (user or {}).get("login", "")


def _format_pull_request(pr: Dict[str, Any]) -> str:
    head = pr.get("head") or {}
    base = pr.get("base") or {}
    return (
        f"Title: {pr.get('title', '')}\n"
        f"Number: {pr.get('number', '')}\n"
        f"State: {pr.get('state', '')}\n"
        f"Author: {_login(pr.get('user'))}\n"
        f"Head: {head.get('ref', '')}\n"
        f"Base: {base.get('ref', '')}\n"
        f"Merged: {pr.get('merged', False)}\n"
        f"URL: {pr.get('html_url', '')}\n"
        f"Body: {pr.get('body') or ''}"
    )


def _format_issue(issue: Dict[str, Any]) -> str:
    assignees = ", ".join(_login(a) for a in issue.get("assignees") or [])
    labels = ", ".join(label.get("name", "") for label in issue.get("labels") or [])
    return (
        f"Title: {issue.get('title', '')}\n"
        f"Number: {issue.get('number', '')}\n"
        f"State: {issue.get('state', '')}\n"
        f"Author: {_login(issue.get('user'))}\n"
        f"Assignees: {assignees}\n"
        f"Labels: {labels}\n"
        f"URL: {issue.get('html_url', '')}\n"
        f"Body: {issue.get('body') or ''}"
    )


def _format_comment(comment: Dict[str, Any]) -> str:
    return (
        f"ID: {comment.get('id', '')}\n"
        f"Author: {_login(comment.get('user'))}\n"
        f"Created: {comment.get('created_at', '')}\n"
        f"Body: {comment.get('body') or ''}\n"
    )


def _format_repository(repo: Dict[str, Any]) -> str:
    return (
        f"Name: {repo.get('full_name', '')}\n"
        f"Description: {repo.get('description') or ''}\n"
        f"Private: {repo.get('private', False)}\n"
        f"URL: {repo.get('html_url', '')}"
    )


def _format_search_issue(issue: Dict[str, Any]) -> str:
    return (
        f"Title: {issue.get('title', '')}\n"
        f"Number: {issue.get('number', '')}\n"
        f"State: {issue.get('state', '')}\n"
        f"URL: {issue.get('html_url', '')}\n\n"
    )

import logging
from typing import Any, Dict, Optional

import httpx

from mcp_integration.core.errors import ConfigError, ServiceError

logger = logging.getLogger(__name__)

SEARCH_MAX_RESULTS = 50


class JiraClient:
    """
    Client for the Jira Cloud REST API v3, authenticated with an email and API token.
    """

    def __init__(
        self,
        jira_url: str,
        username: str,
        token: str,
        timeout: float = 30.0,
        http_client: Optional[httpx.Client] = None,
    ):
        if not username:
            raise ConfigError("username/email is required for Jira authentication")
        if not token:
            raise ConfigError("API token is required for Jira authentication")
        if not jira_url:
            raise ConfigError("Jira URL is required")

        if not jira_url.endswith("/"):
            jira_url += "/"

        self.base_url = jira_url
        self._auth = httpx.BasicAuth(username, token)
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _request(self, method: str, endpoint: str, json_body: Optional[Dict[str, Any]] = None) -> httpx.Response:
        url = f"{self.base_url}rest/api/3/{endpoint}"
        headers = {"Accept": "application/json"}
        if method in ("POST", "PUT"):
            headers["Content-Type"] = "application/json"
        return self._client.request(method, url, json=json_body, headers=headers, auth=self._auth)

    def get_ticket_by_id(self, ticket_id: str) -> str:
        if not ticket_id:
            raise ServiceError("ticket ID cannot be empty")

        try:
            response = self._request("GET", f"issue/{ticket_id}")
        except httpx.HTTPError as e:
            raise ServiceError(f"failed to make request for ticket {ticket_id}: {e}") from e

        if response.status_code != 200:
            raise ServiceError(
                f"failed to get ticket {ticket_id} (HTTP {response.status_code}): {response.text}"
            )

        issue = _parse(response, "response")
        fields = issue.get("fields") or {}
        return (
            f"ID: {issue.get('key', '')}\n"
            f"Summary: {fields.get('summary') or ''}\n"
            f"Status: {(fields.get('status') or {}).get('name', '')}\n"
            f"Assignee: {assignee_name(fields.get('assignee'))}\n"
            f"Description: {extract_description_text(fields.get('description'))}\n"
        )

    def search_tickets(self, jql: str) -> str:
        if not jql:
            raise ServiceError("JQL query cannot be empty")

        search_request = {
            "jql": jql,
            "maxResults": SEARCH_MAX_RESULTS,
            "fields": ["summary", "status", "assignee"],
        }
        try:
            response = self._request("POST", "search", search_request)
        except httpx.HTTPError as e:
            raise ServiceError(f"failed to make search request: {e}") from e

        if response.status_code != 200:
            raise ServiceError(
                f"failed to search tickets with JQL '{jql}' (HTTP {response.status_code}): {response.text}"
            )

        issues = _parse(response, "search response").get("issues") or []
        if not issues:
            return "No tickets found matching the query."

        result = ""
        for issue in issues:
            fields = issue.get("fields") or {}
            result += (
                f"Key: {issue.get('key', '')}\n"
                f"Summary: {fields.get('summary') or ''}\n"
                f"Status: {(fields.get('status') or {}).get('name', '')}\n"
                f"Assignee: {assignee_name(fields.get('assignee'))}\n\n"
            )
        return result

    def create_ticket(self, project_key: str, summary: str, description: str) -> str:
        if not project_key:
            raise ServiceError("project key cannot be empty")
        if not summary:
            raise ServiceError("summary cannot be empty")

        # Descriptions are sent in Atlassian Document Format.
        doc: Dict[str, Any] = {"type": "doc", "version": 1, "content": []}
        if description:
            doc["content"].append({
                "type": "paragraph",
                "content": [{"type": "text", "text": description}],
            })

        create_request = {
            "fields": {
                "project": {"key": project_key},
                "summary": summary,
                "description": doc,
                "issuetype": {"name": "Task"},
            }
        }
        try:
            response = self._request("POST", "issue", create_request)
        except httpx.HTTPError as e:
            raise ServiceError(f"failed to make create request: {e}") from e

        if response.status_code != 201:
            raise ServiceError(f"failed to create ticket (HTTP {response.status_code}): {response.text}")

        created = _parse(response, "create response")
        return f"Created ticket: {created.get('key', '')} - {summary}"


def _parse(response: httpx.Response, what: str) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError as e:
        raise ServiceError(f"failed to parse {what}: {e}") from e
    if not isinstance(data, dict):
        raise ServiceError(f"failed to parse {what}: expected a JSON object")
    return data


def assignee_name(assignee: Optional[Dict[str, Any]]) -> str:
    if not assignee:
        return "Unassigned"
    return assignee.get("displayName") or assignee.get("emailAddress", "")


def extract_description_text(description: Optional[Dict[str, Any]]) -> str:
    """Flatten the paragraphs of an Atlassian Document Format body to plain text."""
    if not description:
        return ""
    text = ""
    for block in description.get("content") or []:
        if block.get("type") != "paragraph":
            continue
        for item in block.get("content") or []:
            if item.get("type") == "text":
                text += item.get("text", "") + " "
        text += "\n"
    return text

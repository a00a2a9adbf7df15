import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import httpx

from mcp_integration.core.errors import ServiceError

logger = logging.getLogger(__name__)

NOTION_API_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"


class NotionClient:
    def __init__(
        self,
        token: str = "",
        timeout: float = 30.0,
        base_url: str = NOTION_API_URL,
        http_client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Notion-Version": NOTION_VERSION,
            "Content-Type": "application/json",
        }
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _request(self, method: str, path: str, json_body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self._client.request(method, url, json=json_body, headers=self._headers)
        except httpx.HTTPError as e:
            raise ServiceError(f"{method} {url}: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if response.is_error:
            # Notion error bodies carry a machine code and a readable message.
            message = payload.get("message") or response.text
            code = payload.get("code", "")
            raise ServiceError(f"notion: {message} (code: {code}, status: {response.status_code})")
        return payload

    def search_pages_by_title(self, title: str) -> str:
        """Return the URL of every page nested directly under another page."""
        resp = self._request("POST", "/search", {"query": title, "filter": {"property": "object", "value": "page"}})
        result = ""
        for page in resp.get("results", []):
            if page.get("object") != "page":
                continue
            if (page.get("parent") or {}).get("type") == "page_id":
                result += page.get("url", "") + "\n"
        return result

    def get_page_by_url(self, page_url: str) -> str:
        page_id = extract_page_id_from_url(page_url)
        page = self._request("GET", f"/pages/{page_id}")
        return (
            f"Page ID: {page.get('id', '')}\n"
            f"URL: {page.get('url', '')}\n"
            f"Created: {page.get('created_time', '')}\n"
            f"Last Edited: {page.get('last_edited_time', '')}"
        )

    def get_database(self, database_id: str) -> str:
        database = self._request("GET", f"/databases/{database_id}")
        properties = "".join(
            f"- {name} ({prop.get('type', '')})\n" for name, prop in (database.get("properties") or {}).items()
        )
        return (
            f"Database ID: {database.get('id', '')}\n"
            f"Title: {database_title(database)}\n"
            f"Created: {database.get('created_time', '')}\n"
            f"Properties:\n{properties}"
        )

    def create_page(self, parent_id: str, title: str, content: str) -> str:
        params: Dict[str, Any] = {
            "parent": {"type": "page_id", "page_id": parent_id},
            "properties": {"title": {"title": _rich_text(title)}},
        }
        if content:
            params["children"] = [_paragraph(content)]

        page = self._request("POST", "/pages", params)
        return f"Created page: {title} (ID: {page.get('id', '')})"

    def create_database(self, parent_page_id: str, title: str) -> str:
        params = {
            "parent": {"type": "page_id", "page_id": parent_page_id},
            "title": _rich_text(title),
            "properties": {"Name": {"title": {}}},
        }
        database = self._request("POST", "/databases", params)
        return f"Created database: {title} (ID: {database.get('id', '')})"

    def update_page(self, page_id: str, title: str, content: str) -> str:
        """Rename the page when a title is given and append content as a new paragraph."""
        params: Dict[str, Any] = {}
        if title:
            params["properties"] = {"title": {"title": _rich_text(title)}}
        page = self._request("PATCH", f"/pages/{page_id}", params)

        if content:
            self._request("PATCH", f"/blocks/{page_id}/children", {"children": [_paragraph(content)]})

        return f"Updated page: {page.get('id', page_id)}"

    def update_database(self, database_id: str, title: str) -> str:
        database = self._request("PATCH", f"/databases/{database_id}", {"title": _rich_text(title)})
        return f"Updated database: {database.get('id', database_id)}"


def extract_page_id_from_url(page_url: str) -> str:
    """Page URLs end in `<slug>-<id>`; the ID is the last dash-separated part of the path."""
    path = urlparse(page_url).path.strip("/")
    page_id = path.split("-")[-1].split("/")[-1]
    if not page_id:
        raise ServiceError("invalid Notion URL")
    return page_id


def database_title(database: Dict[str, Any]) -> str:
    title = database.get("title") or []
    if title and title[0].get("text"):
        return title[0]["text"].get("content", "")
    return "Untitled"


def _rich_text(text: str) -> List[Dict[str, Any]]:
    return [{"type": "text", "text": {"content": text}}]


def _paragraph(text: str) -> Dict[str, Any]:
    return {"object": "block", "type": "paragraph", "paragraph": {"rich_text": _rich_text(text)}}

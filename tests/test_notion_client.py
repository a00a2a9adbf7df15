"""Tests for NotionClient against a mocked httpx transport."""

import json

import httpx
import pytest

from mcp_integration.core.errors import ServiceError
from mcp_integration.core.notion_client import NOTION_VERSION, NotionClient, extract_page_id_from_url


def _client(handler) -> NotionClient:
    return NotionClient("ntn", http_client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestSearchPages:
    def test_only_pages_under_pages(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["Authorization"] == "Bearer ntn"
            assert request.headers["Notion-Version"] == NOTION_VERSION
            assert json.loads(request.content)["query"] == "Roadmap"
            return httpx.Response(200, json={"results": [
                {"object": "page", "parent": {"type": "page_id"}, "url": "https://notion.so/Roadmap-1"},
                {"object": "page", "parent": {"type": "workspace"}, "url": "https://notion.so/Top-2"},
                {"object": "database", "parent": {"type": "page_id"}, "url": "https://notion.so/Db-3"},
            ]})

        assert _client(handler).search_pages_by_title("Roadmap") == "https://notion.so/Roadmap-1\n"


class TestPages:
    def test_get_page_by_url(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v1/pages/0123abcd"
            return httpx.Response(200, json={
                "id": "0123abcd", "url": "https://notion.so/Plan-0123abcd",
                "created_time": "2024-01-01T00:00:00.000Z", "last_edited_time": "2024-01-02T00:00:00.000Z",
            })

        text = _client(handler).get_page_by_url("https://www.notion.so/acme/Plan-0123abcd")
        assert text.startswith("Page ID: 0123abcd\n")
        assert "Last Edited: 2024-01-02T00:00:00.000Z" in text

    def test_create_page_with_content(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            assert body["parent"] == {"type": "page_id", "page_id": "parent"}
            assert body["properties"]["title"]["title"][0]["text"]["content"] == "Notes"
            assert body["children"][0]["paragraph"]["rich_text"][0]["text"]["content"] == "hello"
            return httpx.Response(200, json={"id": "new-page"})

        assert _client(handler).create_page("parent", "Notes", "hello") == "Created page: Notes (ID: new-page)"

    def test_create_page_without_content(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert "children" not in json.loads(request.content)
            return httpx.Response(200, json={"id": "p"})

        _client(handler).create_page("parent", "Notes", "")

    def test_update_page_title_and_content(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, request.url.path))
            return httpx.Response(200, json={"id": "pg"})

        assert _client(handler).update_page("pg", "Renamed", "more") == "Updated page: pg"
        assert seen == [("PATCH", "/v1/pages/pg"), ("PATCH", "/v1/blocks/pg/children")]

    def test_update_page_title_only(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json={"id": "pg"})

        _client(handler).update_page("pg", "Renamed", "")
        assert seen == ["/v1/pages/pg"]


class TestDatabases:
    def test_get_database(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={
                "id": "db1",
                "title": [{"text": {"content": "Tasks"}}],
                "created_time": "2024-01-01",
                "properties": {"Name": {"type": "title"}, "Done": {"type": "checkbox"}},
            })

        text = _client(handler).get_database("db1")
        assert text == "Database ID: db1\nTitle: Tasks\nCreated: 2024-01-01\nProperties:\n- Name (title)\n- Done (checkbox)\n"

    def test_untitled_database(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"id": "db1", "title": [], "properties": {}})

        assert "Title: Untitled" in _client(handler).get_database("db1")

    def test_create_database(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            assert body["parent"]["page_id"] == "pp"
            assert body["properties"] == {"Name": {"title": {}}}
            return httpx.Response(200, json={"id": "db2"})

        assert _client(handler).create_database("pp", "Tasks") == "Created database: Tasks (ID: db2)"

    def test_update_database(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "PATCH"
            assert json.loads(request.content)["title"][0]["text"]["content"] == "Renamed"
            return httpx.Response(200, json={"id": "db3"})

        assert _client(handler).update_database("db3", "Renamed") == "Updated database: db3"


class TestErrors:
    def test_api_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"object": "error", "code": "object_not_found", "message": "Not here"})

        with pytest.raises(ServiceError, match="Not here"):
            _client(handler).get_database("missing")

    def test_invalid_url(self) -> None:
        with pytest.raises(ServiceError, match="invalid Notion URL"):
            extract_page_id_from_url("https://www.notion.so/")

    def test_page_id_from_slug(self) -> None:
        assert extract_page_id_from_url("https://www.notion.so/My-Page-abc123") == "abc123"

"""Tests for JiraClient against a mocked httpx transport."""

import base64
import json

import httpx
import pytest

from mcp_integration.core.errors import ConfigError, ServiceError
from mcp_integration.core.jira_client import JiraClient, assignee_name, extract_description_text


def _client(handler) -> JiraClient:
    return JiraClient(
        "https://acme.atlassian.net",
        "me@acme.com",
        "secret",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def _unreachable(request: httpx.Request) -> httpx.Response:
    raise AssertionError("no request expected")


class TestConstruction:
    def test_requires_username(self) -> None:
        with pytest.raises(ConfigError, match="username"):
            JiraClient("https://acme.atlassian.net", "", "secret")

    def test_requires_token(self) -> None:
        with pytest.raises(ConfigError, match="API token"):
            JiraClient("https://acme.atlassian.net", "me", "")

    def test_base_url_gets_trailing_slash(self) -> None:
        assert _client(_unreachable).base_url == "https://acme.atlassian.net/"


class TestGetTicket:
    def test_formats_issue(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == "https://acme.atlassian.net/rest/api/3/issue/PROJ-1"
            expected = base64.b64encode(b"me@acme.com:secret").decode()
            assert request.headers["Authorization"] == f"Basic {expected}"
            return httpx.Response(200, json={
                "key": "PROJ-1",
                "fields": {
                    "summary": "Broken login",
                    "status": {"name": "In Progress"},
                    "assignee": {"displayName": "Ada"},
                    "description": {
                        "type": "doc",
                        "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Steps"}]}],
                    },
                },
            })

        text = _client(handler).get_ticket_by_id("PROJ-1")
        assert text == "ID: PROJ-1\nSummary: Broken login\nStatus: In Progress\nAssignee: Ada\nDescription: Steps \n\n"

    def test_empty_id(self) -> None:
        with pytest.raises(ServiceError, match="ticket ID cannot be empty"):
            _client(_unreachable).get_ticket_by_id("")

    def test_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="Issue does not exist")

        with pytest.raises(ServiceError, match=r"failed to get ticket PROJ-9 \(HTTP 404\): Issue does not exist"):
            _client(handler).get_ticket_by_id("PROJ-9")


class TestSearchTickets:
    def test_request_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.url.path == "/rest/api/3/search"
            assert json.loads(request.content) == {
                "jql": "project = PROJ",
                "maxResults": 50,
                "fields": ["summary", "status", "assignee"],
            }
            return httpx.Response(200, json={"issues": [
                {"key": "PROJ-2", "fields": {"summary": "S", "status": {"name": "Done"}, "assignee": None}},
            ], "total": 1})

        text = _client(handler).search_tickets("project = PROJ")
        assert text == "Key: PROJ-2\nSummary: S\nStatus: Done\nAssignee: Unassigned\n\n"

    def test_no_results(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"issues": [], "total": 0})

        assert _client(handler).search_tickets("x") == "No tickets found matching the query."

    def test_empty_jql(self) -> None:
        with pytest.raises(ServiceError, match="JQL query cannot be empty"):
            _client(_unreachable).search_tickets("")


class TestCreateTicket:
    def test_creates_task_with_adf_description(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            fields = json.loads(request.content)["fields"]
            assert fields["project"] == {"key": "PROJ"}
            assert fields["issuetype"] == {"name": "Task"}
            assert fields["description"]["content"][0]["content"][0]["text"] == "Details"
            return httpx.Response(201, json={"key": "PROJ-3"})

        assert _client(handler).create_ticket("PROJ", "New", "Details") == "Created ticket: PROJ-3 - New"

    def test_empty_description_sends_empty_doc(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content)["fields"]["description"] == {"type": "doc", "version": 1, "content": []}
            return httpx.Response(201, json={"key": "PROJ-4"})

        _client(handler).create_ticket("PROJ", "New", "")

    def test_validation(self) -> None:
        with pytest.raises(ServiceError, match="project key cannot be empty"):
            _client(_unreachable).create_ticket("", "s", "")
        with pytest.raises(ServiceError, match="summary cannot be empty"):
            _client(_unreachable).create_ticket("PROJ", "", "")

    def test_rejected(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, text="bad project")

        with pytest.raises(ServiceError, match=r"failed to create ticket \(HTTP 400\)"):
            _client(handler).create_ticket("NOPE", "s", "")


class TestHelpers:
    def test_assignee_name(self) -> None:
        assert assignee_name(None) == "Unassigned"
        assert assignee_name({"displayName": "", "emailAddress": "a@b.c"}) == "a@b.c"

    def test_description_skips_non_paragraphs(self) -> None:
        doc = {"content": [
            {"type": "heading", "content": [{"type": "text", "text": "H"}]},
            {"type": "paragraph", "content": [{"type": "text", "text": "a"}, {"type": "text", "text": "b"}]},
        ]}
        assert extract_description_text(doc) == "a b \n"
        assert extract_description_text(None) == ""

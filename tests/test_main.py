"""Tests for process startup."""

import io
import json

import pytest

from mcp_integration import main as entry
from mcp_integration.config import ENV_OVERRIDES, Config
from mcp_integration.core.errors import ConfigError
from mcp_integration.core.github_client import GithubClient
from mcp_integration.core.jira_client import JiraClient
from mcp_integration.core.notion_client import NotionClient


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for env_name in ENV_OVERRIDES.values():
        monkeypatch.delenv(env_name, raising=False)


class TestBuildServices:
    def test_missing_credentials_fail(self) -> None:
        with pytest.raises(ConfigError, match="jira_url, jira_username, jira_token"):
            entry.build_services(Config())

    def test_builds_all_clients(self) -> None:
        services = entry.build_services(
            Config(jira_url="https://a.atlassian.net", jira_username="me", jira_token="t", http_timeout=5)
        )
        assert isinstance(services["github"], GithubClient)
        assert isinstance(services["jira"], JiraClient)
        assert isinstance(services["notion"], NotionClient)
        for client in services.values():
            client.close()


class TestMain:
    def test_exits_non_zero_without_credentials(self, tmp_path) -> None:
        args = ["--config", str(tmp_path / "config.yml"), "--local-config", str(tmp_path / "local.yml")]
        assert entry.main(args) == 1

    def test_serves_until_input_closes(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        config = tmp_path / "config.yml"
        config.write_text("jira_url: https://a.atlassian.net\njira_username: me\njira_token: t\n")
        stdin = io.StringIO('{"jsonrpc":"2.0","id":1,"method":"initialize"}\n')
        stdout = io.StringIO()
        monkeypatch.setattr("sys.stdin", stdin)
        monkeypatch.setattr("sys.stdout", stdout)

        assert entry.main(["--config", str(config), "--local-config", str(tmp_path / "local.yml")]) == 0
        response = json.loads(stdout.getvalue())
        assert response["result"]["serverInfo"]["name"] == "mcp-integration-server"

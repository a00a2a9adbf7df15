import argparse
import json
import logging
import sys

from mcp_integration.config import Config
from mcp_integration.core.errors import ConfigError
from mcp_integration.core.github_client import GithubClient
from mcp_integration.core.jira_client import JiraClient
from mcp_integration.core.notion_client import NotionClient
from mcp_integration.server import MCPServer

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="MCP server for GitHub, Jira and Notion over stdio")
    parser.add_argument("--config", default="config.yml", help="Base YAML config file")
    parser.add_argument("--local-config", default="local.yml", help="Optional YAML file overriding the base config")
    return parser.parse_args(argv)


def build_services(config: Config) -> dict:
    """Create the client handles shared by every request."""
    missing = config.missing_credentials()
    if missing:
        raise ConfigError(f"Missing required credentials: {', '.join(missing)}")

    return {
        "github": GithubClient(config.github_token, timeout=config.http_timeout),
        "jira": JiraClient(config.jira_url, config.jira_username, config.jira_token, timeout=config.http_timeout),
        "notion": NotionClient(config.notion_token, timeout=config.http_timeout),
    }


def main(argv=None) -> int:
    args = parse_args(argv)

    # stdout carries protocol frames; logs go to stderr
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        config = Config.load(args.config, args.local_config)
        logging.getLogger().setLevel(config.log_level.upper())
        logger.info(json.dumps({"event": "config_loaded", "config": config.mask_secrets()}, ensure_ascii=False))
        services = build_services(config)
    except (ConfigError, ValueError) as e:
        logger.error(f"Error loading config: {e}")
        return 1

    server = MCPServer(services)
    try:
        server.serve(sys.stdin, sys.stdout)
    finally:
        for client in services.values():
            client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

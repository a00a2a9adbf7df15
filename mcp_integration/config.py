import os
from typing import Any, Dict, List
import yaml
from pydantic import BaseModel, ValidationError

from mcp_integration.core.errors import ConfigError

# Environment variables take precedence over both YAML files.
ENV_OVERRIDES = {
    "github_token": "GITHUB_TOKEN",
    "jira_url": "JIRA_URL",
    "jira_username": "JIRA_USERNAME",
    "jira_token": "JIRA_TOKEN",
    "notion_token": "NOTION_TOKEN",
    "log_level": "MCP_LOG_LEVEL",
}

REQUIRED_FIELDS = ("jira_url", "jira_username", "jira_token")

SECRET_FIELDS = ("github_token", "jira_token", "notion_token")


class Config(BaseModel):
    github_token: str = ""
    jira_url: str = ""
    jira_username: str = ""
    jira_token: str = ""
    notion_token: str = ""
    http_timeout: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def load(cls, config_path: str = "config.yml", local_path: str = "local.yml") -> "Config":
        """Load config.yml, then local.yml on top of it, then the environment."""
        data: Dict[str, Any] = {}
        for path in (config_path, local_path):
            data.update(_read_yaml(path))

        for field, env_name in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                data[field] = value

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def missing_credentials(self) -> List[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def mask_secrets(self) -> Dict[str, Any]:
        """Return a dict representation with secrets masked for logging."""
        d = self.model_dump()
        for name in SECRET_FIELDS:
            if d.get(name):
                d[name] = "***"
        return d


def _read_yaml(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data

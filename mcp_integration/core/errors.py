"""Error types shared by the server, the tool registry and the service clients."""


class JsonRpcError(Exception):
    def __init__(self, code, message, data=None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def to_dict(self):
        error = {"code": self.code, "message": self.message}
        if self.data:
            error["data"] = self.data
        return error


class ConfigError(Exception):
    """Configuration could not be loaded or is missing required credentials."""


class ToolError(Exception):
    """Base error for failures reported inside a tool call result."""


class UnknownToolError(ToolError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown tool: {name}")


class ServiceError(ToolError):
    """An upstream API call failed or returned an unusable response."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, field_validator

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "mcp-integration-server"
SERVER_VERSION = "1.0.0"

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class JsonRpcRequest(BaseModel):
    jsonrpc: str = "2.0"
    method: str = ""
    params: Optional[Any] = None
    # Echoed back verbatim, whatever JSON value the client sent.
    id: Any = None

    @field_validator("method", mode="before")
    @classmethod
    def _method_as_string(cls, value: Any) -> str:
        # A missing or non-string method routes to "Method not found".
        return value if isinstance(value, str) else ""


class JsonRpcResponse(BaseModel):
    jsonrpc: str = "2.0"
    result: Optional[Any] = None
    error: Optional[Dict[str, Any]] = None
    id: Any = None

    def to_wire(self) -> Dict[str, Any]:
        """Serialize for the transport; `id` is always present, even when null."""
        d = self.model_dump(exclude_none=True)
        d["id"] = self.id
        return d


class ToolInputSchema(BaseModel):
    type: str = "object"
    properties: Dict[str, Any]
    required: Optional[List[str]] = None


class ToolDefinition(BaseModel):
    name: str
    description: Optional[str] = None
    inputSchema: ToolInputSchema


class TextContent(BaseModel):
    type: str = "text"
    text: str


class ToolCallResult(BaseModel):
    content: List[TextContent]
    isError: bool = False

    @classmethod
    def from_text(cls, text: str, is_error: bool = False) -> "ToolCallResult":
        return cls(content=[TextContent(text=text)], isError=is_error)

import json
import logging
from typing import IO, Any, Dict, Mapping, Optional, TextIO, Union

from pydantic import ValidationError

from mcp_integration.core.errors import JsonRpcError, UnknownToolError
from mcp_integration.core.mcp_types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    PROTOCOL_VERSION,
    SERVER_NAME,
    SERVER_VERSION,
    JsonRpcRequest,
    JsonRpcResponse,
    ToolCallResult,
)
from mcp_integration.tools.registry import ToolRegistry, registry
# Import tools to register them
import mcp_integration.tools.github_tools
import mcp_integration.tools.jira_tools
import mcp_integration.tools.notion_tools

logger = logging.getLogger(__name__)


class MCPServer:
    """
    Line-oriented JSON-RPC server. `services` maps a service name
    ("github", "jira", "notion") to the client its tools call into.
    """

    def __init__(self, services: Mapping[str, Any], tools: ToolRegistry = registry):
        self.services = services
        self.tools = tools

    def serve(self, instream: IO, outstream: TextIO) -> None:
        """Answer one request per input line until the stream is exhausted."""
        logger.info("Starting MCP server...")
        # Read raw bytes when the stream has them so that decoding failures
        # stay confined to the offending line.
        source = getattr(instream, "buffer", instream)
        try:
            for line in source:
                if not line.strip():
                    continue
                response = self.handle_line(line)
                if response is None:
                    continue
                outstream.write(json.dumps(response, ensure_ascii=False) + "\n")
                outstream.flush()
        except OSError as e:
            logger.error(f"Error reading from input: {e}")
        logger.info("Input closed, stopping MCP server")

    def handle_line(self, line: Union[str, bytes]) -> Optional[Dict[str, Any]]:
        try:
            if isinstance(line, bytes):
                line = line.decode("utf-8")
            request = JsonRpcRequest.model_validate_json(line)
        except UnicodeDecodeError as e:
            logger.warning(f"Parse error: {e}")
            return JsonRpcResponse(error={"code": PARSE_ERROR, "message": "Parse error"}).to_wire()
        except ValidationError as e:
            logger.warning(f"Parse error: {e.errors()[0]['msg'] if e.errors() else e}")
            return JsonRpcResponse(error={"code": PARSE_ERROR, "message": "Parse error"}).to_wire()

        # Notifications never get a reply.
        if request.method.startswith("notifications/"):
            logger.info(f"Notification received: {request.method}")
            return None

        try:
            result = self.handle_request(request)
        except JsonRpcError as e:
            return JsonRpcResponse(error=e.to_dict(), id=request.id).to_wire()
        except Exception as e:
            logger.exception(f"Internal error handling {request.method}")
            error = JsonRpcError(INTERNAL_ERROR, "Internal error", str(e))
            return JsonRpcResponse(error=error.to_dict(), id=request.id).to_wire()

        return JsonRpcResponse(result=result, id=request.id).to_wire()

    def handle_request(self, request: JsonRpcRequest) -> Dict[str, Any]:
        method = request.method

        if method == "initialize":
            return {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {
                    "tools": {}
                },
                "serverInfo": {
                    "name": SERVER_NAME,
                    "version": SERVER_VERSION
                }
            }
        elif method == "ping":
            return {}
        elif method == "tools/list":
            return {
                "tools": [t.model_dump(exclude_none=True) for t in self.tools.get_definitions()]
            }
        elif method == "tools/call":
            return self.call_tool(request.params).model_dump()
        else:
            raise JsonRpcError(METHOD_NOT_FOUND, "Method not found")

    def call_tool(self, params: Any) -> ToolCallResult:
        if not isinstance(params, dict):
            raise JsonRpcError(INVALID_PARAMS, "Invalid params")

        tool_name = params.get("name")
        if not isinstance(tool_name, str):
            raise JsonRpcError(INVALID_PARAMS, "Missing tool name")

        arguments = params.get("arguments")
        if not isinstance(arguments, dict):
            arguments = {}

        logger.info(f"Calling tool: {tool_name}")
        try:
            text = self.tools.call_tool(tool_name, arguments, self.services)
        except UnknownToolError as e:
            logger.warning(str(e))
            return ToolCallResult.from_text(str(e), is_error=True)
        except Exception as e:
            logger.warning(f"Tool {tool_name} failed: {e}")
            return ToolCallResult.from_text(str(e), is_error=True)

        return ToolCallResult.from_text(text)

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from mcp_integration.core.errors import UnknownToolError
from mcp_integration.core.mcp_types import ToolDefinition, ToolInputSchema

logger = logging.getLogger(__name__)


def _coerce_string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _coerce_integer(value: Any) -> int:
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


def _coerce_boolean(value: Any) -> bool:
    return value if isinstance(value, bool) else False


def _coerce_string_array(value: Any) -> list:
    if not isinstance(value, list):
        return []
    return [_coerce_string(item) for item in value]


_COERCERS: Dict[str, Callable[[Any], Any]] = {
    "string": _coerce_string,
    "integer": _coerce_integer,
    "boolean": _coerce_boolean,
    "array": _coerce_string_array,
}


def coerce_arguments(schema: ToolInputSchema, arguments: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Extract every declared property from `arguments`, replacing absent or
    mistyped values with the zero value of the declared type.
    """
    kwargs = {}
    for prop, spec in schema.properties.items():
        coerce = _COERCERS.get(spec.get("type"), _coerce_string)
        kwargs[prop] = coerce(arguments.get(prop))
    return kwargs


class ToolRegistry:
    def __init__(self):
        self._tools: Dict[str, Callable] = {}
        self._services: Dict[str, str] = {}
        self._definitions: Dict[str, ToolDefinition] = {}

    def register(self, name: str, service: str, description: str, input_schema: Dict[str, Any]):
        def decorator(func: Callable):
            if name in self._tools:
                raise ValueError(f"Tool {name} already registered")
            self._tools[name] = func
            self._services[name] = service
            self._definitions[name] = ToolDefinition(
                name=name,
                description=description,
                inputSchema=ToolInputSchema(**input_schema)
            )
            return func
        return decorator

    def get_tool(self, name: str) -> Optional[Callable]:
        return self._tools.get(name)

    def get_definitions(self) -> list[ToolDefinition]:
        return list(self._definitions.values())

    def names(self) -> list[str]:
        return list(self._tools)

    def call_tool(self, name: str, arguments: Mapping[str, Any], services: Mapping[str, Any]) -> str:
        func = self.get_tool(name)
        if not func:
            raise UnknownToolError(name)

        kwargs = coerce_arguments(self._definitions[name].inputSchema, arguments)
        client = services[self._services[name]]
        return func(client, **kwargs)


registry = ToolRegistry()

"""
Tool Registry: name-keyed collection of function tools.

Usage:
    from strictool.tool import ToolRegistry

    registry = ToolRegistry()
    registry.register(get_weather)

    # Offer check, then schemas for the LLM
    offered = await registry.enabled_tools(ctx, agent)
    schemas = registry.get_schemas([tool.name for tool in offered])

    # Execute a tool call selected by the agent
    text = await registry.execute_tool_call(tool_call, context=run_state)
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from strictool.config.tool_config import FunctionToolConfig

from .errors import ToolDefinitionError, ToolRegistrationError
from .function_tool import FunctionTool, ToolContext
from .output import format_tool_output
from .tool_types import ToolCall

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Registry of FunctionTool descriptors with unique names.

    Provides:
    - Offer check over all tools (enablement)
    - Schema access for LLM function calling
    - Dispatch of agent tool calls to the right tool
    """

    def __init__(self, tools: Optional[Iterable[FunctionTool]] = None, config: Optional[FunctionToolConfig] = None):
        self.config = config or FunctionToolConfig()
        self._tools: Dict[str, FunctionTool] = {}
        if tools:
            self.register_many(tools)

    def register(self, tool: FunctionTool) -> FunctionTool:
        """
        Add a tool.

        Raises:
            ToolRegistrationError: not a FunctionTool, or the name is taken.
        """
        if not isinstance(tool, FunctionTool):
            raise ToolRegistrationError(f"Expected a FunctionTool, got {type(tool).__name__}")
        if tool.name in self._tools:
            raise ToolRegistrationError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")
        return tool

    def register_many(self, tools: Iterable[FunctionTool]) -> None:
        for tool in tools:
            self.register(tool)

    def try_register(self, build: Any, *args, **kwargs) -> Optional[FunctionTool]:
        """
        Build a tool with ``build(*args, **kwargs)`` and register it, logging
        and skipping it when construction or registration fails.

        Returns:
            The registered tool, or None when it was skipped.
        """
        try:
            tool = build(*args, **kwargs)
            return self.register(tool)
        except ToolDefinitionError as exc:
            logger.warning(f"Skipping tool registration: {exc}")
            return None

    def unregister(self, name: str) -> Optional[FunctionTool]:
        return self._tools.pop(name, None)

    def get(self, name: str) -> Optional[FunctionTool]:
        """Get tool by name."""
        return self._tools.get(name)

    def get_schema(self, name: str) -> Optional[Dict[str, Any]]:
        """Get the function calling schema for a single tool."""
        tool = self._tools.get(name)
        return tool.to_openai_tool() if tool else None

    def get_schemas(self, names: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        """
        Get function calling schemas for several tools.

        Args:
            names: Tool names (None = all tools). Unknown names are skipped.
        """
        if names is None:
            return [t.to_openai_tool() for t in self._tools.values()]
        return [self._tools[name].to_openai_tool() for name in names if name in self._tools]

    async def enabled_tools(self, ctx: Any = None, agent: Any = None) -> List[FunctionTool]:
        """
        Offer check: the tools that may be presented to the agent now.

        Errors raised by an enablement policy propagate; they never count as disabled.
        """
        enabled = []
        for tool in self._tools.values():
            if await tool.check_enabled(ctx, agent):
                enabled.append(tool)
        return enabled

    async def execute(
        self,
        name: str,
        arguments: Union[str, bytes, None],
        context: Any = None,
        tool_call_id: str = "",
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Invoke a tool by name with raw JSON arguments.

        Raises:
            KeyError: If tool not found
        """
        tool = self._tools.get(name)
        if not tool:
            raise KeyError(f"Tool not found: {name}")
        ctx = ToolContext(context=context, tool_name=name, tool_call_id=tool_call_id, timeout=timeout)
        return await tool.invoke(ctx, arguments)

    async def execute_tool_call(self, tool_call: Any, context: Any = None, timeout: Optional[float] = None) -> str:
        """
        Run an agent tool call and render its result as text for the agent.

        Args:
            tool_call: ToolCall or anything ToolCall.from_any accepts.
            context: Opaque run context exposed as ToolContext.context.
            timeout: Optional deadline in seconds.
        """
        call = ToolCall.from_any(tool_call)
        if call is None:
            raise ValueError("Invalid tool call: missing tool name")
        result = await self.execute(call.name, call.arguments, context=context, tool_call_id=call.id, timeout=timeout)
        return format_tool_output(result, self.config.tool_result_max_chars)

    @property
    def tool_names(self) -> List[str]:
        """List all registered tool names."""
        return list(self._tools.keys())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[FunctionTool]:
        return iter(self._tools.values())

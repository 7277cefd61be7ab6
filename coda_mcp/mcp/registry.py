"""Tool registry and dispatcher.

A ToolHandler pairs a ToolDefinition with a pydantic input model and a
coroutine that performs exactly one CodaClient call. The ToolRegistry is the
single boundary where every outcome (payload, validation failure, API error,
unexpected exception) becomes a CallOutcome; nothing raised by a handler
escapes call_tool().
"""

import inspect
import json
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Type

import pydantic

from coda_mcp.sdk.exceptions import CodaError

logger = logging.getLogger(__name__)

Runner = Callable[[Any], Awaitable[Any]]
Renderer = Callable[[Any, Any], str]


@dataclass(frozen=True)
class ToolDefinition:
    """Name, description and JSON input schema of one exposed tool."""
    name: str
    description: str
    input_schema: Mapping[str, Any]


@dataclass(frozen=True)
class CallOutcome:
    """The text envelope returned to the host for every tool call."""
    text: str
    is_error: bool = False

    @classmethod
    def success(cls, payload: Any, note: Optional[str] = None) -> "CallOutcome":
        text = json.dumps(payload, indent=2, ensure_ascii=False)
        if note:
            text += f"\n\n{note}"
        return cls(text)

    @classmethod
    def message(cls, text: str) -> "CallOutcome":
        return cls(text)

    @classmethod
    def error(cls, message: str) -> "CallOutcome":
        return cls(f"Error: {message}", is_error=True)


def describe_validation_error(error: pydantic.ValidationError) -> str:
    """Describe the first violated constraint as '<field path>: <message>'."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


@dataclass(frozen=True)
class ToolHandler:
    """
    One callable tool.

    Args:
        definition: What list_tools() reports for this tool
        schema: Pydantic model the raw arguments are validated against
        run: Coroutine taking the validated model and returning the payload
        note: Advisory text appended after a successful JSON payload
        render: Builds the success text itself instead of dumping the payload
    """
    definition: ToolDefinition
    schema: Type[pydantic.BaseModel]
    run: Runner
    note: Optional[str] = None
    render: Optional[Renderer] = None
    logger: logging.Logger = field(default=logger, compare=False, repr=False)

    @property
    def name(self) -> str:
        return self.definition.name

    async def __call__(self, arguments: Mapping[str, Any]) -> CallOutcome:
        try:
            params = self.schema.model_validate(arguments)
        except pydantic.ValidationError as e:
            message = describe_validation_error(e)
            self.logger.debug(f"Invalid arguments for {self.name}: {message}")
            return CallOutcome.error(message)

        self.logger.debug(f"Running {self.name} with {params.model_dump(by_alias=True, exclude_none=True)}")
        try:
            result = await self.run(params)
        except CodaError as e:
            self.logger.error(f"Error running {self.name}: {e.message}")
            return CallOutcome.error(e.message)

        if self.render is not None:
            return CallOutcome.message(self.render(params, result))
        return CallOutcome.success(result, note=self.note)


class ToolGroup:
    """
    Collects the handlers of one resource group via the tool() decorator.

    Example:
        tools = ToolGroup()

        @tools.tool("coda_get_doc", GetDocInput, description="Get one doc.")
        async def get_doc(params):
            return await client.get_doc(params.doc_id)
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.handlers: List[ToolHandler] = []
        self._logger = logger or logging.getLogger(__name__)

    def tool(
        self,
        name: str,
        schema: Type[pydantic.BaseModel],
        *,
        description: Optional[str] = None,
        note: Optional[str] = None,
        render: Optional[Renderer] = None,
    ) -> Callable[[Runner], Runner]:
        """Register the decorated coroutine; its docstring is the default description."""
        def decorator(func: Runner) -> Runner:
            definition = ToolDefinition(
                name=name,
                description=description or inspect.cleandoc(func.__doc__ or ""),
                input_schema=MappingProxyType(schema.model_json_schema(by_alias=True)),
            )
            self.handlers.append(ToolHandler(
                definition=definition,
                schema=schema,
                run=func,
                note=note,
                render=render,
                logger=self._logger,
            ))
            return func
        return decorator


class ToolRegistry:
    """
    Immutable name -> handler table built once at startup.

    Raises:
        ValueError: If two handlers share a name.
    """

    def __init__(self, handlers: Iterable[ToolHandler], logger: Optional[logging.Logger] = None):
        table: Dict[str, ToolHandler] = {}
        for handler in handlers:
            if handler.name in table:
                raise ValueError(f"Duplicate tool name: {handler.name}")
            table[handler.name] = handler
        self._handlers: Mapping[str, ToolHandler] = MappingProxyType(table)
        self._definitions: Tuple[ToolDefinition, ...] = tuple(h.definition for h in table.values())
        self._logger = logger or logging.getLogger(__name__)

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def list_tools(self) -> Tuple[ToolDefinition, ...]:
        return self._definitions

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> CallOutcome:
        """Dispatch one call; always returns a CallOutcome."""
        self._logger.debug(f"Tool called: {name}")
        handler = self._handlers.get(name)
        if handler is None:
            return CallOutcome.error(f"Unknown tool: {name}")

        try:
            return await handler(arguments or {})
        except Exception as e:
            self._logger.error(f"Error executing tool {name}: {e}", exc_info=True)
            return CallOutcome.error(str(e) or type(e).__name__)

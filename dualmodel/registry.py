"""Tool registry: advertises query_dual_models and dispatches calls to it."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from dualmodel.config import Settings
from dualmodel.dispatcher import DualDispatcher
from dualmodel.errors import DualModelError, InvalidArguments, UnknownCapability
from dualmodel.schemas import DualResult, ToolDescriptor, ToolOutcome

logger = logging.getLogger(__name__)

TOOL_NAME = "query_dual_models"
DIVIDER = "=" * 50

INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "prompt": {
            "type": "string",
            "description": "The prompt sent to both models",
        },
        "system_prompt": {
            "type": "string",
            "description": (
                "Optional custom system prompt. If empty, the default prompt is used "
                "(structured, concise, 6-8 paragraphs)."
            ),
        },
    },
    "required": ["prompt"],
}


def format_dual_result(result: DualResult) -> str:
    """Render a DualResult as one labeled text block."""
    sections = [
        f"**{response.label}**\n{DIVIDER}\n{response.content}\n"
        for response in result.responses
    ]
    metadata = result.metadata
    sections.append(
        "**Metadata**\n"
        f"Timestamp: {metadata.timestamp}\n"
        f"Models: {', '.join(metadata.models_used.values())}\n"
        f"System prompt: {metadata.system_prompt_used}\n"
    )
    return "\n" + "\n".join(sections)


class ToolRegistry:
    """Holds the single tool and routes validated calls to the dispatcher."""

    def __init__(self, settings: Settings, dispatcher: DualDispatcher | None = None):
        self.settings = settings
        self.dispatcher = dispatcher or DualDispatcher(settings)

    def describe(self) -> ToolDescriptor:
        labels = " and ".join(backend.label for backend in self.settings.backends)
        return ToolDescriptor(
            name=TOOL_NAME,
            description=(
                f"Sends a prompt to {labels} at the same time. Default: structured answers "
                "in 6-8 paragraphs (core analysis, context, evidence, argument, "
                "counterarguments, reflection, conclusion)."
            ),
            input_schema=INPUT_SCHEMA,
        )

    def list_tools(self) -> list[ToolDescriptor]:
        """Return the advertised tools. Always exactly one."""
        return [self.describe()]

    async def invoke(self, name: str, arguments: Mapping[str, Any] | None) -> str:
        """Validate a call, run it and render the combined answer.

        Raises:
            UnknownCapability: name is not query_dual_models
            InvalidArguments: prompt is missing or not a string
            BackendError: any backend call failed
        """
        if name != TOOL_NAME:
            raise UnknownCapability(name)

        if not isinstance(arguments, Mapping) or not isinstance(arguments.get("prompt"), str):
            raise InvalidArguments("'prompt' is required and must be a string")

        prompt = arguments["prompt"]
        system_prompt = arguments.get("system_prompt")
        if not isinstance(system_prompt, str):
            system_prompt = None

        result = await self.dispatcher.query_both(prompt, system_prompt)
        return format_dual_result(result)

    async def call_tool(self, name: str, arguments: Mapping[str, Any] | None) -> ToolOutcome:
        """Run a call and convert any failure into an error outcome."""
        try:
            text = await self.invoke(name, arguments)
        except DualModelError as e:
            logger.error(f"Error while querying: {e}")
            return ToolOutcome(text=str(e), is_error=True, error_code=e.code)
        return ToolOutcome(text=text)

"""Backend query client for the OpenRouter chat-completions gateway."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from dualmodel.config import Settings
from dualmodel.errors import EmptyResponse, GatewayError, TransportError
from dualmodel.schemas import ChatCompletionRequest, ChatCompletionResponse, ChatMessage, Role

logger = logging.getLogger(__name__)


def build_request(settings: Settings, model: str, prompt: str, system_prompt: str) -> ChatCompletionRequest:
    """Build the chat-completions body: system message first, then user."""
    return ChatCompletionRequest(
        model=model,
        messages=(
            ChatMessage(role=Role.SYSTEM, content=system_prompt),
            ChatMessage(role=Role.USER, content=prompt),
        ),
        temperature=settings.TEMPERATURE,
        max_tokens=settings.MAX_TOKENS,
    )


class BackendClient:
    """Sends one chat-completion request per call to the gateway."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        """Initialize the client.

        Args:
            settings: Loaded settings holding the API key and request limits
            transport: Optional httpx transport, used to stub the gateway
        """
        self.settings = settings
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.OPENROUTER_API_KEY}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.HTTP_REFERER,
            "X-Title": self.settings.APP_TITLE,
        }

    async def query(self, model: str, prompt: str, system_prompt: str) -> str:
        """Query a single model and return its answer text.

        Args:
            model: Gateway model identifier
            prompt: User prompt
            system_prompt: System instructions sent before the prompt

        Returns:
            Content of the first returned message

        Raises:
            GatewayError: The gateway answered with a non-success status
            EmptyResponse: The reply carried no usable text
            TransportError: The gateway could not be reached
        """
        body = build_request(self.settings, model, prompt, system_prompt)

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.REQUEST_TIMEOUT,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.settings.API_URL,
                    json=body.model_dump(mode="json"),
                    headers=self._headers(),
                )
                response.raise_for_status()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raw_body = e.response.text
            logger.error(f"OpenRouter API error for {model}: status={status} body={raw_body}")
            raise GatewayError(model, status, raw_body) from e

        except httpx.HTTPError as e:
            detail = f"{type(e).__name__}: {e}"
            logger.error(f"OpenRouter request failed for {model}: {detail}")
            raise TransportError(model, detail) from e

        try:
            reply = ChatCompletionResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Unparseable reply from {model}: {e}")
            raise EmptyResponse(model) from e

        content = reply.first_content()
        if not content:
            logger.error(f"Empty reply from {model}")
            raise EmptyResponse(model)

        if reply.usage:
            logger.debug(
                f"{model} usage: prompt={reply.usage.prompt_tokens} "
                f"completion={reply.usage.completion_tokens} total={reply.usage.total_tokens}"
            )
        return content

"""
Anthropic Claude chat provider.

Uses ChatAnthropic from langchain-anthropic. The client is built on first
use, so a missing API key only fails the AI routes, not app startup.

The same client reads statement images for document import (Claude
vision), so one class serves as both IChatProvider and ITextExtractor.
"""

import base64
import logging
from typing import Any, Optional

import anthropic
from langchain_anthropic import ChatAnthropic
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from .exceptions import AIConfigurationError, AIRateLimitedError, AIServiceError
from .interfaces import IChatProvider, ITextExtractor
from .models import ChatMessage, ChatRole

logger = logging.getLogger(__name__)

OCR_PROMPT = """This image is a bank statement or receipt. Transcribe every transaction \
you can see, one per line, in this exact format:

YYYY-MM-DD | description | amount

Write amounts as plain numbers with two decimals and a dot as the decimal \
separator (1234.56). Make expenses negative and income positive. If no \
transactions are visible, reply with nothing but NONE."""


def _content_text(content: Any) -> str:
    """Flatten a chat model reply (plain string or content blocks) to text."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class AnthropicChatProvider(IChatProvider, ITextExtractor):
    """IChatProvider and ITextExtractor backed by Claude.

    Available models include claude-sonnet-4-20250514 (the default) and
    claude-3-5-haiku-20241022 for cheaper replies.
    """

    def __init__(self, api_key: str, model: str, max_tokens: int = 1024):
        self._api_key = api_key
        self._model = model
        self._max_tokens = max_tokens
        self._llm: Optional[ChatAnthropic] = None

    def get_llm(self) -> ChatAnthropic:
        """Return the ChatAnthropic client.

        Raises:
            AIConfigurationError: If no API key is configured
        """
        if not self._api_key:
            raise AIConfigurationError("ANTHROPIC_API_KEY is not set")
        if self._llm is None:
            self._llm = ChatAnthropic(
                model=self._model,
                api_key=self._api_key,
                max_tokens=self._max_tokens,
            )
        return self._llm

    async def complete(self, system_prompt: str, messages: list[ChatMessage]) -> str:
        llm = self.get_llm()

        conversation: list[BaseMessage] = [SystemMessage(content=system_prompt)]
        for message in messages:
            if message.role == ChatRole.USER:
                conversation.append(HumanMessage(content=message.content))
            else:
                conversation.append(AIMessage(content=message.content))

        return await self._invoke(llm, conversation)

    async def extract_text(self, data: bytes, media_type: str) -> str:
        llm = self.get_llm()
        image = {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": media_type,
                "data": base64.b64encode(data).decode("ascii"),
            },
        }
        message = HumanMessage(content=[image, {"type": "text", "text": OCR_PROMPT}])
        return await self._invoke(llm, [message])

    async def _invoke(self, llm: ChatAnthropic, conversation: list[BaseMessage]) -> str:
        try:
            response = await llm.ainvoke(conversation)
        except anthropic.AuthenticationError as e:
            logger.error(f"Anthropic rejected the API key: {e}")
            raise AIConfigurationError("invalid API key") from e
        except anthropic.RateLimitError as e:
            logger.warning(f"Anthropic rate limited the request: {e}")
            raise AIRateLimitedError() from e
        except anthropic.APIError as e:
            logger.error(f"Anthropic request failed: {e}")
            raise AIServiceError(str(e)) from e

        text = _content_text(response.content)
        if not text:
            raise AIServiceError("empty response from model")
        return text

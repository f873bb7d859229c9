"""
LLM provider adapter for the IoT ticketing system.

This adapter implements the LLMProvider interface on top of the OpenAI
Responses API.
"""

import logging
from typing import Any, Dict, Optional

from openai import AsyncOpenAI
import logfire

from iot_ticketing.interfaces.providers.llm import LLMProvider

# Setup logger for this module
logger = logging.getLogger(__name__)

DEFAULT_CHAT_MODEL = "gpt-5.2"


class OpenAIAdapter(LLMProvider):
    """OpenAI implementation of LLMProvider using the Responses API."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        logfire_api_key: Optional[str] = None,
    ):
        self.api_key = api_key
        self.client = AsyncOpenAI(api_key=api_key)
        self.text_model = model or DEFAULT_CHAT_MODEL

        self.logfire = False
        if logfire_api_key:
            try:
                logfire.configure(token=logfire_api_key)
                logfire.instrument_openai(self.client)
                self.logfire = True
                logger.info(
                    "Logfire configured and OpenAI client instrumented successfully."
                )
            except Exception as e:
                logger.error(f"Failed to configure Logfire: {e}")

    async def generate_text(
        self,
        prompt: str,
        system_prompt: str = "",
        model: Optional[str] = None,
    ) -> str:  # pragma: no cover
        """Generate text using the OpenAI Responses API.

        Errors from the API propagate to the caller.
        """
        request_params: Dict[str, Any] = {
            "model": model or self.text_model,
            "input": prompt,
        }
        if system_prompt:
            request_params["instructions"] = system_prompt

        response = await self.client.responses.create(**request_params)
        return response.output_text or ""

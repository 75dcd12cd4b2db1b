"""
HTTP client wrapper for OpenAI-compatible chat completions APIs.
"""

from typing import Any, Dict, List, Optional

import httpx
from loguru import logger


class OpenAIClient:
    """
    HTTP client for an OpenAI-compatible chat completions endpoint.

    Attributes:
        api_key: Bearer token for the API
        model: Chat model name (e.g., "gpt-3.5-turbo")
        base_url: Base URL of the API (e.g., https://api.openai.com/v1)
        timeout: Request timeout in seconds (None waits indefinitely)
        client: Async HTTP client instance
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        base_url: str = "https://api.openai.com/v1",
        timeout: Optional[float] = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the chat completions client.

        Args:
            api_key: Bearer token for the API
            model: Chat model name
            base_url: Base URL of the API
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)
        logger.info(
            f"Initialized OpenAIClient with model={self.model}, "
            f"base_url={self.base_url}, timeout={timeout}s"
        )

    async def close(self):
        """Close the HTTP client connection."""
        await self.client.aclose()
        logger.debug("OpenAIClient connection closed")

    async def chat_completions(
        self,
        messages: List[Dict[str, str]],
        **kwargs
    ) -> Dict[str, Any]:
        """
        Call the chat completions API.

        Args:
            messages: List of message dicts with 'role' and 'content' keys
            **kwargs: Additional request parameters (temperature, max_tokens, ...)

        Returns:
            Decoded JSON body; normally a dictionary with 'choices', 'usage', etc.

        Raises:
            httpx.HTTPStatusError: If API returns error status
            httpx.HTTPError: If the request could not be sent
        """
        request_data = {
            "model": self.model,
            "messages": messages,
            **kwargs,
        }

        logger.debug(
            f"Calling chat completions API: model={self.model}, messages={len(messages)}"
        )

        try:
            response = await self.client.post(
                f"{self.base_url}/chat/completions",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=request_data,
            )
            response.raise_for_status()
            result = response.json()

            usage = result.get("usage") if isinstance(result, dict) else None
            tokens_used = usage.get("total_tokens", 0) if isinstance(usage, dict) else 0
            logger.info(f"Chat completions API success: {tokens_used} tokens used")

            return result
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Chat completions API HTTP error: {e.response.status_code} - {e.response.text}"
            )
            raise
        except httpx.HTTPError as e:
            logger.error(f"Chat completions API failed: {e}")
            raise

"""
Gemini HTTP client wrapper for the generateContent REST API.
"""

from typing import Any, Dict, Optional

import httpx
from loguru import logger


class GeminiClient:
    """
    HTTP client for the Gemini generative language API.

    Attributes:
        api_key: Gemini API key, sent in the x-goog-api-key header
        model: Model name (e.g., "gemini-1.5-flash")
        base_url: Base URL of the API, including the version segment
        timeout: Request timeout in seconds (None waits indefinitely)
        client: Async HTTP client instance
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: Optional[float] = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key
            model: Model name
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
            f"Initialized GeminiClient with model={self.model}, "
            f"base_url={self.base_url}, timeout={timeout}s"
        )

    async def close(self):
        """Close the HTTP client connection."""
        await self.client.aclose()
        logger.debug("GeminiClient connection closed")

    async def generate_content(self, prompt: str, **kwargs) -> Dict[str, Any]:
        """
        Call the generateContent API with a single text prompt.

        Args:
            prompt: Input prompt text
            **kwargs: Additional top-level request fields (e.g., generationConfig)

        Returns:
            Decoded JSON body; normally a dictionary with 'candidates', 'usageMetadata', etc.

        Raises:
            httpx.HTTPStatusError: If API returns error status
            httpx.HTTPError: If the request could not be sent

        Example:
            >>> client = GeminiClient(api_key="...")
            >>> result = await client.generate_content("Assess these readings...")
            >>> print(result["candidates"][0]["content"]["parts"][0]["text"])
        """
        request_data = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            **kwargs,
        }

        logger.debug(f"Calling generateContent API: model={self.model}, prompt={len(prompt)} chars")

        try:
            response = await self.client.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                headers={"x-goog-api-key": self.api_key},
                json=request_data,
            )
            response.raise_for_status()
            result = response.json()

            usage = result.get("usageMetadata") if isinstance(result, dict) else None
            tokens_used = usage.get("totalTokenCount", 0) if isinstance(usage, dict) else 0
            logger.info(f"generateContent API success: {tokens_used} tokens used")

            return result
        except httpx.HTTPStatusError as e:
            logger.error(
                f"generateContent API HTTP error: {e.response.status_code} - {e.response.text}"
            )
            raise
        except httpx.HTTPError as e:
            logger.error(f"generateContent API failed: {e}")
            raise

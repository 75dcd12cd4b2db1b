"""
Suggestion client: prompt building, provider call and text cleanup.
"""

from typing import Optional

import httpx
from loguru import logger

from vitals_gateway.config import Settings
from vitals_gateway.exceptions import (
    ConfigurationError,
    NoSuggestionError,
    ResponseFormatError,
    UpstreamError,
)
from vitals_gateway.models import HealthReading, SuggestionResult
from vitals_gateway.services.gemini_client import GeminiClient
from vitals_gateway.services.openai_client import OpenAIClient
from vitals_gateway.utils.parsers import (
    extract_candidate_text,
    extract_choice_text,
    sanitize_suggestion,
)
from vitals_gateway.utils.prompts import chat_health_messages, health_assessment_prompt

PROVIDER_NAMES = {"gemini": "Gemini", "openai": "OpenAI"}


class SuggestionClient:
    """
    Produces a cleaned health suggestion for a vital-sign reading.

    The provider client is built from explicit settings; when the provider's
    API key is missing no client is built and every call fails with
    ConfigurationError.

    Attributes:
        settings: Gateway settings
        provider: Selected provider ("gemini" or "openai")
        backend: Provider HTTP client, or None without an API key
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the suggestion client.

        Args:
            settings: Gateway settings holding provider, model and credential
            transport: Optional httpx transport passed to the provider client
        """
        self.settings = settings
        self.provider = settings.provider
        self.backend: Optional[GeminiClient | OpenAIClient] = None

        # 0 disables the timeout
        timeout = settings.request_timeout or None

        if not settings.api_key:
            logger.warning(f"No API key configured for provider {self.provider}")
        elif self.provider == "gemini":
            self.backend = GeminiClient(
                api_key=settings.api_key,
                model=settings.gemini_model,
                base_url=settings.gemini_base_url,
                timeout=timeout,
                transport=transport,
            )
        else:
            self.backend = OpenAIClient(
                api_key=settings.api_key,
                model=settings.openai_model,
                base_url=settings.openai_base_url,
                timeout=timeout,
                transport=transport,
            )

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAMES[self.provider]

    async def close(self):
        """Close the provider HTTP client, if any."""
        if self.backend is not None:
            await self.backend.close()

    @staticmethod
    def build_prompt(reading: HealthReading) -> str:
        """Build the health assessment prompt for a reading."""
        return health_assessment_prompt(
            reading.temperature,
            reading.pulse,
            reading.oxygen_saturation,
            reading.language,
        )

    async def get_suggestion(self, reading: HealthReading) -> SuggestionResult:
        """
        Get a cleaned health suggestion for a reading.

        Args:
            reading: Validated vital-sign reading

        Returns:
            SuggestionResult with the sanitized text

        Raises:
            ConfigurationError: API key not set
            UpstreamError: Provider call failed
            NoSuggestionError: Provider returned no candidates
            ResponseFormatError: Response or first candidate has an unexpected shape
        """
        if self.backend is None:
            raise ConfigurationError("API key not set in environment")

        prompt = self.build_prompt(reading)
        logger.debug(f"Generated prompt ({len(prompt)} chars) for language={reading.language}")

        if isinstance(self.backend, GeminiClient):
            raw_text = await self._generate_gemini(prompt)
        else:
            raw_text = await self._generate_chat(prompt)

        text = sanitize_suggestion(raw_text)
        logger.info(f"Suggestion ready: {len(raw_text)} raw chars, {len(text)} cleaned chars")
        return SuggestionResult(text=text)

    def _first_entry(self, result, key: str):
        """Return the first entry of ``result[key]``; raise when there is none."""
        if not isinstance(result, dict):
            raise ResponseFormatError(f"response is not a JSON object ({type(result).__name__})")

        entries = result.get(key) or []
        if not isinstance(entries, list):
            raise ResponseFormatError(f"response field {key!r} is not a list")
        if not entries:
            raise NoSuggestionError(f"no suggestions returned from {self.provider_name}")
        return entries[0]

    async def _generate_gemini(self, prompt: str) -> str:
        try:
            result = await self.backend.generate_content(prompt)
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamError(f"failed to generate content: {e}") from e

        return extract_candidate_text(self._first_entry(result, "candidates"))

    async def _generate_chat(self, prompt: str) -> str:
        try:
            result = await self.backend.chat_completions(chat_health_messages(prompt))
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamError(f"failed to generate content: {e}") from e

        return extract_choice_text(self._first_entry(result, "choices"))

"""
Gateway configuration.

Settings are read once at startup from the process environment, after a local
``.env`` file (if any) has been loaded with python-dotenv. The resulting
``Settings`` value is handed to the clients explicitly.
"""
import os
from typing import Optional

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field, field_validator

SUPPORTED_PROVIDERS = ("gemini", "openai")


class Settings(BaseModel):
    """
    Runtime settings for the gateway.

    Attributes:
        provider: Generative-text backend to call ("gemini" or "openai")
        gemini_api_key: Gemini API key (GEMINI_API_KEY)
        gemini_model: Gemini model name
        gemini_base_url: Gemini REST base URL
        openai_api_key: API key for the OpenAI-compatible provider
        openai_model: Chat model name for the OpenAI-compatible provider
        openai_base_url: Base URL of the OpenAI-compatible API
        request_timeout: Upstream request timeout in seconds (0 disables it)
        host: Bind address for uvicorn
        port: Bind port for uvicorn
        cors_origins: Allowed CORS origins
        log_level: Minimum level for the file log sink
        log_dir: Directory for the file log sink
    """

    provider: str = "gemini"
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-3.5-turbo"
    openai_base_url: str = "https://api.openai.com/v1"
    request_timeout: float = Field(default=60.0, ge=0.0)
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"
    log_dir: str = "logs"

    @field_validator("provider")
    @classmethod
    def _check_provider(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"unsupported provider {value!r}, expected one of {SUPPORTED_PROVIDERS}"
            )
        return value

    @property
    def api_key(self) -> Optional[str]:
        """API key of the selected provider, or None when unset."""
        key = self.gemini_api_key if self.provider == "gemini" else self.openai_api_key
        return key or None

    @property
    def model(self) -> str:
        """Model name of the selected provider."""
        return self.gemini_model if self.provider == "gemini" else self.openai_model


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    """
    Load settings from ``env_file`` and the process environment.

    Variables already present in the environment win over the file.
    Unset variables fall back to the ``Settings`` defaults.

    Args:
        env_file: Path of the dotenv file to load, or None to skip it

    Returns:
        Populated Settings instance
    """
    if env_file and load_dotenv(env_file):
        logger.debug(f"Loaded environment from {env_file}")

    # env var -> Settings field
    mapping = {
        "LLM_PROVIDER": "provider",
        "GEMINI_API_KEY": "gemini_api_key",
        "GEMINI_MODEL": "gemini_model",
        "GEMINI_API_BASE_URL": "gemini_base_url",
        "OPENAI_API_KEY": "openai_api_key",
        "OPENAI_MODEL": "openai_model",
        "OPENAI_BASE_URL": "openai_base_url",
        "REQUEST_TIMEOUT": "request_timeout",
        "HOST": "host",
        "PORT": "port",
        "LOG_LEVEL": "log_level",
        "LOG_DIR": "log_dir",
    }
    values = {}
    for env_name, field_name in mapping.items():
        value = _env(env_name)
        if value is not None:
            values[field_name] = value

    # CORS_ORIGINS: comma-separated list, "*" allows all
    origins = _env("CORS_ORIGINS")
    if origins:
        values["cors_origins"] = (
            ["*"] if origins == "*" else [o.strip() for o in origins.split(",") if o.strip()]
        )

    return Settings(**values)

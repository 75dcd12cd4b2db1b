"""
Pydantic models for request/response validation.

Defines schemas for:
- HealthReading: Vital-sign input for a health suggestion
- SuggestionResult: Cleaned suggestion text produced by the suggestion client
- SuggestionResponse: JSON reply of the suggestion endpoint
- HealthCheckResponse: Gateway health status
"""

from pydantic import BaseModel, Field


class HealthReading(BaseModel):
    """
    Request schema for a health suggestion.

    Wire names follow the device payload (``temp``, ``spO2``); the Python
    attribute names are spelled out.

    Attributes:
        temperature: Body temperature in °C
        pulse: Pulse rate in BPM
        oxygen_saturation: SpO₂ level in percent
        language: Language the suggestion should be written in
    """

    temperature: float = Field(..., alias="temp", description="Body temperature in °C")
    pulse: float = Field(..., description="Pulse rate in BPM")
    oxygen_saturation: float = Field(..., alias="spO2", description="SpO₂ level in percent")
    language: str = Field(..., description="Language of the returned suggestion")

    class Config:
        """Pydantic model configuration with example."""

        populate_by_name = True
        # numbers must be JSON numbers (integers allowed), finite, never strings or booleans
        strict = True
        allow_inf_nan = False
        json_schema_extra = {
            "example": {
                "temp": 37.8,
                "pulse": 96,
                "spO2": 94,
                "language": "English",
            }
        }


class SuggestionResult(BaseModel):
    """Cleaned suggestion text for a single reading."""

    text: str


class SuggestionResponse(BaseModel):
    """
    Response schema for the suggestion endpoint.

    Attributes:
        suggestion: Plain-text health assessment and recommendations
    """

    suggestion: str = Field(..., description="Health assessment and recommendations")

    class Config:
        """Pydantic model configuration with example."""

        json_schema_extra = {
            "example": {
                "suggestion": (
                    "Your temperature is slightly elevated.\n"
                    "Stay hydrated and rest. Seek care if SpO₂ drops below 92%."
                )
            }
        }


class HealthCheckResponse(BaseModel):
    """
    Health check response schema.

    Attributes:
        status: Health status (healthy/unhealthy)
        provider: Configured generative-text provider
        model: Configured model name
        api_key_configured: Whether an API key is available for the provider
        version: Gateway version
    """

    status: str = Field(..., description="Overall health status")
    provider: str = Field(..., description="Generative-text provider")
    model: str = Field(..., description="Model used for suggestions")
    api_key_configured: bool = Field(..., description="Provider API key availability")
    version: str = Field(..., description="Gateway version")

    class Config:
        """Pydantic model configuration with example."""

        protected_namespaces = ()
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "provider": "gemini",
                "model": "gemini-1.5-flash",
                "api_key_configured": True,
                "version": "0.1.0",
            }
        }

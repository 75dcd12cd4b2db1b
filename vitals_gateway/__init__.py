"""
FastAPI Gateway for vital-sign health suggestions.

This gateway provides:
- Request validation for patient vital-sign readings
- Health assessment prompts sent to a generative-text provider (Gemini by default)
- Cleanup of the returned text before it is relayed to the caller
- Health checks
"""

__version__ = "0.1.0"

"""
Errors raised while producing a health suggestion.

The message of each error is the detail appended to the
"Failed to get suggestion: " response body.
"""


class SuggestionError(Exception):
    """Base class for failures while getting a suggestion."""


class ConfigurationError(SuggestionError):
    """The provider credential is missing."""


class UpstreamError(SuggestionError):
    """The provider call failed (transport, HTTP status or authentication)."""


class NoSuggestionError(SuggestionError):
    """The provider answered but returned no candidates."""


class ResponseFormatError(SuggestionError):
    """The provider response does not have the expected shape."""

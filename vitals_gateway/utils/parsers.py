"""
Response parsing utilities.

Turns provider responses into display text:
- extract_candidate_text: Text of a Gemini generateContent candidate
- extract_choice_text: Text of a chat completions choice
- sanitize_suggestion: Strip structural and markdown leftovers from the text
"""

import re
from typing import Any, Dict

from loguru import logger

from vitals_gateway.exceptions import ResponseFormatError

# Leftovers of a generically formatted response object
CONTENT_LABEL = "Parts:"
ROLE_MARKER = "Role:model"

# Ampersands, braces, brackets, markdown headings and emphasis
SYMBOL_PATTERN = re.compile(r"[&{}#\[\]*]+")


def extract_candidate_text(candidate: Dict[str, Any]) -> str:
    """
    Extract the text of a Gemini candidate.

    Expects ``{"content": {"parts": [{"text": ...}, ...], "role": "model"}}``.
    Text parts are joined with newlines; non-text parts are skipped.

    Args:
        candidate: One entry of the response's ``candidates`` list

    Returns:
        Raw candidate text

    Raises:
        ResponseFormatError: If the candidate has no content or no text part

    Example:
        >>> extract_candidate_text({"content": {"parts": [{"text": "Rest."}]}})
        'Rest.'
    """
    if not isinstance(candidate, dict):
        raise ResponseFormatError("candidate is not an object")

    content = candidate.get("content")
    if not isinstance(content, dict):
        finish_reason = candidate.get("finishReason", "unknown")
        raise ResponseFormatError(f"candidate has no content (finish reason: {finish_reason})")

    parts = content.get("parts")
    if not isinstance(parts, list):
        raise ResponseFormatError("candidate content has no parts")

    texts = [
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    ]
    if not texts:
        raise ResponseFormatError("candidate content contains no text")

    logger.debug(f"Extracted {len(texts)} text part(s) from candidate")
    return "\n".join(texts)


def extract_choice_text(choice: Dict[str, Any]) -> str:
    """
    Extract the message text of a chat completions choice.

    Args:
        choice: One entry of the response's ``choices`` list

    Returns:
        Raw message content

    Raises:
        ResponseFormatError: If the choice carries no message content
    """
    message = choice.get("message") if isinstance(choice, dict) else None
    if not isinstance(message, dict) or not isinstance(message.get("content"), str):
        raise ResponseFormatError("choice has no message content")
    return message["content"]


def _sanitize_once(text: str) -> str:
    text = text.replace(CONTENT_LABEL, "")
    text = text.replace(ROLE_MARKER, "")
    text = SYMBOL_PATTERN.sub("", text)
    text = text.replace("\n\n", "\n")
    return text.strip()


def sanitize_suggestion(raw: str) -> str:
    """
    Clean model output for plain-text display.

    Steps, in order:
    1. Remove every content label ("Parts:")
    2. Remove every role marker ("Role:model")
    3. Delete every run of &, {, }, #, [, ], *
    4. Collapse doubled newlines into one
    5. Trim surrounding whitespace

    The steps are repeated until the text stops changing, so longer newline
    runs end up as a single newline and the result is stable under a second
    call.

    Args:
        raw: Raw suggestion text

    Returns:
        Cleaned text

    Example:
        >>> sanitize_suggestion("Parts:[{Text: Stay hydrated.\\n\\n#Rest well.}] Role:model")
        'Text: Stay hydrated.\\nRest well.'
    """
    text = _sanitize_once(raw)
    # every pass that changes the text shortens it
    while True:
        cleaned = _sanitize_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned

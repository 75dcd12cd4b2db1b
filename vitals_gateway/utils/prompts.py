"""
Prompt templates for vital-sign health suggestions.
"""

SYSTEM_MESSAGE = "You are a health monitoring assistant."


def health_assessment_prompt(
    temperature: float, pulse: float, oxygen_saturation: float, language: str
) -> str:
    """
    Create a prompt asking for a health assessment of the given readings.

    Every reading is rendered with one decimal place; the language name is
    embedded verbatim.

    Args:
        temperature: Body temperature in °C
        pulse: Pulse rate in BPM
        oxygen_saturation: SpO₂ level in percent
        language: Language the model should answer in

    Returns:
        Formatted prompt string for the model

    Example:
        >>> prompt = health_assessment_prompt(37.34, 88, 97, "French")
        >>> "Body Temperature: 37.3°C" in prompt
        True
    """
    return (
        "A patient has the following health readings:\n"
        f"- Body Temperature: {temperature:.1f}°C\n"
        f"- Pulse Rate: {pulse:.1f} BPM\n"
        f"- SpO₂ Level: {oxygen_saturation:.1f}%\n"
        "\n"
        "Based on these values, please provide a health assessment "
        f"and any recommendations in {language}."
    )


def chat_health_messages(prompt: str) -> list[dict[str, str]]:
    """
    Wrap a health assessment prompt for a chat completions API.

    Args:
        prompt: Prompt built by health_assessment_prompt

    Returns:
        List of message dicts with 'role' and 'content' keys
    """
    return [
        {"role": "system", "content": SYSTEM_MESSAGE},
        {"role": "user", "content": prompt},
    ]

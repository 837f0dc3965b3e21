"""
Utility functions for the TOML RPC code generator.
"""

import re

# Anything that is not a letter or a digit separates words
_SEPARATOR_PATTERN = re.compile(r"[\W_]+")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase and acronym boundaries.

    Letters of any script are kept. Digits never start a new word, they
    stay attached to the letters before them.
    """
    words = []
    for chunk in _SEPARATOR_PATTERN.split(text):
        start = 0
        mode = None
        for i, char in enumerate(chunk):
            if char.isupper():
                next_is_lower = i + 1 < len(chunk) and chunk[i + 1].islower()
                # "myName" splits before "N", "HTTPServer" splits before "S"
                if mode == "lower" or (mode == "upper" and next_is_lower):
                    words.append(chunk[start:i])
                    start = i
                mode = "upper"
            elif char.islower():
                mode = "lower"
        if chunk[start:]:
            words.append(chunk[start:])
    return words


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize each word and join them together."""
    return "".join(word.capitalize() for word in words)


def to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Examples:
        "my_message" -> "MyMessage"
        "myMessage" -> "MyMessage"
        "OptionA" -> "OptionA"
        "HTTPServer" -> "HttpServer"
        "ABC" -> "Abc"
        "état_civil" -> "ÉtatCivil"

    Args:
        text: The text to convert

    Returns:
        PascalCase string, empty if the text has no letters or digits
    """
    return _capitalize_and_join(_split_into_words(text))


def to_snake_case(text: str) -> str:
    """Convert PascalCase, camelCase, or kebab-case text to snake_case.

    Examples:
        "MyCall" -> "my_call"
        "myCall" -> "my_call"
        "OptionA" -> "option_a"
        "HTTPServer" -> "http_server"
        "field1" -> "field1"

    Args:
        text: The text to convert

    Returns:
        snake_case string, empty if the text has no letters or digits
    """
    return "_".join(word.lower() for word in _split_into_words(text))

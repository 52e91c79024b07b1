"""
String case helpers used to derive file names from model names.
"""

import re

# Boundaries between words in mixed-case identifiers
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SEPARATORS = re.compile(r"[_\-\s]+")


def capitalize(text: str) -> str:
    """Upper-case the first character, leave the rest untouched."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


def camelize(text: str, lowercase_first: bool = False) -> str:
    """Convert snake_case, kebab-case or PascalCase text to camel case.

    Examples:
        "pet_store" -> "PetStore"
        "pet-store" -> "PetStore"
        "PetStore" with lowercase_first -> "petStore"
        "order_item_v2" with lowercase_first -> "orderItemV2"

    Args:
        text: The text to convert
        lowercase_first: Lower-case the first character of the result

    Returns:
        The camel cased string
    """
    parts = [part for part in _SEPARATORS.split(text) if part]
    result = "".join(capitalize(part) for part in parts)
    if lowercase_first and result:
        result = result[0].lower() + result[1:]
    return result


def underscore(text: str) -> str:
    """Convert camel case text to snake_case.

    Examples:
        "PetStore" -> "pet_store"
        "HTTPServer" -> "http_server"
        "pet-store" -> "pet_store"
    """
    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", text)
    text = _WORD_BOUNDARY.sub(r"\1_\2", text)
    text = _SEPARATORS.sub("_", text)
    return text.lower()


def dashize(text: str) -> str:
    """Convert text to kebab-case ("PetStore" -> "pet-store")."""
    return underscore(text).replace("_", "-")

"""Exceptions raised by the post processor."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a generator option holds an invalid value."""

    def __init__(self, message: str, argument: str, value: object) -> None:
        self.argument = argument
        self.value = value
        super().__init__(f"{message} (argument '{argument}', got {value!r})")


class GraphLoadError(ValueError):
    """Raised when a model graph document cannot be turned into nodes."""

    def __init__(self, message: str, location: str | None = None) -> None:
        self.location = location
        full_message = message if not location else f"[{location}] {message}"
        super().__init__(full_message)

"""Exceptions for quotemark message body parsing."""

from dataclasses import dataclass


class QuotemarkError(Exception):
    """Base exception for all quotemark errors."""

    pass


@dataclass
class InvalidInputError(QuotemarkError):
    """Input is not valid for processing.

    Raised when:
    - The body is still encoded (bytes)
    - The body is neither a string nor an iterable of strings
    """

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ConfigError(QuotemarkError):
    """Parser configuration could not be loaded.

    Attributes:
        message: Description of the error.
        key: The offending configuration key, if any.
    """

    message: str
    key: str | None = None

    def __str__(self) -> str:
        if self.key is None:
            return self.message
        return f"{self.message} (key: {self.key})"

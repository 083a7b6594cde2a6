"""Exceptions and diagnostics raised by the bufferline engine."""

from __future__ import annotations

from dataclasses import dataclass


class BufferlineError(Exception):
    """Base class for bufferline errors."""


class ConfigError(BufferlineError):
    """Group configuration was rejected.

    Raised at registration time; the previously active registry is kept.
    """

    def __init__(self, message: str, group: str | None = None) -> None:
        super().__init__(message)
        self.group = group


@dataclass(frozen=True)
class ClassificationWarning:
    """A matcher raised while classifying an element.

    The element is treated as not matching that group and the render
    continues.
    """

    group: str
    element_name: str
    error: str

    def __str__(self) -> str:
        return (
            f"Matcher for group '{self.group}' failed on "
            f"'{self.element_name}': {self.error}"
        )

"""Exceptions for fatal configuration problems."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Run configuration is unusable; raised before any file is touched."""


class InvalidVersionFormat(ConfigurationError):
    """A version string is empty or has a non-numeric segment."""

    def __init__(self, text: str, reason: str = ""):
        self.text = text
        self.reason = reason
        message = f"Invalid version '{text}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

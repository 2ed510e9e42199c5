"""Errors raised by squee."""

from __future__ import annotations

from typing import Optional


class InvalidArgumentError(ValueError):
    """Raised when removing a listener that was never added."""

    def __init__(self, message: str, event_name: Optional[str] = None):
        super().__init__(message)
        self.event_name = event_name

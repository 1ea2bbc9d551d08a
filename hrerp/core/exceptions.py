"""Errors raised by the data-access layer."""

from __future__ import annotations


class BackendError(Exception):
    """A request to the hosted backend failed (network, policy or validation)."""

    def __init__(self, message: str, status: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code

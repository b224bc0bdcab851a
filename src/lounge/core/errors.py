"""Domain exceptions for the chat embed core."""

from __future__ import annotations


class LoungeError(Exception):
    """Base for lounge domain errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, object] | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.original_error = original_error


class LoungeConfigurationError(LoungeError):
    """Config validation or load failure."""


class ProvisioningError(LoungeError):
    """IRC account provisioning failed (transport, HTTP status or payload)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, object] | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            details=details,
            original_error=original_error,
        )
        self.status_code = status_code

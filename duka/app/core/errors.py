"""Error taxonomy shared by services and the HTTP layer.

Every error carries a message key from the locale bundles so the API can
send the operator a translated notification.
"""

from __future__ import annotations


class PosError(Exception):
    """Base class for every error the application reports to the operator."""

    message_key = "errors.generic"

    def __init__(self, message: str | None = None, *, key: str | None = None, **params: object) -> None:
        self.key = key or self.message_key
        self.params = {k: str(v) for k, v in params.items()}
        super().__init__(message or self.key)

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else self.key


class ValidationError(PosError, ValueError):
    """Input rejected before any store call was made."""

    message_key = "errors.validation"


class RemoteError(PosError):
    """The store call failed. ``message`` is the backend text when there is one."""

    message_key = "errors.remote"


class NotFoundError(PosError, LookupError):
    message_key = "errors.not_found"


class AuthError(PosError):
    message_key = "auth.invalid_credentials"


class ActionInProgress(PosError):
    """A second action was triggered while the screen's control is disabled."""

    message_key = "errors.action_in_progress"


class InvalidTransition(PosError):
    message_key = "errors.invalid_transition"

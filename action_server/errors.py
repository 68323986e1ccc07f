"""
Exception types raised by the fulfillment library.
"""


class ActionServerError(Exception):
    """Base class for errors raised by this package."""


class CommandDecodeError(ActionServerError, ValueError):
    """Raised when an EXECUTE command cannot be decoded into its payload shape."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Unable to decode command {command!r}: {reason}")


class TokenValidationError(ActionServerError):
    """Raised when an access token validator cannot complete a validation."""


class SyncRequestError(ActionServerError):
    """Raised when HomeGraph rejects a request sync call.

    The log will contain more information about what occurred.
    """


class ReportStateError(ActionServerError):
    """Raised when HomeGraph rejects a device state report.

    The log will contain more information about what occurred.
    """

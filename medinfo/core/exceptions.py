"""
Custom exceptions for medicine lookups and conversation sessions.

Lookup exceptions mirror the failure categories a lookup can end in; the
resolver converts them into negative LookupResults so they never reach the
conversation as raw errors.
"""

from medinfo.models import LookupErrorKind


class MedicineLookupError(Exception):
    """Base exception for medicine lookup errors."""

    kind: LookupErrorKind = LookupErrorKind.TRANSPORT

    def __init__(self, message="An error occurred while looking up the medicine"):
        self.message = message
        super().__init__(self.message)


class LookupConfigurationError(MedicineLookupError):
    """Raised when the provider credential or model list is missing."""

    kind = LookupErrorKind.CONFIGURATION

    def __init__(self, message="Server configuration error"):
        super().__init__(message)


class LookupTransportError(MedicineLookupError):
    """Raised when the provider cannot be reached or answers with a failure status."""

    kind = LookupErrorKind.TRANSPORT

    def __init__(self, message="Medicine lookup service is unavailable"):
        super().__init__(message)


class LookupParseError(MedicineLookupError):
    """Raised when generated text holds no usable medicine JSON."""

    kind = LookupErrorKind.PARSE

    def __init__(self, message="Failed to parse medicine information"):
        super().__init__(message)


class SessionBusyError(Exception):
    """Raised when a new turn is submitted while another is still in flight."""

    def __init__(self, message="A previous message is still being processed"):
        self.message = message
        super().__init__(self.message)

"""
Custom exceptions for the receipt relay.

Every error raised by the relay carries the HTTP status code it is reported
with, so the application can convert it into a JSON error body at the request
boundary.
"""


class RelayError(Exception):
    """Base exception for all relay errors."""

    status_code = 500


class ValidationError(RelayError):
    """Raised when a request is missing required input."""

    status_code = 400


class Unauthenticated(RelayError):
    """Raised when no usable Google credential is available."""

    status_code = 401


class ConfigurationError(RelayError):
    """Raised when server configuration is missing or malformed."""

    pass


class AuthProviderError(RelayError):
    """Raised when a call to the identity provider fails."""

    pass


class UpstreamProviderError(RelayError):
    """Raised when the OCR or spreadsheet provider call fails."""

    pass


class InvalidUpstreamResponse(RelayError):
    """Raised when a provider returns data that cannot be parsed."""

    pass

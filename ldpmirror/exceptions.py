"""Exceptions raised by ldpmirror."""

from __future__ import annotations


class LdpMirrorError(Exception):
    """Base exception for all ldpmirror errors."""


class ConfigurationError(LdpMirrorError):
    """Raised when the transfer configuration is invalid or incomplete."""


class TransferStatusError(LdpMirrorError):
    """Raised when the repository answers with a non-success status code."""

    def __init__(self, message: str, uri: str | None = None):
        super().__init__(message)
        self.uri = uri


class AuthenticationRequiredError(TransferStatusError):
    """Raised on 401 Unauthorized."""

    def __init__(self, uri: str | None = None):
        super().__init__(
            f"Authentication required for {uri} - check your credentials", uri=uri
        )


class AuthorizationDeniedError(TransferStatusError):
    """Raised on 403 Forbidden."""

    def __init__(self, uri: str, principal: str | None = None):
        who = principal if principal else "anonymous user"
        super().__init__(f"Access to {uri} denied for {who}", uri=uri)
        self.principal = principal


class ResourceNotFoundError(TransferStatusError):
    """Raised on 404 Not Found."""

    def __init__(self, uri: str):
        super().__init__(f"Resource not found: {uri}", uri=uri)


class TransferFailedError(TransferStatusError):
    """Raised for any other status code outside the 2xx range."""

    def __init__(self, status_code: int, uri: str):
        super().__init__(
            f"Transfer failed with status {status_code} for {uri}", uri=uri
        )
        self.status_code = status_code


class TransportError(LdpMirrorError):
    """Raised when a request or a local file operation fails."""


class DescriptionParseError(LdpMirrorError):
    """Raised when a description file cannot be parsed."""

"""Mapping of HTTP status codes to transfer outcomes."""

from __future__ import annotations

from enum import Enum

from .exceptions import (
    AuthenticationRequiredError,
    AuthorizationDeniedError,
    ResourceNotFoundError,
    TransferFailedError,
)


class StatusOutcome(Enum):
    """Outcome of a single repository request."""

    SUCCESS = "success"
    AUTHENTICATION_REQUIRED = "authentication_required"
    AUTHORIZATION_DENIED = "authorization_denied"
    NOT_FOUND = "not_found"
    FAILURE = "failure"


def classify_status(status_code: int) -> StatusOutcome:
    """Classify a status code.

    Args:
        status_code: HTTP status code of the response

    Returns:
        The matching StatusOutcome
    """
    if 200 <= status_code < 300:
        return StatusOutcome.SUCCESS
    if status_code == 401:
        return StatusOutcome.AUTHENTICATION_REQUIRED
    if status_code == 403:
        return StatusOutcome.AUTHORIZATION_DENIED
    if status_code == 404:
        return StatusOutcome.NOT_FOUND
    return StatusOutcome.FAILURE


def check_status(status_code: int, uri: str, principal: str | None = None) -> None:
    """Raise the matching error unless the status code is a 2xx.

    Args:
        status_code: HTTP status code of the response
        uri: URI the request was made against
        principal: Configured user name, reported on 403

    Raises:
        AuthenticationRequiredError: On 401
        AuthorizationDeniedError: On 403
        ResourceNotFoundError: On 404
        TransferFailedError: On any other non-2xx code
    """
    outcome = classify_status(status_code)
    if outcome is StatusOutcome.SUCCESS:
        return
    if outcome is StatusOutcome.AUTHENTICATION_REQUIRED:
        raise AuthenticationRequiredError(uri)
    if outcome is StatusOutcome.AUTHORIZATION_DENIED:
        raise AuthorizationDeniedError(uri, principal)
    if outcome is StatusOutcome.NOT_FOUND:
        raise ResourceNotFoundError(uri)
    raise TransferFailedError(status_code, uri)

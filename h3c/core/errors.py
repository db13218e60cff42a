"""Exceptions raised by the H3C supplicant."""

from __future__ import annotations

from .status import StatusCode


class H3CError(Exception):
    """Base class for supplicant errors, tagged with the status to report."""

    status: StatusCode = StatusCode.OK

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.status.message)


class InvalidParametersError(H3CError):
    """The session configuration is incomplete or malformed."""

    status = StatusCode.INVALID_PARAMETERS


class EngineInitError(H3CError):
    """The EAPoL engine refused the interface or the callback table."""

    status = StatusCode.EAPOL_INIT_ERROR


class EngineStartError(H3CError):
    """The EAPoL engine could not send the authentication start frame."""

    status = StatusCode.EAPOL_START_ERROR


class ResponseError(H3CError):
    """A challenge could not be answered."""

    status = StatusCode.EAPOL_RESPONSE_ERROR

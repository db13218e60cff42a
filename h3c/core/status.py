"""Status codes reported by the supplicant and the reporter that emits them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import IntEnum
from typing import Final

_LOGGER = logging.getLogger(__name__)


class StatusCode(IntEnum):
    """Protocol milestones and error conditions surfaced to the output sink."""

    OK = 0
    EAP_FAILURE = 1
    EAP_SUCCESS = 2
    EAP_TYPE_IDENTITY = 3
    EAP_TYPE_MD5 = 4
    EAP_TYPE_H3C = 5
    EAP_RESPONSE = 6
    EAP_START = 7
    EAP_UNKNOWN = 8
    INVALID_PARAMETERS = 9
    EAPOL_INIT_ERROR = 10
    EAPOL_START_ERROR = 11
    EAPOL_RESPONSE_ERROR = 12

    @property
    def message(self) -> str:
        """Human readable description of the code."""
        return STATUS_MESSAGES[self]

    @property
    def is_error(self) -> bool:
        """Whether the code describes a failure rather than a milestone."""
        return self in ERROR_CODES


STATUS_MESSAGES: Final[dict[StatusCode, str]] = {
    StatusCode.OK: "No error",
    StatusCode.EAP_FAILURE: "EAP Failure",
    StatusCode.EAP_SUCCESS: "EAP Success",
    StatusCode.EAP_TYPE_IDENTITY: "Got EAP Request - Identity",
    StatusCode.EAP_TYPE_MD5: "Got EAP Request - MD5 Challenge",
    StatusCode.EAP_TYPE_H3C: "Got EAP Request - H3C Challenge",
    StatusCode.EAP_RESPONSE: "EAP Response",
    StatusCode.EAP_START: "EAP Auth Start",
    StatusCode.EAP_UNKNOWN: "EAP Unknown",
    StatusCode.INVALID_PARAMETERS: "Invalid parameters",
    StatusCode.EAPOL_INIT_ERROR: "Fail to initialize EAPoL",
    StatusCode.EAPOL_START_ERROR: "Failed to send EAPoL authentication",
    StatusCode.EAPOL_RESPONSE_ERROR: "Failed to response EAPoL authentication",
}

ERROR_CODES: Final = frozenset(
    {
        StatusCode.EAP_FAILURE,
        StatusCode.INVALID_PARAMETERS,
        StatusCode.EAPOL_INIT_ERROR,
        StatusCode.EAPOL_START_ERROR,
        StatusCode.EAPOL_RESPONSE_ERROR,
    }
)

# Every code must carry exactly one message
_missing = set(StatusCode) - STATUS_MESSAGES.keys()
if _missing:
    raise RuntimeError(f"Status codes without a message: {sorted(_missing)}")
del _missing

OutputSink = Callable[[StatusCode], None]


class StatusReporter:
    """Forward status codes to the configured output sink, one call per code."""

    def __init__(self, output: OutputSink) -> None:
        """Initialize the reporter.

        Args:
            output: Callable invoked synchronously with every reported code.
        """
        self._output = output

    def report(self, code: StatusCode) -> None:
        """Report a status code.

        The sink is called exactly once with the code unchanged. Errors raised
        by the sink are logged and never propagate into the session.

        Args:
            code: The status to surface.
        """
        _LOGGER.debug("Reporting status %s: %s", code.name, code.message)
        try:
            self._output(code)
        except Exception as err:  # pylint: disable=broad-except
            _LOGGER.exception("Output sink failed on %s: %s", code.name, err)

from __future__ import annotations

import logging

from ..const import EAP_MAX_PAYLOAD, MD5_DIGEST_SIZE, VERSION_INFO
from .crypto import compute_challenge_digest, parse_challenge_salt
from .engine_interface import EapolCallbacks, EapolResult
from .errors import ResponseError
from .models import SessionConfig
from .status import StatusCode, StatusReporter

_LOGGER = logging.getLogger(__name__)


class ChallengeResponder:
    """Build H3C response payloads for the requests raised by the engine."""

    def __init__(self, config: SessionConfig, reporter: StatusReporter) -> None:
        """Initialize the responder.

        Args:
            config: The validated session configuration.
            reporter: The reporter that surfaces every event.
        """
        self._username = config.username_bytes
        self._password = config.password_bytes
        self._reporter = reporter

    # --- PAYLOAD CALLBACKS ---

    def on_identity_request(self, capacity: int = EAP_MAX_PAYLOAD) -> bytes:
        """Answer an EAP Identity request.

        Args:
            capacity: Space available for the response type data.

        Returns:
            The version information followed by the raw username.
        """
        self._reporter.report(StatusCode.EAP_TYPE_IDENTITY)
        return self._checked(VERSION_INFO + self._username, capacity)

    def on_md5_challenge_request(
        self, identifier: int, data: bytes, capacity: int = EAP_MAX_PAYLOAD
    ) -> bytes:
        """Answer an EAP MD5-Challenge request.

        Args:
            identifier: The EAP request identifier.
            data: The length-prefixed salt.
            capacity: Space available for the response type data.

        Returns:
            The digest length, MD5(id + password + salt) and the raw username.
        """
        self._reporter.report(StatusCode.EAP_TYPE_MD5)
        return self._answer_challenge(identifier, data, capacity)

    def on_h3c_challenge_request(
        self, identifier: int, data: bytes, capacity: int = EAP_MAX_PAYLOAD
    ) -> bytes:
        """Answer the vendor specific H3C challenge.

        The H3C challenge is answered with the same layout as MD5-Challenge.
        """
        self._reporter.report(StatusCode.EAP_TYPE_H3C)
        return self._answer_challenge(identifier, data, capacity)

    # --- STATUS CALLBACKS ---

    def on_response(self) -> EapolResult:
        self._reporter.report(StatusCode.EAP_RESPONSE)
        return EapolResult.OK

    def on_success(self) -> EapolResult:
        self._reporter.report(StatusCode.EAP_SUCCESS)
        return EapolResult.OK

    def on_failure(self) -> EapolResult:
        self._reporter.report(StatusCode.EAP_FAILURE)
        return EapolResult.AUTH_FAILURE

    def on_unknown(self) -> EapolResult:
        self._reporter.report(StatusCode.EAP_UNKNOWN)
        return EapolResult.OK

    def callbacks(self) -> EapolCallbacks:
        """Bind the callback table for the engine to this responder."""
        return EapolCallbacks(
            identity=self.on_identity_request,
            md5_challenge=self.on_md5_challenge_request,
            h3c_challenge=self.on_h3c_challenge_request,
            response=self.on_response,
            success=self.on_success,
            failure=self.on_failure,
            unknown=self.on_unknown,
        )

    # --- PRIVATE HELPERS ---

    def _answer_challenge(self, identifier: int, data: bytes, capacity: int) -> bytes:
        """Length byte, digest, then username."""
        salt = parse_challenge_salt(data)
        digest = compute_challenge_digest(identifier, self._password, salt)
        payload = bytes((MD5_DIGEST_SIZE,)) + digest + self._username
        return self._checked(payload, capacity)

    def _checked(self, payload: bytes, capacity: int) -> bytes:
        """Refuse payloads that do not fit the engine's buffer."""
        if len(payload) > capacity:
            raise ResponseError(
                f"Response of {len(payload)} bytes exceeds capacity {capacity}"
            )
        _LOGGER.debug("Prepared %d byte response", len(payload))
        return payload

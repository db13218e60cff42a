"""Authentication session: initialization and the foreground dispatch loop."""

from __future__ import annotations

import logging
import signal
from collections.abc import Mapping
from types import FrameType
from typing import Any

from pydantic import ValidationError

from .const import EXIT_FAILURE, EXIT_SUCCESS, VERSION_INFO
from .core.engine_interface import EapolEngine, EapolResult
from .core.errors import EngineInitError, H3CError, InvalidParametersError
from .core.models import SessionConfig
from .core.responder import ChallengeResponder
from .core.status import StatusCode, StatusReporter

_LOGGER = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class _StopRequested(BaseException):
    """Unwinds a blocked dispatch when a shutdown signal arrives."""


class H3CSession:
    """The single authentication session of this process.

    Owns the configuration, the status reporter, the challenge responder and
    the engine handle for the duration of a run.
    """

    def __init__(self, config: SessionConfig, engine: EapolEngine) -> None:
        """Initialize the session.

        Use :func:`init` rather than calling this directly; it validates the
        configuration and registers the callbacks with the engine.
        """
        self.config = config
        self.engine = engine
        self.reporter = StatusReporter(config.output)
        self.responder = ChallengeResponder(config, self.reporter)
        self._stop_requested = False
        self._dispatching = False

    @property
    def stop_requested(self) -> bool:
        """Whether an interrupt or termination request has been received."""
        return self._stop_requested

    def request_stop(self, signum: int | None = None, _: FrameType | None = None) -> None:
        """Ask the dispatch loop to shut down.

        Sets a flag checked between events. When called from a signal handler
        while the engine is blocked waiting for a frame, the wait is aborted.
        """
        self._stop_requested = True
        if self._dispatching:
            raise _StopRequested

    def run(self) -> int:
        """Run the session in the foreground until shutdown or a fatal error.

        Returns:
            The process exit status.
        """
        self.reporter.report(StatusCode.EAP_START)

        try:
            started = self.engine.start() == EapolResult.OK
        except OSError as err:
            _LOGGER.error("EAPoL start failed: %s", err)
            started = False

        if not started:
            self.reporter.report(StatusCode.EAPOL_START_ERROR)
            return EXIT_FAILURE

        for signum in SHUTDOWN_SIGNALS:
            signal.signal(signum, self.request_stop)

        try:
            while not self._stop_requested:
                failure: H3CError | OSError | None = None
                result = EapolResult.ERROR
                try:
                    self._dispatching = True
                    result = self.engine.dispatch()
                except (H3CError, OSError) as err:
                    failure = err
                finally:
                    self._dispatching = False

                if self._stop_requested:
                    break
                if failure is not None:
                    if isinstance(failure, H3CError):
                        self.reporter.report(failure.status)
                    _LOGGER.error("EAPoL dispatch failed: %s", failure)
                    self.engine.cleanup()
                    return EXIT_FAILURE
                if result != EapolResult.OK:
                    _LOGGER.error("EAPoL dispatch ended with %s", result)
                    self.engine.cleanup()
                    return EXIT_FAILURE
        except _StopRequested:
            self._dispatching = False
            _LOGGER.debug("Dispatch interrupted by shutdown request")

        return self.shutdown()

    def shutdown(self) -> int:
        """Log off and release the engine."""
        _LOGGER.info("Logging off from %s", self.config.interface)
        self.engine.logoff()
        self.engine.cleanup()
        return EXIT_SUCCESS


def init(
    config: SessionConfig | Mapping[str, Any], engine: EapolEngine
) -> H3CSession:
    """Validate the configuration and register the session with the engine.

    Must be called once per process, before the session is run.

    Args:
        config: A SessionConfig, or the mapping to build one from.
        engine: The EAPoL engine to bind.

    Returns:
        The ready session.
    """
    try:
        if isinstance(config, Mapping):
            config = dict(config)
        validated = SessionConfig.model_validate(config)
    except ValidationError as err:
        _LOGGER.debug("Rejected session configuration: %s", err)
        raise InvalidParametersError() from err

    max_username = engine.max_payload - len(VERSION_INFO)
    if len(validated.username_bytes) > max_username:
        raise InvalidParametersError(
            f"username must not exceed {max_username} bytes for this engine"
        )

    session = H3CSession(validated, engine)

    try:
        result = engine.init(validated.interface, session.responder.callbacks())
    except OSError as err:
        raise EngineInitError(
            f"Fail to initialize EAPoL on {validated.interface}: {err}"
        ) from err

    if result != EapolResult.OK:
        raise EngineInitError()

    _LOGGER.info("EAPoL initialized on %s", validated.interface)
    return session

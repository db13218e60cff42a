"""Interface for the external EAPoL authentication engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

from ..const import EAP_MAX_PAYLOAD


class EapolResult(IntEnum):
    """Result of an engine operation or a status callback."""

    OK = 0
    ERROR = 1
    AUTH_FAILURE = 2


# (capacity) -> payload
IdentityCallback = Callable[[int], bytes]
# (identifier, challenge data, capacity) -> payload
ChallengeCallback = Callable[[int, bytes, int], bytes]
StatusCallback = Callable[[], EapolResult]


@dataclass(frozen=True)
class EapolCallbacks:
    """Callbacks the engine invokes synchronously while dispatching events.

    Payload callbacks receive the space available in the outgoing frame and
    return the response type data. Status callbacks tell the engine whether
    to keep going (``EapolResult.OK``) or end the session.
    """

    identity: IdentityCallback
    md5_challenge: ChallengeCallback
    h3c_challenge: ChallengeCallback
    response: StatusCallback
    success: StatusCallback
    failure: StatusCallback
    unknown: StatusCallback


class EapolEngine(ABC):
    """Abstract base class for EAPoL engines.

    An engine owns the network interface binding, frame encoding and the
    generic EAP state machine. Engines are provided by plug-ins registered
    under the ``h3c.engines`` entry-point group.
    """

    #: Largest response type data the engine can place in one frame
    max_payload: int = EAP_MAX_PAYLOAD

    @abstractmethod
    def init(self, interface: str, callbacks: EapolCallbacks) -> EapolResult:
        """Bind the interface and register the callback table.

        Args:
            interface: The network interface name.
            callbacks: The callbacks for protocol events.

        Returns:
            EapolResult.OK if the engine is ready.
        """

    @abstractmethod
    def start(self) -> EapolResult:
        """Send EAPoL-Start to begin the handshake."""

    @abstractmethod
    def dispatch(self) -> EapolResult:
        """Block until the next protocol event has been processed.

        Returns:
            EapolResult.OK to keep dispatching, anything else is fatal.
        """

    @abstractmethod
    def logoff(self) -> None:
        """Send EAPoL-Logoff."""

    @abstractmethod
    def cleanup(self) -> None:
        """Release the interface and any engine resources."""

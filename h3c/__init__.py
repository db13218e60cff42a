"""The H3C 802.1X supplicant."""

from __future__ import annotations

from .core.engine_interface import EapolCallbacks, EapolEngine, EapolResult
from .core.errors import (
    EngineInitError,
    EngineStartError,
    H3CError,
    InvalidParametersError,
    ResponseError,
)
from .core.models import SessionConfig
from .core.status import StatusCode, StatusReporter
from .session import H3CSession, init
from .supervisor import Supervisor

__all__ = [
    "EapolCallbacks",
    "EapolEngine",
    "EapolResult",
    "EngineInitError",
    "EngineStartError",
    "H3CError",
    "H3CSession",
    "InvalidParametersError",
    "ResponseError",
    "SessionConfig",
    "StatusCode",
    "StatusReporter",
    "Supervisor",
    "init",
]

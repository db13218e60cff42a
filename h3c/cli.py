"""Command line front end for the H3C 802.1X supplicant."""

from __future__ import annotations

import argparse
import getpass
import logging
import logging.handlers
import os
from collections.abc import Sequence
from importlib.metadata import EntryPoint, entry_points

from .const import (
    DEFAULT_INTERFACE,
    ENGINE_ENTRY_POINT_GROUP,
    EXIT_FAILURE,
    SYSLOG_IDENT,
    VERSION,
)
from .core.engine_interface import EapolEngine
from .core.errors import H3CError
from .core.status import StatusCode
from .session import init
from .supervisor import Supervisor

_LOGGER = logging.getLogger(__name__)
_STATUS_LOGGER = logging.getLogger(f"{__package__}.status")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="h3c",
        description="A command line tool for H3C 802.1X authentication",
    )
    parser.add_argument("-V", "--version", action="version", version=f"h3c {VERSION}")
    parser.add_argument("-u", "--username", required=True, help="Username")
    parser.add_argument(
        "-p", "--password", help="Password (prompted for when omitted)"
    )
    parser.add_argument(
        "-i",
        "--interface",
        default=DEFAULT_INTERFACE,
        help=f"Network interface (default: {DEFAULT_INTERFACE})",
    )
    parser.add_argument(
        "-d",
        "--daemon",
        action="store_true",
        help="fork into background and restart authentication whenever it "
        "ends; implies --syslog",
    )
    parser.add_argument(
        "--engine",
        help=f"EAPoL engine to use, by its '{ENGINE_ENTRY_POINT_GROUP}' entry point name",
    )
    parser.add_argument(
        "--syslog", action="store_true", help="log to syslog instead of stderr"
    )
    parser.add_argument("--debug", action="store_true", help="enable debug-level logging")

    args = parser.parse_args(argv)
    if args.daemon:
        args.syslog = True
    return args


def setup_logging(use_syslog: bool = False, debug: bool = False) -> logging.Logger:
    """Configure the package logger."""
    handler: logging.Handler
    if use_syslog:
        handler = logging.handlers.SysLogHandler(
            address=_syslog_address(),
            facility=logging.handlers.SysLogHandler.LOG_USER,
        )
        formatter = logging.Formatter(f"{SYSLOG_IDENT}[%(process)d]: %(message)s")
    else:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
    handler.setFormatter(formatter)

    logger = logging.getLogger(__package__)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.addHandler(handler)
    return logger


def _syslog_address() -> str | tuple[str, int]:
    for path in ("/dev/log", "/var/run/syslog"):
        if os.path.exists(path):
            return path
    return ("localhost", logging.handlers.SYSLOG_UDP_PORT)


def log_status(code: StatusCode) -> None:
    """Output sink writing every status through the logging system."""
    _STATUS_LOGGER.log(logging.ERROR if code.is_error else logging.INFO, code.message)


def load_engine(name: str | None = None) -> EapolEngine:
    """Instantiate an EAPoL engine registered as an entry point.

    Args:
        name: The entry point name. Optional when exactly one is installed.

    Returns:
        A new, uninitialized engine.
    """
    available: dict[str, EntryPoint] = {
        ep.name: ep for ep in entry_points(group=ENGINE_ENTRY_POINT_GROUP)
    }

    if name is None:
        if len(available) != 1:
            found = ", ".join(sorted(available)) or "none"
            raise LookupError(
                f"Select an EAPoL engine with --engine (installed: {found})"
            )
        (entry_point,) = available.values()
    elif name in available:
        entry_point = available[name]
    else:
        raise LookupError(f"EAPoL engine '{name}' is not installed")

    _LOGGER.debug("Loading EAPoL engine %s from %s", entry_point.name, entry_point.value)
    engine = entry_point.load()()
    if not isinstance(engine, EapolEngine):
        raise LookupError(f"Entry point '{entry_point.name}' is not an EAPoL engine")
    return engine


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.syslog, args.debug)

    if os.geteuid() != 0:
        _LOGGER.error("You have to run this program as root.")
        return EXIT_FAILURE

    password = args.password
    if password is None:
        password = getpass.getpass("Password: ")
    if not password:
        _LOGGER.error("Incorrect password.")
        return EXIT_FAILURE

    try:
        engine = load_engine(args.engine)
    except LookupError as err:
        _LOGGER.error("%s", err)
        return EXIT_FAILURE

    try:
        session = init(
            {
                "interface": args.interface,
                "username": args.username,
                "password": password,
                "output": log_status,
            },
            engine,
        )
    except H3CError as err:
        _LOGGER.error("Ethernet interface initialize fail: %s", err)
        return EXIT_FAILURE

    if not args.daemon:
        return session.run()

    try:
        return Supervisor(session).run()
    except OSError as err:
        _LOGGER.exception("could not become daemon: %s", err)
        return EXIT_FAILURE

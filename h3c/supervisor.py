"""Daemon supervision: detach from the terminal and keep a worker alive."""

from __future__ import annotations

import logging
import multiprocessing
import os
import signal
import sys
import time
from multiprocessing.process import BaseProcess
from typing import NoReturn

from .const import EXIT_SUCCESS, RESPAWN_DELAY
from .session import H3CSession

_LOGGER = logging.getLogger(__name__)

# Job control signals a daemon has no use for
IGNORED_SIGNALS = (signal.SIGTSTP, signal.SIGTTOU, signal.SIGTTIN)


class Supervisor:
    """Run a session in a worker process and respawn it whenever it exits.

    A failed session takes its whole worker down with it; the supervisor
    replaces the worker after a fixed delay, without limit.
    """

    def __init__(self, session: H3CSession, respawn_delay: float = RESPAWN_DELAY) -> None:
        """Initialize the supervisor.

        Args:
            session: The initialized session each worker runs.
            respawn_delay: Seconds to wait before replacing an exited worker.
        """
        self._session = session
        self._respawn_delay = respawn_delay
        # Workers inherit the engine bound by init()
        self._context = multiprocessing.get_context("fork")

    def run(self) -> int:
        """Daemonize and supervise, unless this process is init.

        Returns:
            The exit status of a foreground run when running as pid 1;
            otherwise this never returns.
        """
        if os.getpid() == 1:
            _LOGGER.info("Running as pid 1, staying in the foreground")
            return self._session.run()

        detach()
        _LOGGER.info("Start daemon")
        self.supervise()

    def supervise(self) -> NoReturn:
        """Spawn a worker, wait for it, pause, repeat."""
        while True:
            worker = self._spawn_worker()
            _LOGGER.info("Start child %s", worker.pid)
            worker.join()
            _LOGGER.info(
                "Child %s exited with status %s, will restart in %s seconds",
                worker.pid,
                worker.exitcode,
                self._respawn_delay,
            )
            time.sleep(self._respawn_delay)

    def _spawn_worker(self) -> BaseProcess:
        """Start a worker process performing one foreground run."""
        worker = self._context.Process(target=self._worker_main, name="h3c-worker")
        worker.start()
        return worker

    def _worker_main(self) -> None:
        """Entry point of a worker process."""
        sys.exit(self._session.run())


def detach() -> None:
    """Convert the process into a daemon.

    The original process exits; the child becomes a session leader rooted at
    ``/`` with its standard streams on ``/dev/null``.
    """
    if os.fork():
        sys.exit(EXIT_SUCCESS)

    os.setsid()
    os.chdir("/")
    os.umask(0)

    sys.stdout.flush()
    sys.stderr.flush()
    with open(os.devnull, "rb") as null_in, open(os.devnull, "ab") as null_out:
        os.dup2(null_in.fileno(), sys.stdin.fileno())
        os.dup2(null_out.fileno(), sys.stdout.fileno())
        os.dup2(null_out.fileno(), sys.stderr.fileno())

    for signum in IGNORED_SIGNALS:
        signal.signal(signum, signal.SIG_IGN)

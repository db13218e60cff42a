"""Tests for the daemon supervisor."""

import signal

import pytest

from h3c import supervisor
from h3c.const import RESPAWN_DELAY
from h3c.supervisor import Supervisor


class StubSession:
    """Session whose run outcome is fixed."""

    def __init__(self, outcome=0):
        self.outcome = outcome
        self.runs = 0

    def run(self):
        self.runs += 1
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome


class StubProcess:
    """Already finished worker process."""

    def __init__(self, pid, log):
        self.pid = pid
        self.exitcode = pid % 3
        self._log = log

    def join(self):
        self._log.append(("join", self.pid))


class StopSupervising(Exception):
    """Breaks out of the endless supervision loop."""


def test_pid_one_runs_in_foreground(monkeypatch):
    """As init, the session runs directly without daemonizing."""
    session = StubSession(outcome=0)
    monkeypatch.setattr(supervisor.os, "getpid", lambda: 1)
    monkeypatch.setattr(supervisor, "detach", pytest.fail)

    assert Supervisor(session).run() == 0
    assert session.runs == 1


def test_run_detaches_then_supervises(monkeypatch):
    """Outside of init, the process detaches before supervising."""
    events = []
    monkeypatch.setattr(supervisor.os, "getpid", lambda: 4242)
    monkeypatch.setattr(supervisor, "detach", lambda: events.append("detach"))
    monkeypatch.setattr(Supervisor, "supervise", lambda self: events.append("supervise"))

    Supervisor(StubSession()).run()
    assert events == ["detach", "supervise"]


def test_supervise_respawns_after_every_exit(monkeypatch):
    """Each exited worker is replaced after the fixed delay, indefinitely."""
    log = []
    pids = iter(range(100, 200))

    def spawn(self):
        pid = next(pids)
        log.append(("spawn", pid))
        return StubProcess(pid, log)

    def sleep(delay):
        log.append(("sleep", delay))
        if sum(1 for entry in log if entry[0] == "sleep") == 25:
            raise StopSupervising

    monkeypatch.setattr(Supervisor, "_spawn_worker", spawn)
    monkeypatch.setattr(supervisor.time, "sleep", sleep)

    with pytest.raises(StopSupervising):
        Supervisor(StubSession()).supervise()

    assert len(log) == 75
    for cycle in range(25):
        pid = 100 + cycle
        assert log[cycle * 3 : cycle * 3 + 3] == [
            ("spawn", pid),
            ("join", pid),
            ("sleep", RESPAWN_DELAY),
        ]


def test_worker_reports_run_status():
    """A worker process exits with the status of its run."""
    worker = Supervisor(StubSession(outcome=3))._spawn_worker()
    worker.join(timeout=30)

    assert worker.exitcode == 3


def test_worker_crash_is_contained():
    """A crashing run only takes down the worker process."""
    session = StubSession(outcome=RuntimeError("engine fault"))
    worker = Supervisor(session)._spawn_worker()
    worker.join(timeout=30)

    assert worker.exitcode == 1
    assert session.runs == 0


class StubStream:
    """Standard stream with a fixed descriptor."""

    def __init__(self, fd):
        self.fd = fd

    def fileno(self):
        return self.fd

    def flush(self):
        pass


@pytest.fixture
def detach_calls(monkeypatch):
    """Record the process primitives detach() uses."""
    calls = []
    monkeypatch.setattr(supervisor.os, "setsid", lambda: calls.append(("setsid",)))
    monkeypatch.setattr(supervisor.os, "chdir", lambda path: calls.append(("chdir", path)))
    monkeypatch.setattr(supervisor.os, "umask", lambda mask: calls.append(("umask", mask)))
    monkeypatch.setattr(
        supervisor.os, "dup2", lambda fd, target: calls.append(("dup2", target))
    )
    monkeypatch.setattr(
        supervisor.signal,
        "signal",
        lambda signum, handler: calls.append(("signal", signum, handler)),
    )
    for fd, name in enumerate(("stdin", "stdout", "stderr")):
        monkeypatch.setattr(supervisor.sys, name, StubStream(fd))
    return calls


def test_detach_parent_exits(monkeypatch, detach_calls):
    """The original process exits successfully once the child is forked."""
    monkeypatch.setattr(supervisor.os, "fork", lambda: 4242)

    with pytest.raises(SystemExit) as excinfo:
        supervisor.detach()

    assert excinfo.value.code == 0
    assert detach_calls == []


def test_detach_child_becomes_daemon(monkeypatch, detach_calls):
    """The child leads a new session rooted at / with null streams."""
    monkeypatch.setattr(supervisor.os, "fork", lambda: 0)

    supervisor.detach()

    assert detach_calls == [
        ("setsid",),
        ("chdir", "/"),
        ("umask", 0),
        ("dup2", 0),
        ("dup2", 1),
        ("dup2", 2),
        ("signal", signal.SIGTSTP, signal.SIG_IGN),
        ("signal", signal.SIGTTOU, signal.SIG_IGN),
        ("signal", signal.SIGTTIN, signal.SIG_IGN),
    ]

from __future__ import annotations

import curses
import signal

import pytest

from termtris import terminal
from termtris.terminal import TerminalError, terminal_session


class FakeScreen:
    def __init__(self, rows: int = 40, cols: int = 120) -> None:
        self.size = (rows, cols)
        self.keypad_calls = []
        self.nodelay_calls = []

    def keypad(self, flag: bool) -> None:
        self.keypad_calls.append(flag)

    def nodelay(self, flag: bool) -> None:
        self.nodelay_calls.append(flag)

    def getmaxyx(self):
        return self.size


@pytest.fixture
def fake_curses(monkeypatch):
    calls = []
    screen = FakeScreen()

    def record(name):
        def _call(*args):
            calls.append((name, *args))
        return _call

    monkeypatch.setattr(curses, "initscr", lambda: screen)
    for name in ("noecho", "echo", "raw", "noraw", "curs_set", "endwin"):
        monkeypatch.setattr(curses, name, record(name))
    return screen, calls


def _restored(calls) -> bool:
    names = [call[0] for call in calls]
    return (
        "noraw" in names
        and "echo" in names
        and ("curs_set", 1) in calls
        and names[-1] == "endwin"
    )


def test_session_enters_raw_mode_and_restores(fake_curses):
    screen, calls = fake_curses
    with terminal_session() as window:
        assert window is screen
        assert ("raw",) in calls
        assert ("curs_set", 0) in calls
        assert screen.nodelay_calls == [True]
    assert screen.keypad_calls == [True, False]
    assert _restored(calls)


def test_session_restores_after_exception(fake_curses):
    _, calls = fake_curses
    with pytest.raises(RuntimeError, match="boom"):
        with terminal_session():
            raise RuntimeError("boom")
    assert _restored(calls)


def test_session_rejects_small_terminal(fake_curses):
    screen, calls = fake_curses
    screen.size = (10, 30)
    with pytest.raises(TerminalError, match="too small"):
        with terminal_session(min_size=(22, 40)):
            pass
    assert _restored(calls)


def test_initscr_failure_is_terminal_error(monkeypatch):
    def broken():
        raise curses.error("setupterm: could not find terminal")

    monkeypatch.setattr(curses, "initscr", broken)
    with pytest.raises(TerminalError, match="cannot initialise terminal"):
        with terminal_session():
            pass


def test_raw_mode_failure_is_terminal_error(fake_curses, monkeypatch):
    _, calls = fake_curses

    def refuse():
        raise curses.error("raw() returned ERR")

    monkeypatch.setattr(curses, "raw", refuse)
    with pytest.raises(TerminalError, match="raw mode"):
        with terminal_session():
            pass
    assert _restored(calls)


def test_restore_continues_after_failing_step(fake_curses, monkeypatch):
    _, calls = fake_curses

    def no_cursor(visibility):
        raise curses.error("curs_set() returned ERR")

    monkeypatch.setattr(curses, "curs_set", no_cursor)
    with terminal_session():
        pass
    assert calls[-1] == ("endwin",)


@pytest.mark.skipif(not hasattr(signal, "SIGTERM"), reason="needs SIGTERM")
def test_sigterm_unwinds_through_cleanup(fake_curses):
    _, calls = fake_curses
    before = signal.getsignal(signal.SIGTERM)
    with pytest.raises(SystemExit) as excinfo:
        with terminal_session():
            assert signal.getsignal(signal.SIGTERM) is terminal._raise_exit
            signal.raise_signal(signal.SIGTERM)
    assert excinfo.value.code == 128 + signal.SIGTERM
    assert signal.getsignal(signal.SIGTERM) == before
    assert _restored(calls)

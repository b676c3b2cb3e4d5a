# tests/test_console_connector.py

from __future__ import annotations

import asyncio
import threading

import pytest

from smarttask.connectors.console_connector import read_line, run_console_loop
from smarttask.core.session import SessionController


def _scripted_input(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> list[str]:
    prompts: list[str] = []
    feed = iter(lines)

    def fake_input(prompt: str = "") -> str:
        prompts.append(prompt)
        try:
            return next(feed)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)
    return prompts


@pytest.mark.asyncio
async def test_read_line_returns_input_and_propagates_eof(monkeypatch: pytest.MonkeyPatch) -> None:
    prompts = _scripted_input(monkeypatch, ["hello"])

    assert await read_line("guest> ") == "hello"
    with pytest.raises(EOFError):
        await read_line("guest> ")
    assert prompts == ["guest> ", "guest> "]


@pytest.mark.asyncio
async def test_console_loop_runs_until_eof(
    ctl: SessionController, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    prompts = _scripted_input(monkeypatch, ["/login sam", "", "call the dentist"])

    await run_console_loop(ctl)

    manager = ctl.state.manager
    assert manager is not None
    assert [t.text for t in manager.tasks] == ["Call the dentist"]
    assert prompts[0] == "guest> "
    assert prompts[-1] == "sam> "
    assert "Added: Call the dentist" in capsys.readouterr().out
    await ctl.shutdown()


@pytest.mark.asyncio
async def test_console_loop_stops_on_exit_command(ctl: SessionController, monkeypatch: pytest.MonkeyPatch) -> None:
    prompts = _scripted_input(monkeypatch, ["/exit", "never read"])

    await run_console_loop(ctl)

    assert prompts == ["guest> "]


@pytest.mark.asyncio
async def test_cancel_does_not_wait_for_blocked_input(
    ctl: SessionController, monkeypatch: pytest.MonkeyPatch
) -> None:
    entered = threading.Event()
    release = threading.Event()

    def blocking_input(prompt: str = "") -> str:
        entered.set()
        release.wait(5.0)
        return ""

    monkeypatch.setattr("builtins.input", blocking_input)

    task = asyncio.create_task(run_console_loop(ctl))
    try:
        for _ in range(100):
            if entered.is_set():
                break
            await asyncio.sleep(0.01)
        assert entered.is_set()

        task.cancel()
        done, _ = await asyncio.wait({task}, timeout=1.0)
        assert task in done
        assert task.cancelled()
    finally:
        release.set()

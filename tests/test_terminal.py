"""Tests for pi.datatable.terminal -- terminal width detection."""

from __future__ import annotations

import io
import os

import pytest

from pi.datatable.errors import ConfigurationError
from pi.datatable.terminal import terminal_width


class _FakeTTY(io.StringIO):
    def fileno(self) -> int:
        return 99


class TestTerminalWidth:
    def test_columns_env_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COLUMNS", "123")
        assert terminal_width(io.StringIO()) == 123

    def test_queries_stream_terminal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("COLUMNS", raising=False)
        monkeypatch.setattr(os, "get_terminal_size", lambda fd: os.terminal_size((88, 24)))
        assert terminal_width(_FakeTTY()) == 88

    @pytest.mark.parametrize("value", ["0", "-4", "wide", ""])
    def test_bad_columns_env_falls_back(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("COLUMNS", value)
        monkeypatch.setattr(os, "get_terminal_size", lambda fd: os.terminal_size((70, 24)))
        assert terminal_width(_FakeTTY()) == 70

    def test_not_a_terminal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("COLUMNS", raising=False)
        with pytest.raises(ConfigurationError):
            terminal_width(io.StringIO())

    def test_terminal_without_columns(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("COLUMNS", raising=False)
        monkeypatch.setattr(os, "get_terminal_size", lambda fd: os.terminal_size((0, 0)))
        with pytest.raises(ConfigurationError):
            terminal_width(_FakeTTY())

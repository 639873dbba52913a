"""Tests for pi.datatable.ansi -- escape sequence handling."""

from __future__ import annotations

from pi.datatable.ansi import LINK_CLOSE, RESET, AnsiCodeTracker, split_ansi, strip_ansi


class TestStripAnsi:
    def test_plain_text_unchanged(self) -> None:
        assert strip_ansi("hello") == "hello"

    def test_removes_sgr_and_hyperlinks(self) -> None:
        text = "\x1b[1m\x1b]8;;https://x.dev\x07go\x1b]8;;\x07\x1b[0m"
        assert strip_ansi(text) == "go"

    def test_split_keeps_order(self) -> None:
        assert split_ansi("a\x1b[1mb") == [("a", False), ("\x1b[1m", True), ("b", False)]


# ---------------------------------------------------------------------------
# AnsiCodeTracker
# ---------------------------------------------------------------------------


class TestAnsiCodeTracker:
    """Track SGR and hyperlink state across a line break."""

    def test_starts_inactive(self) -> None:
        tracker = AnsiCodeTracker()
        assert not tracker.active
        assert tracker.active_codes() == ""
        assert tracker.line_end_reset() == ""

    def test_bold_and_colour(self) -> None:
        tracker = AnsiCodeTracker()
        tracker.process("\x1b[1;31m")
        assert tracker.active_codes() == "\x1b[1m\x1b[31m"
        assert tracker.line_end_reset() == RESET

    def test_reset_clears(self) -> None:
        tracker = AnsiCodeTracker()
        tracker.process("\x1b[4m")
        tracker.process("\x1b[0m")
        assert not tracker.active

    def test_empty_params_is_reset(self) -> None:
        tracker = AnsiCodeTracker()
        tracker.process("\x1b[3m")
        tracker.process("\x1b[m")
        assert not tracker.active

    def test_attribute_off(self) -> None:
        tracker = AnsiCodeTracker()
        tracker.process("\x1b[1m")
        tracker.process("\x1b[2m")
        tracker.process("\x1b[22m")
        assert not tracker.active

    def test_256_and_true_colour(self) -> None:
        tracker = AnsiCodeTracker()
        tracker.process("\x1b[38;5;208m")
        tracker.process("\x1b[48;2;10;20;30m")
        assert tracker.active_codes() == "\x1b[38;5;208m\x1b[48;2;10;20;30m"

    def test_default_colour_clears_slot(self) -> None:
        tracker = AnsiCodeTracker()
        tracker.process("\x1b[32m")
        tracker.process("\x1b[39m")
        assert not tracker.active

    def test_other_sequences_ignored(self) -> None:
        tracker = AnsiCodeTracker()
        tracker.process("\x1b[2K")
        tracker.process("\x1b_payload\x07")
        assert not tracker.active

    def test_open_hyperlink_closed_at_line_end(self) -> None:
        tracker = AnsiCodeTracker()
        tracker.process("\x1b]8;;https://x.dev\x07")
        assert tracker.active
        assert tracker.active_codes() == "\x1b]8;;https://x.dev\x07"
        assert tracker.line_end_reset() == LINK_CLOSE

    def test_hyperlink_with_string_terminator(self) -> None:
        tracker = AnsiCodeTracker()
        tracker.process("\x1b]8;id=1;https://x.dev\x1b\\")
        assert tracker.active_codes() == "\x1b]8;id=1;https://x.dev\x1b\\"
        tracker.process("\x1b]8;;\x1b\\")
        assert not tracker.active

    def test_sgr_reset_keeps_hyperlink_open(self) -> None:
        tracker = AnsiCodeTracker()
        tracker.process("\x1b[1m")
        tracker.process("\x1b]8;;https://x.dev\x07")
        tracker.process("\x1b[0m")
        assert tracker.active_codes() == "\x1b]8;;https://x.dev\x07"
        assert tracker.line_end_reset() == LINK_CLOSE

    def test_style_and_hyperlink_both_closed(self) -> None:
        tracker = AnsiCodeTracker()
        tracker.process("\x1b[31m")
        tracker.process("\x1b]8;;https://x.dev\x07")
        assert tracker.active_codes() == "\x1b[31m\x1b]8;;https://x.dev\x07"
        assert tracker.line_end_reset() == LINK_CLOSE + RESET

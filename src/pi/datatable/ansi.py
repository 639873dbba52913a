"""ANSI escape handling for pre-styled cell content.

Styled spans reach the engine already rendered, so cell text may carry SGR
sequences (``ESC[...m``), OSC 8 hyperlinks and APC payloads.  They occupy no
columns.  When a styled cell is wrapped, :class:`AnsiCodeTracker` closes the
active style and any open hyperlink at the end of each line and re-opens
them on the next one so that every grid line is self-contained.
"""

from __future__ import annotations

import re

RESET = "\x1b[0m"
LINK_CLOSE = "\x1b]8;;\x07"

# CSI ... final byte, OSC ... (BEL | ST), APC ... (BEL | ST)
ANSI_RE = re.compile(
    r"\x1b\[[0-9;]*[A-Za-z]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"
)

# SGR parameter -> (attribute slot, enabled)
_ATTRIBUTE_ON = {
    1: "bold",
    2: "dim",
    3: "italic",
    4: "underline",
    5: "blink",
    7: "inverse",
    8: "hidden",
    9: "strikethrough",
}
_ATTRIBUTE_OFF = {
    22: ("bold", "dim"),
    23: ("italic",),
    24: ("underline",),
    25: ("blink",),
    27: ("inverse",),
    28: ("hidden",),
    29: ("strikethrough",),
}
_SLOT_ORDER = (
    "bold",
    "dim",
    "italic",
    "underline",
    "blink",
    "inverse",
    "hidden",
    "strikethrough",
    "fg",
    "bg",
)


def strip_ansi(text: str) -> str:
    """Remove every escape sequence from *text*."""
    if "\x1b" not in text:
        return text
    return ANSI_RE.sub("", text)


def split_ansi(text: str) -> list[tuple[str, bool]]:
    """Split *text* into ``(chunk, is_escape)`` pieces, in order."""
    pieces: list[tuple[str, bool]] = []
    pos = 0
    for match in ANSI_RE.finditer(text):
        if match.start() > pos:
            pieces.append((text[pos : match.start()], False))
        pieces.append((match.group(), True))
        pos = match.end()
    if pos < len(text):
        pieces.append((text[pos:], False))
    return pieces


class AnsiCodeTracker:
    """Track which SGR attributes and hyperlink are active across a stream of escapes."""

    def __init__(self) -> None:
        self._slots: dict[str, str] = {}
        self._link: str | None = None

    def process(self, code: str) -> None:
        """Update the tracked state from one escape sequence.

        Other sequences (cursor movement, APC payloads) are ignored.
        """
        if code.startswith("\x1b]8;"):
            self._process_link(code)
            return
        if not code.startswith("\x1b[") or not code.endswith("m"):
            return

        params = code[2:-1].split(";") if code[2:-1] else ["0"]
        i = 0
        while i < len(params):
            value = int(params[i]) if params[i].isdigit() else 0
            if value == 0:
                # SGR reset leaves hyperlinks open
                self._slots.clear()
            elif value in _ATTRIBUTE_ON:
                self._slots[_ATTRIBUTE_ON[value]] = f"\x1b[{value}m"
            elif value in _ATTRIBUTE_OFF:
                for slot in _ATTRIBUTE_OFF[value]:
                    self._slots.pop(slot, None)
            elif value in (38, 48):
                slot = "fg" if value == 38 else "bg"
                mode = params[i + 1] if i + 1 < len(params) else ""
                # 5;N is a 256-colour index, 2;R;G;B is true colour
                extra = 2 if mode == "5" else 4 if mode == "2" else 0
                if extra and i + extra < len(params):
                    joined = ";".join(params[i : i + extra + 1])
                    self._slots[slot] = f"\x1b[{joined}m"
                    i += extra
            elif value == 39:
                self._slots.pop("fg", None)
            elif value == 49:
                self._slots.pop("bg", None)
            elif 30 <= value <= 37 or 90 <= value <= 97:
                self._slots["fg"] = f"\x1b[{value}m"
            elif 40 <= value <= 47 or 100 <= value <= 107:
                self._slots["bg"] = f"\x1b[{value}m"
            i += 1

    def _process_link(self, code: str) -> None:
        # ESC ] 8 ; params ; uri (BEL | ST); an empty uri closes the link
        body = code[4:-1] if code.endswith("\x07") else code[4:-2]
        _params, _sep, uri = body.partition(";")
        self._link = code if uri else None

    @property
    def active(self) -> bool:
        return bool(self._slots) or self._link is not None

    def active_codes(self) -> str:
        """Escapes that re-establish the current state on a fresh line."""
        codes = "".join(self._slots[slot] for slot in _SLOT_ORDER if slot in self._slots)
        return codes + (self._link or "")

    def line_end_reset(self) -> str:
        return (LINK_CLOSE if self._link else "") + (RESET if self._slots else "")

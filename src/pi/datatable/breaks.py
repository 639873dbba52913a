"""Line-break opportunities following a practical subset of UAX #14.

:func:`breaks` returns a :class:`BreakOpportunities` object: a finite,
re-iterable sequence of :class:`Break` tuples.  ``Break.position`` is the
index at which the next line would start, so ``text[prev:position]`` is the
segment that may end a line.  The last element is always a mandatory break
at ``len(text)``, also for empty or unbreakable text.

The classification table is process-wide read-only state, built once on
first use (:func:`_class_table` is cached) and never mutated afterwards.
"""

from __future__ import annotations

import unicodedata
from functools import lru_cache
from typing import Iterator, NamedTuple

# Line-breaking classes
BK = "BK"  # mandatory break (form feed, line/paragraph separator)
CR = "CR"
LF = "LF"
NL = "NL"  # next line
SP = "SP"
ZW = "ZW"  # zero width space
WJ = "WJ"  # word joiner
ZWJ = "ZWJ"
GL = "GL"  # non-breaking glue
BA = "BA"  # break after
BB = "BB"  # break before
HY = "HY"  # hyphen-minus
CL = "CL"  # close punctuation
CP = "CP"  # close parenthesis
OP = "OP"  # open punctuation
QU = "QU"  # quotation
EX = "EX"  # exclamation / interrogation
IS = "IS"  # infix numeric separator
SY = "SY"  # symbols allowing break after
NS = "NS"  # nonstarter
PR = "PR"  # prefix numeric
PO = "PO"  # postfix numeric
NU = "NU"
ID = "ID"  # ideographic
CM = "CM"  # combining mark
AL = "AL"  # alphabetic / default

_HARD = frozenset({BK, CR, LF, NL})
_NO_BREAK_BEFORE = frozenset({CL, CP, EX, IS, SY, WJ})
_NO_BREAK_BEFORE_DIRECT = frozenset({BA, HY, NS, QU})


class Break(NamedTuple):
    position: int
    mandatory: bool


@lru_cache(maxsize=None)
def _class_table() -> dict[int, str]:
    """Explicit code point assignments, overriding the category fallback."""
    groups: dict[str, tuple[int | range, ...]] = {
        BK: (0x0B, 0x0C, 0x2028, 0x2029),
        CR: (0x0D,),
        LF: (0x0A,),
        NL: (0x85,),
        SP: (0x20,),
        ZW: (0x200B,),
        WJ: (0x2060, 0xFEFF),
        ZWJ: (0x200D,),
        GL: (0xA0, 0x034F, 0x2007, 0x2011, 0x202F, 0x180E, 0x0F0C),
        BA: (
            0x09, 0x7C, 0xAD, 0x058A, 0x1680, range(0x2000, 0x2007),
            range(0x2008, 0x200B), 0x2010, 0x2012, 0x2013, 0x205F,
        ),
        BB: (0xB4, 0x02C8, 0x02CC, 0x02DF),
        HY: (0x2D,),
        CL: (0x7D, 0x3001, 0x3002, 0xFE50, 0xFE52, 0xFF0C, 0xFF0E, 0xFF61, 0xFF64),
        CP: (0x29, 0x5D),
        QU: (
            0x22, 0x27, 0xAB, 0xBB, range(0x2018, 0x201A), 0x201B,
            range(0x201C, 0x201E), 0x201F, 0x2039, 0x203A, range(0x275B, 0x275F),
        ),
        EX: (0x21, 0x3F, 0x061F, 0xFE56, 0xFE57, 0xFF01, 0xFF1F),
        IS: (0x2C, 0x2E, 0x3A, 0x3B, 0x037E, 0x0589, 0x060C, 0x060D, 0x07F8, 0x2044, 0xFE10, 0xFE13, 0xFE14),
        SY: (0x2F,),
        NS: (
            0x17D6, 0x203C, 0x203D, range(0x2047, 0x204A), 0x3005, 0x301C, 0x303B,
            0x309B, 0x309C, 0x309D, 0x309E, 0x30A0, 0x30FB, 0x30FC, 0x30FD, 0x30FE,
            # small kana
            0x3041, 0x3043, 0x3045, 0x3047, 0x3049, 0x3063, 0x3083, 0x3085, 0x3087,
            0x308E, 0x3095, 0x3096, 0x30A1, 0x30A3, 0x30A5, 0x30A7, 0x30A9, 0x30C3,
            0x30E3, 0x30E5, 0x30E7, 0x30EE, 0x30F5, 0x30F6,
        ),
        PR: (0x24, 0x2B, 0x5C, 0xA3, 0xA4, 0xA5, 0x20AC, 0x2116, 0x2212, 0x2213),
        PO: (0x25, 0xA2, 0xB0, 0x2030, 0x2031, range(0x2032, 0x2038), 0x2103, 0x2109),
    }
    table: dict[int, str] = {}
    for cls, members in groups.items():
        for member in members:
            for cp in member if isinstance(member, range) else (member,):
                table[cp] = cls
    return table


@lru_cache(maxsize=8192)
def line_break_class(ch: str) -> str:
    """Return the line-breaking class of a single code point."""
    explicit = _class_table().get(ord(ch))
    if explicit is not None:
        return explicit

    category = unicodedata.category(ch)
    if category in ("Mn", "Mc", "Me") or category == "Cc":
        return CM
    if category == "Nd":
        return NU
    if category == "Ps":
        return OP
    if category == "Pe":
        return CL
    if category in ("Pi", "Pf"):
        return QU
    if category == "Sc":
        return PR
    if unicodedata.east_asian_width(ch) in ("W", "F"):
        if category.startswith("P"):
            return CL if category == "Po" else AL
        return ID
    return AL


def _break_between(before: str, after: str, spaces: bool) -> bool:
    """Pair rules for a position that is neither hard nor inside a space run.

    *before* is the resolved class of the last non-space character and
    *spaces* tells whether spaces separate it from *after*.
    """
    if after in _NO_BREAK_BEFORE:
        return False
    if before == OP:
        return False
    if before == QU and after == OP:
        return False
    if before in (CL, CP) and after == NS:
        return False
    if spaces:
        # break after spaces unless a rule above binds across them
        return True

    if before in (GL, WJ):
        return False
    if after == GL and before not in (BA, HY):
        return False
    if after in _NO_BREAK_BEFORE_DIRECT or before in (QU, BB):
        return False
    if before == AL and after in (AL, NU, PR, PO, OP):
        return False
    if before == NU and after in (AL, NU, PO, PR, OP):
        return False
    if before in (PR, PO) and after in (AL, NU, ID, OP):
        return False
    if before == ID and after == PO:
        return False
    if before in (CL, CP) and after in (PO, PR):
        return False
    if before in (HY, IS, SY) and after == NU:
        return False
    if before == IS and after == AL:
        return False
    if before == CP and after in (AL, NU):
        return False
    return True


def _scan(text: str) -> Iterator[Break]:
    n = len(text)
    if n == 0:
        yield Break(0, True)
        return

    first = line_break_class(text[0])
    # Resolved class of the last non-space character (CM attaches to it)
    base = AL if first in (CM, ZWJ) else first
    raw_prev = first
    spaces = False
    after_zw = first == ZW

    for i in range(1, n):
        cls = line_break_class(text[i])

        if raw_prev in (BK, LF, NL) or (raw_prev == CR and cls != LF):
            yield Break(i, True)
            base = AL if cls in (CM, ZWJ) else cls
            raw_prev = cls
            spaces = False
            after_zw = cls == ZW
            continue

        if cls in _HARD or cls == SP or cls == ZW:
            if cls == SP:
                spaces = True
            elif cls == ZW:
                after_zw = True
                spaces = False
            else:
                base = cls
            raw_prev = cls
            continue

        if after_zw:
            allowed = True
        elif raw_prev == ZWJ:
            allowed = False
        elif cls in (CM, ZWJ):
            if spaces:
                # a combining mark after a space behaves as alphabetic
                allowed = _break_between(base, AL, True)
                cls = AL
            else:
                allowed = False
                raw_prev = cls
                continue
        else:
            allowed = _break_between(base, cls, spaces)

        if allowed:
            yield Break(i, False)
        base = cls
        raw_prev = cls
        spaces = False
        after_zw = False

    yield Break(n, True)


class BreakOpportunities:
    """Lazy, restartable view over the break opportunities of a text."""

    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        self.text = text

    def __iter__(self) -> Iterator[Break]:
        return _scan(self.text)

    def __len__(self) -> int:
        return sum(1 for _ in _scan(self.text))

    def __repr__(self) -> str:
        return f"BreakOpportunities({self.text!r})"


def breaks(text: str) -> BreakOpportunities:
    """Return the legal wrap positions of *text*."""
    return BreakOpportunities(text)

"""Display-width oracle: how many terminal columns a piece of text occupies.

Measurement works on grapheme clusters (``grapheme``) and delegates single
code points to ``wcwidth``:

* control characters, combining marks and format characters -> 0
* East Asian wide / fullwidth characters and emoji clusters -> 2
* everything else, including unassigned code points -> 1

Escape sequences are stripped before measuring.  All functions are pure;
results are memoised with :func:`functools.lru_cache`, which is safe for
concurrent readers.
"""

from __future__ import annotations

import unicodedata
from functools import lru_cache

import grapheme
import wcwidth as _wcwidth

from pi.datatable.ansi import strip_ansi

TAB_WIDTH = 3


@lru_cache(maxsize=4096)
def cluster_width(cluster: str) -> int:
    """Return the display width of a single grapheme cluster."""
    if not cluster:
        return 0

    if len(cluster) == 1:
        cp = ord(cluster)
        if cp < 0x20 or 0x7F <= cp <= 0x9F:
            return 0
        # wcwidth reports -1 only for control characters handled above
        return max(_wcwidth.wcwidth(cluster), 0)

    for ch in cluster:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ sequence
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF:  # skin tone modifier
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF:  # regional indicator pair
            return 2

    first = cluster[0]
    first_cp = ord(first)
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    category = unicodedata.category(first)
    if category.startswith("M") or category == "Cf":
        return 0
    return max(_wcwidth.wcwidth(first), 0)


def display_width(text: str) -> int:
    """Calculate the display width of *text*.

    Escape sequences do not count and tabs count as :data:`TAB_WIDTH`
    columns.  Pure ASCII takes a fast path.
    """
    if not text:
        return 0

    plain = strip_ansi(text)
    if plain.isascii() and plain.isprintable():
        return len(plain)
    return _measure(plain)


@lru_cache(maxsize=1024)
def _measure(plain: str) -> int:
    total = 0
    for cluster in grapheme.graphemes(plain):
        total += TAB_WIDTH * cluster.count("\t") if "\t" in cluster else cluster_width(cluster)
    return total

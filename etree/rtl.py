"""Visual reordering of right-to-left script runs for terminal output.

Terminals without bidi support print Hebrew/Arabic names in logical order,
which reads backwards. ``compose`` reverses each RTL run in place so the
line looks right when drawn strictly left to right. Export files keep the
logical order and never go through this module.
"""

from __future__ import annotations

# Hebrew, Arabic, Syriac, Thaana (and neighbours) plus Arabic presentation forms.
RTL_RANGES: tuple[tuple[int, int], ...] = (
    (0x0590, 0x08FF),
    (0xFB50, 0xFDFF),
    (0xFE70, 0xFEFF),
)


def is_rtl_char(ch: str) -> bool:
    """Return whether one character belongs to a right-to-left script block."""
    code = ord(ch)
    return any(start <= code <= end for start, end in RTL_RANGES)


def needs_composition(text: str) -> bool:
    """Return whether ``text`` contains at least one RTL code point."""
    return any(is_rtl_char(ch) for ch in text)


def _flush(run: list[str], run_has_rtl: bool, out: list[str]) -> None:
    if not run_has_rtl:
        out.extend(run)
        return
    end = len(run)
    while run[end - 1] == " ":
        end -= 1
    out.extend(reversed(run[:end]))
    out.extend(run[end:])


def compose(text: str) -> str:
    """Reverse RTL runs of ``text`` for left-to-right terminal rendering.

    Spaces join the current run. Any other non-RTL character closes it: an
    RTL run is reversed by code point, except that its trailing spaces stay
    at the end, and a plain run is copied unchanged.
    """
    out: list[str] = []
    run: list[str] = []
    run_has_rtl = False
    for ch in text:
        if is_rtl_char(ch):
            run.append(ch)
            run_has_rtl = True
        elif ch == " ":
            run.append(ch)
        else:
            _flush(run, run_has_rtl, out)
            run = []
            run_has_rtl = False
            out.append(ch)
    _flush(run, run_has_rtl, out)
    return "".join(out)


__all__ = ["RTL_RANGES", "compose", "is_rtl_char", "needs_composition"]

import string

from charfsm.charclass.models import (
    ALPHABET,
    CharClassPattern,
    CharEscape,
    CharLiteral,
    CharNegate,
    CharRange,
    CharWildcard,
)
from charfsm.charclass.parse import compile_pattern

_ALPHABET_INDEX = {sym: idx for idx, sym in enumerate(ALPHABET)}

_ESCAPE_CLASSES: dict[str, frozenset[str]] = {
    "\\": frozenset("\\"),
    "^": frozenset("^"),
    "-": frozenset("-"),
    ".": frozenset("."),
    "w": frozenset(string.ascii_letters),
    "d": frozenset(string.digits),
    "s": frozenset(" \t"),
    "n": frozenset("\n"),
    "t": frozenset("\t"),
    "0": frozenset("\0"),
}


def _in_range(start: str | None, end: str | None, symbol: str) -> bool:
    if start is None or start not in _ALPHABET_INDEX:
        return False
    pos = _ALPHABET_INDEX.get(symbol)
    if pos is None:
        return False
    lo = _ALPHABET_INDEX[start]
    hi = _ALPHABET_INDEX.get(end, len(ALPHABET) - 1)
    return lo <= pos <= hi


def eval_char_class(pattern: CharClassPattern | str, symbol: str) -> bool:
    """Return whether ``symbol`` is accepted by ``pattern``.

    Elements are tried in order. ``^`` flips negation for everything after
    it; the first element that contains ``symbol`` decides the result under
    the negation in effect at that point. If nothing contains it, the result
    is the final negation state.
    """
    if isinstance(pattern, str):
        pattern = compile_pattern(pattern)

    negated = False
    for element in pattern.elements:
        match element:
            case CharNegate():
                negated = not negated
                continue
            case CharWildcard():
                return not negated
            case CharLiteral(char=c):
                hit = symbol == c
            case CharRange(start=lo, end=hi):
                hit = _in_range(lo, hi, symbol)
            case CharEscape(code=code):
                hit = symbol in _ESCAPE_CLASSES.get(code, frozenset())
            case _:
                raise ValueError(f"Unknown character-class element: {element}")
        if hit:
            return not negated

    return negated

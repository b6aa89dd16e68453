from charfsm.charclass.models import (
    CharClassPattern,
    CharElement,
    CharEscape,
    CharLiteral,
    CharNegate,
    CharRange,
    CharWildcard,
)
from charfsm.core.errors import PatternSyntaxError


def compile_pattern(pattern: str) -> CharClassPattern:
    """Compile a character-class pattern in a single left-to-right pass.

    Raises:
        PatternSyntaxError: if the pattern ends inside an escape sequence.
    """
    if not isinstance(pattern, str):
        raise TypeError(
            f"pattern must be a str, got {type(pattern).__name__}"
        )

    elements: list[CharElement] = []
    previous: str | None = None
    idx = 0
    while idx < len(pattern):
        sym: str | None = pattern[idx]
        if sym == "^":
            elements.append(CharNegate())
        elif sym == ".":
            elements.append(CharWildcard())
        elif sym == "-":
            # The range end is taken raw, so "-^" or "-\" never toggle or
            # escape.
            idx += 1
            sym = pattern[idx] if idx < len(pattern) else None
            elements.append(CharRange(start=previous, end=sym))
        elif sym == "\\":
            idx += 1
            if idx >= len(pattern):
                raise PatternSyntaxError(
                    pattern, idx - 1, "unterminated escape sequence"
                )
            sym = pattern[idx]
            elements.append(CharEscape(code=sym))
        else:
            elements.append(CharLiteral(char=sym))
        previous = sym
        idx += 1

    return CharClassPattern(source=pattern, elements=tuple(elements))

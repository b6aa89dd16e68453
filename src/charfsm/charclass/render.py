from charfsm.charclass.models import (
    CharClassPattern,
    CharElement,
    CharEscape,
    CharLiteral,
    CharNegate,
    CharRange,
    CharWildcard,
)


def render_element(element: CharElement) -> str:
    match element:
        case CharLiteral(char=c):
            return c
        case CharNegate():
            return "^"
        case CharWildcard():
            return "."
        case CharEscape(code=code):
            return f"\\{code}"
        case CharRange(end=hi):
            return f"-{hi or ''}"
        case _:
            raise ValueError(f"Unknown character-class element: {element}")


def render_char_class(pattern: CharClassPattern) -> str:
    """Render compiled elements back into pattern text."""
    return "".join(render_element(e) for e in pattern.elements)


def describe_char_class(pattern: CharClassPattern) -> str:
    parts: list[str] = []
    for element in pattern.elements:
        match element:
            case CharLiteral(char=c):
                parts.append(repr(c))
            case CharNegate():
                parts.append("negate")
            case CharWildcard():
                parts.append("any")
            case CharEscape(code=code):
                parts.append(f"escape {code!r}")
            case CharRange(start=lo, end=hi):
                parts.append(f"range {lo!r}..{hi or 'end'!r}")
    return ", ".join(parts)

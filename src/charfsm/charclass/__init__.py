"""Character classes: a one-symbol pattern language for lexer rules.

Supported elements: literals, ``a-b`` ranges over ``ALPHABET`` order, ``.``
wildcard, ``^`` negation toggle, and ``\\`` escapes (``\\\\ \\^ \\- \\.
\\w \\d \\s \\n \\t \\0``).
"""

from charfsm.charclass.eval import eval_char_class
from charfsm.charclass.models import (
    ALPHABET,
    CharClassPattern,
    CharElement,
    CharEscape,
    CharLiteral,
    CharNegate,
    CharRange,
    CharWildcard,
)
from charfsm.charclass.parse import compile_pattern
from charfsm.charclass.render import describe_char_class, render_char_class
from charfsm.charclass.rule import CharClassRule

__all__ = [
    "ALPHABET",
    "CharClassPattern",
    "CharClassRule",
    "CharElement",
    "CharEscape",
    "CharLiteral",
    "CharNegate",
    "CharRange",
    "CharWildcard",
    "compile_pattern",
    "describe_char_class",
    "eval_char_class",
    "render_char_class",
]

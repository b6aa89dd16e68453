from collections.abc import Callable, Iterable
from typing import Any

from charfsm.charclass.rule import CharClassRule
from charfsm.core.errors import InvalidSymbolError
from charfsm.core.models import Edge, EdgeFlag, Step
from charfsm.core.predicates import LiteralRule
from charfsm.fsm.machine import FSM, StateT


def _check_symbol(symbol: Any) -> str:
    if not isinstance(symbol, str) or len(symbol) != 1:
        raise InvalidSymbolError(
            f"expected a single character, got {symbol!r}"
        )
    return symbol


def _text_rule(
    rule: str | Callable[[str], bool], literal: bool
) -> tuple[Callable[[str], bool], str | None]:
    if callable(rule):
        return rule, None
    if literal:
        return LiteralRule(value=_check_symbol(rule)), rule
    char_class = CharClassRule.from_pattern(rule)
    return char_class, char_class.pattern


class TextFSM(FSM[StateT, str]):
    """FSM over single characters, with character-class pattern rules.

    String rules are compiled as character-class patterns when the edge is
    registered, so a malformed pattern raises ``PatternSyntaxError`` here
    and never at match time. Pass ``literal=True`` to match one character
    exactly, which is how to match ``.``, ``^``, ``-`` or ``\\`` by value.
    """

    def create_edge(  # type: ignore[override]
        self,
        source: StateT,
        destination: StateT,
        rule: str | Callable[[str], bool],
        label: str | None = None,
        flags: EdgeFlag = EdgeFlag.NONE,
        *,
        literal: bool = False,
    ) -> Edge:
        predicate, default_label = _text_rule(rule, literal)
        return super().create_edge(
            source,
            destination,
            predicate,
            default_label if label is None else label,
            flags,
        )

    def create_global_edge(  # type: ignore[override]
        self,
        destination: StateT,
        rule: str | Callable[[str], bool],
        label: str | None = None,
        flags: EdgeFlag = EdgeFlag.NONE,
        *,
        literal: bool = False,
    ) -> Edge:
        predicate, default_label = _text_rule(rule, literal)
        return super().create_global_edge(
            destination,
            predicate,
            default_label if label is None else label,
            flags,
        )

    def process(self, condition: str) -> bool:
        return super().process(_check_symbol(condition))

    def feed(self, text: Iterable[str]) -> list[Step]:
        """Process every character of ``text`` in order."""
        return self.run(text)

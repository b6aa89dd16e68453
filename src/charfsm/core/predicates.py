from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

Rule = Callable[[Any], bool]


class LiteralRule(BaseModel):
    """Accepts exactly one condition value."""

    model_config = ConfigDict(frozen=True)
    kind: Literal["literal"] = "literal"
    value: Any

    def __call__(self, condition: Any) -> bool:
        return condition == self.value


def as_rule(rule: Any) -> Rule:
    """Return ``rule`` unchanged if it is callable, else an equality rule."""
    if callable(rule):
        return rule
    return LiteralRule(value=rule)


def render_rule(rule: Rule) -> str:
    match rule:
        case LiteralRule(value=v):
            return str(v)
        case _:
            pattern = getattr(rule, "pattern", None)
            if isinstance(pattern, str):
                return pattern
            return getattr(rule, "__name__", type(rule).__name__)

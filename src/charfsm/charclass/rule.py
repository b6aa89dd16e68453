from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, PrivateAttr, model_validator

from charfsm.charclass.eval import eval_char_class
from charfsm.charclass.models import CharClassPattern
from charfsm.charclass.parse import compile_pattern


class CharClassRule(BaseModel):
    """Callable rule accepting the characters described by a pattern.

    The pattern is compiled when the rule is created, so
    ``CharClassRule(pattern=...)`` raises ``PatternSyntaxError`` for a
    malformed pattern instead of failing when the rule is first used.
    Going through ``model_validate`` reports the same error as a
    ``ValidationError``.
    """

    model_config = ConfigDict(frozen=True)
    kind: Literal["char_class"] = "char_class"
    pattern: str

    _compiled: CharClassPattern | None = PrivateAttr(default=None)

    def __init__(self, **data: Any) -> None:
        pattern = data.get("pattern")
        if isinstance(pattern, str):
            compile_pattern(pattern)
        super().__init__(**data)

    @model_validator(mode="after")
    def compile_rule(self) -> "CharClassRule":
        self._compiled = compile_pattern(self.pattern)
        return self

    @classmethod
    def from_pattern(cls, pattern: str) -> "CharClassRule":
        return cls(pattern=pattern)

    @property
    def compiled(self) -> CharClassPattern:
        if self._compiled is None:
            self._compiled = compile_pattern(self.pattern)
        return self._compiled

    def __call__(self, symbol: str) -> bool:
        return eval_char_class(self.compiled, symbol)

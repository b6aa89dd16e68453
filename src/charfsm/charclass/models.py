from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# Range order used by "a-b" elements; deliberately not code-point order.
ALPHABET = (
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
)


class CharLiteral(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["literal"] = "literal"
    char: str = Field(min_length=1, max_length=1)


class CharRange(BaseModel):
    """Inclusive span of ``ALPHABET``.

    ``start`` is the pattern character that preceded the ``-`` (``None`` when
    the dash opens the pattern). ``end`` is ``None`` for a trailing dash,
    which extends the span to the end of the alphabet.
    """

    model_config = ConfigDict(frozen=True)
    kind: Literal["range"] = "range"
    start: str | None = None
    end: str | None = None


class CharNegate(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["negate"] = "negate"


class CharWildcard(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["wildcard"] = "wildcard"


class CharEscape(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["escape"] = "escape"
    code: str = Field(min_length=1, max_length=1)


CharElement = Annotated[
    CharLiteral | CharRange | CharNegate | CharWildcard | CharEscape,
    Field(discriminator="kind"),
]


class CharClassPattern(BaseModel):
    """A pattern string compiled into its scan-ordered elements."""

    model_config = ConfigDict(frozen=True)
    source: str = Field(description="Pattern text as written by the user")
    elements: tuple[CharElement, ...] = Field(default=())

    @property
    def final_negation(self) -> bool:
        """Negation in effect after the whole scan.

        This is the result for a symbol no element contains. It is not the
        negation of the whole class: in ``a^b``, ``a`` is still accepted.
        """
        toggles = sum(1 for e in self.elements if isinstance(e, CharNegate))
        return toggles % 2 == 1

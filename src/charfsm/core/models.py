from collections.abc import Callable
from enum import IntFlag
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EdgeFlag(IntFlag):
    NONE = 0
    SILENT = 1 << 0
    GLOBAL = 1 << 1


def has_flag(flags: EdgeFlag, flag: EdgeFlag) -> bool:
    return (flags & flag) == flag


def escape_label(label: str) -> str:
    """Double every backslash so the label prints as the raw rule text."""
    return label.replace("\\", "\\\\")


class Edge(BaseModel):
    """A predicate-guarded transition between two states.

    The label is stored as given; ``FSM`` escapes it with ``escape_label``
    before building the edge. It is only used for display.
    """

    model_config = ConfigDict(frozen=True)

    source: Any = Field(description="State the edge leaves from")
    destination: Any = Field(description="State the edge enters")
    rule: Callable[[Any], bool] = Field(
        description="Predicate deciding whether a condition takes this edge"
    )
    label: str = Field(default="", description="Display label")
    flags: EdgeFlag = EdgeFlag.NONE

    @field_validator("flags", mode="plain")
    @classmethod
    def coerce_flags(cls, v: Any) -> EdgeFlag:
        return EdgeFlag(v)

    @property
    def is_silent(self) -> bool:
        return has_flag(self.flags, EdgeFlag.SILENT)

    @property
    def is_global(self) -> bool:
        return has_flag(self.flags, EdgeFlag.GLOBAL)

    def accepts(self, condition: Any) -> bool:
        return bool(self.rule(condition))


class ProcessResult(NamedTuple):
    # ended_state holds the state *before* the call, not the one reached.
    ended_state: Any
    state_changed: bool


class Step(BaseModel):
    """One processed condition, as recorded by ``FSM.run``."""

    condition: Any = Field(description="Condition fed to the machine")
    previous_state: Any = Field(description="State before processing")
    current_state: Any = Field(description="State after processing")
    observable: bool = Field(
        description="Whether a non-silent transition was taken"
    )

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    Field,
    field_validator,
    model_validator,
)

from charfsm.charclass.parse import compile_pattern


def _reject_bool_state(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("bool is not allowed as a state id")
    return value


StateId = Annotated[int | str, BeforeValidator(_reject_bool_state)]


def _validate_rule(rule: str, literal: bool) -> None:
    if literal:
        if len(rule) != 1:
            raise ValueError(
                f"literal rule must be exactly one character, got {rule!r}"
            )
        return
    compile_pattern(rule)


class NamedState(BaseModel):
    id: StateId
    name: str = ""


class EdgeSpec(BaseModel):
    source: StateId
    destination: StateId
    rule: str = Field(description="Character-class pattern or literal char")
    literal: bool = False
    silent: bool = False

    @model_validator(mode="after")
    def validate_rule(self) -> "EdgeSpec":
        _validate_rule(self.rule, self.literal)
        return self


class GlobalEdgeSpec(BaseModel):
    destination: StateId
    rule: str = Field(description="Character-class pattern or literal char")
    literal: bool = False
    silent: bool = False

    @model_validator(mode="after")
    def validate_rule(self) -> "GlobalEdgeSpec":
        _validate_rule(self.rule, self.literal)
        return self


class TableSpec(BaseModel):
    """Declarative transition table for a ``TextFSM``."""

    default_state: StateId
    start_state: StateId | None = None
    states: list[NamedState] = Field(default_factory=list)
    edges: list[EdgeSpec] = Field(default_factory=list)
    global_edges: list[GlobalEdgeSpec] = Field(default_factory=list)

    @field_validator("states")
    @classmethod
    def unique_state_ids(cls, states: list[NamedState]) -> list[NamedState]:
        ids = [s.id for s in states]
        if len(set(ids)) != len(ids):
            raise ValueError("state ids must be unique")
        return states

import logging
from collections.abc import Hashable, Iterable, Iterator
from typing import Any, Generic, TypeVar

from charfsm.core.models import (
    Edge,
    EdgeFlag,
    ProcessResult,
    Step,
    escape_label,
)
from charfsm.core.predicates import as_rule, render_rule

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT", bound=Hashable)
ConditionT = TypeVar("ConditionT")

_UNSET: Any = object()


class FSM(Generic[StateT, ConditionT]):
    """Finite-state machine driven by one condition at a time.

    Edges leaving a state are tried in registration order, then global edges
    in registration order. The first edge whose rule accepts the condition is
    taken.

    The default state is a pass-through node: when a transition lands on it,
    the same condition is dispatched once more from there. The retry happens
    at most once per ``process`` call.
    """

    def __init__(
        self,
        default_state: StateT,
        start_state: StateT = _UNSET,
    ) -> None:
        if start_state is _UNSET:
            start_state = default_state
        self._default_state = default_state
        self._current_state = start_state
        self._previous_state = start_state

        # dict keys keep registration order for enumeration
        self._possible_states: dict[StateT, None] = {}
        self._edges: dict[StateT, list[Edge]] = {}
        self._global_edges: list[Edge] = []
        self._state_names: dict[StateT, str] = {}

        self._register_state(default_state)
        self._register_state(start_state)

    def _register_state(self, state: StateT) -> None:
        self._possible_states.setdefault(state, None)

    @property
    def default_state(self) -> StateT:
        return self._default_state

    @property
    def current_state(self) -> StateT:
        return self._current_state

    @property
    def previous_state(self) -> StateT:
        return self._previous_state

    @property
    def possible_states(self) -> tuple[StateT, ...]:
        return tuple(self._possible_states)

    @property
    def global_edges(self) -> tuple[Edge, ...]:
        return tuple(self._global_edges)

    def edges_from(self, state: StateT) -> tuple[Edge, ...]:
        return tuple(self._edges.get(state, ()))

    def iter_edges(self) -> Iterator[Edge]:
        """Yield per-state edges grouped by source, in registration order."""
        for edges in self._edges.values():
            yield from edges

    def create_edge(
        self,
        source: StateT,
        destination: StateT,
        rule: Any,
        label: str | None = None,
        flags: EdgeFlag = EdgeFlag.NONE,
    ) -> Edge:
        """Register an edge from ``source`` to ``destination``.

        ``rule`` is either a predicate over conditions or a literal value
        that the condition must equal.
        """
        predicate = as_rule(rule)
        edge = Edge(
            source=source,
            destination=destination,
            rule=predicate,
            label=escape_label(
                render_rule(predicate) if label is None else label
            ),
            flags=EdgeFlag(flags),
        )
        self._edges.setdefault(source, []).append(edge)
        self._register_state(source)
        self._register_state(destination)
        logger.debug(
            "edge %r -> %r registered (label=%r, flags=%s)",
            source, destination, edge.label, edge.flags,
        )
        return edge

    def create_global_edge(
        self,
        destination: StateT,
        rule: Any,
        label: str | None = None,
        flags: EdgeFlag = EdgeFlag.NONE,
    ) -> Edge:
        """Register an edge taken from any state when nothing local matches.

        The edge's ``source`` is recorded as the default state but is never
        consulted when matching.
        """
        predicate = as_rule(rule)
        edge = Edge(
            source=self._default_state,
            destination=destination,
            rule=predicate,
            label=escape_label(
                render_rule(predicate) if label is None else label
            ),
            flags=EdgeFlag(flags) | EdgeFlag.GLOBAL,
        )
        self._global_edges.append(edge)
        self._register_state(destination)
        logger.debug(
            "global edge -> %r registered (label=%r, flags=%s)",
            destination, edge.label, edge.flags,
        )
        return edge

    def set_state_name(self, state: StateT, name: str) -> None:
        self._state_names[state] = name

    def state_name(self, state: StateT) -> str:
        return self._state_names.get(state, "")

    def _find_edge(self, condition: ConditionT) -> Edge | None:
        for edge in self._edges.get(self._current_state, ()):
            if edge.accepts(condition):
                return edge
        for edge in self._global_edges:
            if edge.accepts(condition):
                return edge
        return None

    def _take(self, edge: Edge) -> bool:
        logger.debug(
            "transition %r -> %r via %r%s",
            self._current_state, edge.destination, edge.label,
            " (silent)" if edge.is_silent else "",
        )
        self._current_state = edge.destination
        return not edge.is_silent

    def process(self, condition: ConditionT) -> bool:
        """Apply at most one transition, plus one default-state retry.

        Returns True if any non-silent edge was taken. When no edge accepts
        ``condition`` the current state is left unchanged.
        """
        self._previous_state = self._current_state

        edge = self._find_edge(condition)
        if edge is None:
            return False
        observable = self._take(edge)

        if self._current_state == self._default_state:
            logger.debug(
                "reached default state %r, re-dispatching %r",
                self._default_state, condition,
            )
            edge = self._find_edge(condition)
            if edge is not None:
                observable |= self._take(edge)

        return observable

    def process_detailed(self, condition: ConditionT) -> ProcessResult:
        """Process ``condition`` and report ``(ended_state, state_changed)``.

        Note that ``ended_state`` is the state the machine was in *before*
        this call (``previous_state``), not the state it moved to.
        """
        state_changed = self.process(condition)
        return ProcessResult(
            ended_state=self._previous_state,
            state_changed=state_changed,
        )

    def run(self, conditions: Iterable[ConditionT]) -> list[Step]:
        steps: list[Step] = []
        for condition in conditions:
            observable = self.process(condition)
            steps.append(
                Step(
                    condition=condition,
                    previous_state=self._previous_state,
                    current_state=self._current_state,
                    observable=observable,
                )
            )
        return steps

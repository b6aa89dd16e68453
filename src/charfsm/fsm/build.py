import logging

from charfsm.core.models import EdgeFlag
from charfsm.fsm.models import StateId, TableSpec
from charfsm.fsm.text import TextFSM

logger = logging.getLogger(__name__)


def _flags(silent: bool) -> EdgeFlag:
    return EdgeFlag.SILENT if silent else EdgeFlag.NONE


def build_text_fsm(spec: TableSpec) -> TextFSM[StateId]:
    if spec.start_state is None:
        fsm: TextFSM[StateId] = TextFSM(spec.default_state)
    else:
        fsm = TextFSM(spec.default_state, spec.start_state)

    for state in spec.states:
        if state.name:
            fsm.set_state_name(state.id, state.name)
    for edge in spec.edges:
        fsm.create_edge(
            edge.source,
            edge.destination,
            edge.rule,
            flags=_flags(edge.silent),
            literal=edge.literal,
        )
    for edge in spec.global_edges:
        fsm.create_global_edge(
            edge.destination,
            edge.rule,
            flags=_flags(edge.silent),
            literal=edge.literal,
        )

    logger.debug(
        "built machine: %d states, %d edges, %d global edges",
        len(fsm.possible_states), len(spec.edges), len(spec.global_edges),
    )
    return fsm

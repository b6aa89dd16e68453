"""fsm: generic finite-state machines and the character-driven TextFSM."""

from charfsm.fsm.build import build_text_fsm
from charfsm.fsm.machine import FSM
from charfsm.fsm.models import EdgeSpec, GlobalEdgeSpec, NamedState, TableSpec
from charfsm.fsm.render import dump_graph, render_graph
from charfsm.fsm.text import TextFSM

__all__ = [
    "FSM",
    "EdgeSpec",
    "GlobalEdgeSpec",
    "NamedState",
    "TableSpec",
    "TextFSM",
    "build_text_fsm",
    "dump_graph",
    "render_graph",
]

from typing import Any, TextIO

from charfsm.core.models import Edge
from charfsm.fsm.machine import FSM


def _quote(text: str) -> str:
    return text.replace('"', '\\"')


def _node_id(state: Any) -> str:
    if isinstance(state, int) and not isinstance(state, bool):
        return str(state)
    return f'"{_quote(str(state))}"'


def _node_label(fsm: FSM, state: Any) -> str:
    name = fsm.state_name(state)
    if name:
        return _quote(f"{name} ({state})")
    return _quote(str(state))


def _edge_line(source: Any, edge: Edge) -> str:
    style = "dotted" if edge.is_silent else "solid"
    return (
        f"\t{_node_id(source)} -> {_node_id(edge.destination)} "
        f'[style={style} label="{_quote(edge.label)}"]'
    )


def render_graph(fsm: FSM) -> str:
    """Render the transition table as a Graphviz ``digraph``.

    Silent edges are dotted. Global edges are drawn from every known state.
    """
    lines = ["digraph G {"]
    for state in fsm.possible_states:
        label = _node_label(fsm, state)
        lines.append(f'\t{_node_id(state)} [shape=box label="{label}"]')
    lines.append("")

    for edge in fsm.iter_edges():
        lines.append(_edge_line(edge.source, edge))
    for edge in fsm.global_edges:
        for state in fsm.possible_states:
            lines.append(_edge_line(state, edge))

    lines.append("}")
    return "\n".join(lines)


def dump_graph(fsm: FSM, sink: TextIO) -> None:
    sink.write(render_graph(fsm))
    sink.write("\n")

import logging
from pathlib import Path
from typing import Annotated

import srsly
import typer
from pydantic import ValidationError

from charfsm.charclass.eval import eval_char_class
from charfsm.charclass.parse import compile_pattern
from charfsm.charclass.render import describe_char_class, render_char_class
from charfsm.core.errors import PatternSyntaxError
from charfsm.fsm.build import build_text_fsm
from charfsm.fsm.models import StateId, TableSpec
from charfsm.fsm.render import dump_graph, render_graph
from charfsm.fsm.text import TextFSM

app = typer.Typer(help="Build and run character-driven finite-state machines.")


class _TableError(Exception):
    def __init__(self, *, reason: str):
        self.reason = reason
        super().__init__(reason)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log transitions to stderr"),
    ] = False,
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _load_table(table_file: Path) -> TextFSM[StateId]:
    try:
        raw = srsly.read_json(table_file)
    except ValueError as err:
        raise _TableError(reason=f"malformed JSON ({err})") from err
    try:
        spec = TableSpec.model_validate(raw)
    except ValidationError as err:
        first_error = err.errors(include_url=False)[0]
        loc = ".".join(str(item) for item in first_error["loc"])
        message = first_error["msg"]
        raise _TableError(
            reason=f"invalid table at '{loc}': {message}"
        ) from err
    return build_text_fsm(spec)


def _render_table_error(table_file: Path, error: _TableError) -> str:
    return f"Error: invalid table {table_file}: {error.reason}"


@app.command()
def check(
    pattern: Annotated[str, typer.Argument(help="Character-class pattern")],
) -> None:
    """Validate a pattern and show how it was understood."""
    try:
        compiled = compile_pattern(pattern)
    except PatternSyntaxError as err:
        typer.echo(f"Error: {err}", err=True)
        raise typer.Exit(1) from err

    typer.echo(render_char_class(compiled))
    typer.echo(f"  elements: {describe_char_class(compiled) or '(none)'}")
    typer.echo(
        f"  final negation: {str(compiled.final_negation).lower()}"
    )


@app.command()
def match(
    pattern: Annotated[str, typer.Argument(help="Character-class pattern")],
    text: Annotated[str, typer.Argument(help="Characters to test")],
) -> None:
    """Test every character of TEXT against PATTERN."""
    try:
        compiled = compile_pattern(pattern)
    except PatternSyntaxError as err:
        typer.echo(f"Error: {err}", err=True)
        raise typer.Exit(1) from err

    for sym in text:
        verdict = "match" if eval_char_class(compiled, sym) else "no match"
        typer.echo(f"{sym!r}\t{verdict}")


@app.command()
def run(
    table_file: Annotated[
        Path,
        typer.Argument(
            help="JSON transition table", exists=True, dir_okay=False
        ),
    ],
    text: Annotated[str, typer.Argument(help="Input text to feed")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write JSONL steps to a file"),
    ] = None,
) -> None:
    """Feed TEXT through the machine, one JSON line per character."""
    try:
        fsm = _load_table(table_file)
    except _TableError as err:
        typer.echo(_render_table_error(table_file, err), err=True)
        raise typer.Exit(1) from err

    rows = [step.model_dump() for step in fsm.feed(text)]

    if output is None:
        for row in rows:
            typer.echo(srsly.json_dumps(row))
    else:
        srsly.write_jsonl(output, rows)
        typer.echo(f"Wrote {len(rows)} steps to {output}")


@app.command()
def graph(
    table_file: Annotated[
        Path,
        typer.Argument(
            help="JSON transition table", exists=True, dir_okay=False
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write DOT to a file"),
    ] = None,
) -> None:
    """Export the machine as a Graphviz digraph."""
    try:
        fsm = _load_table(table_file)
    except _TableError as err:
        typer.echo(_render_table_error(table_file, err), err=True)
        raise typer.Exit(1) from err

    if output is None:
        typer.echo(render_graph(fsm))
    else:
        with output.open("w", encoding="utf-8") as handle:
            dump_graph(fsm, handle)
        typer.echo(f"Wrote graph to {output}")

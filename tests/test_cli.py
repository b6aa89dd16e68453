import srsly
from typer.testing import CliRunner

from charfsm.cli import app

runner = CliRunner()


def _write_table(tmp_path):
    table = tmp_path / "table.json"
    srsly.write_json(
        table,
        {
            "default_state": 0,
            "states": [{"id": 0, "name": "start"}],
            "edges": [
                {"source": 0, "destination": 1, "rule": "a-z"},
                {"source": 1, "destination": 1, "rule": "a-z"},
                {"source": 1, "destination": 0, "rule": "^a-z"},
            ],
            "global_edges": [
                {"destination": 2, "rule": "\\d", "silent": True}
            ],
        },
    )
    return table


class TestCheck:
    def test_check_valid_pattern(self) -> None:
        result = runner.invoke(app, ["check", "^a-c"])
        assert result.exit_code == 0
        assert result.stdout.splitlines()[0] == "^a-c"
        assert "final negation: true" in result.stdout

    def test_check_malformed_pattern(self) -> None:
        result = runner.invoke(app, ["check", "ab\\"])
        assert result.exit_code == 1
        assert "Error: unterminated escape sequence" in result.output
        assert "Traceback" not in result.output


class TestMatch:
    def test_match_each_character(self) -> None:
        result = runner.invoke(app, ["match", "a-c", "bz"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["'b'\tmatch", "'z'\tno match"]


class TestRun:
    def test_run_to_stdout(self, tmp_path) -> None:
        table = _write_table(tmp_path)
        result = runner.invoke(app, ["run", str(table), "ab1"])
        assert result.exit_code == 0
        rows = [srsly.json_loads(line) for line in result.stdout.splitlines()]
        assert [r["current_state"] for r in rows] == [1, 1, 2]
        assert [r["observable"] for r in rows] == [True, True, True]
        assert rows[0] == {
            "condition": "a",
            "previous_state": 0,
            "current_state": 1,
            "observable": True,
        }

    def test_run_to_file(self, tmp_path) -> None:
        table = _write_table(tmp_path)
        output = tmp_path / "steps.jsonl"
        result = runner.invoke(
            app, ["run", str(table), "a.", "--output", str(output)]
        )
        assert result.exit_code == 0
        assert "Wrote 2 steps" in result.stdout
        rows = list(srsly.read_jsonl(output))
        assert [r["current_state"] for r in rows] == [1, 0]

    def test_run_invalid_table(self, tmp_path) -> None:
        table = tmp_path / "table.json"
        srsly.write_json(
            table,
            {
                "default_state": 0,
                "edges": [{"source": 0, "destination": 1, "rule": "\\"}],
            },
        )
        result = runner.invoke(app, ["run", str(table), "a"])
        assert result.exit_code == 1
        assert "Error: invalid table" in result.output
        assert "edges.0" in result.output
        assert "Traceback" not in result.output

    def test_run_malformed_json(self, tmp_path) -> None:
        table = tmp_path / "table.json"
        table.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["run", str(table), "a"])
        assert result.exit_code == 1
        assert "malformed JSON" in result.output


class TestGraph:
    def test_graph_to_stdout(self, tmp_path) -> None:
        table = _write_table(tmp_path)
        result = runner.invoke(app, ["graph", str(table)])
        assert result.exit_code == 0
        assert result.stdout.startswith("digraph G {")
        assert '\t0 [shape=box label="start (0)"]' in result.stdout
        assert '\t1 -> 2 [style=dotted label="\\\\d"]' in result.stdout

    def test_graph_to_file(self, tmp_path) -> None:
        table = _write_table(tmp_path)
        output = tmp_path / "graph.dot"
        result = runner.invoke(app, ["graph", str(table), "-o", str(output)])
        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8").rstrip().endswith("}")

    def test_verbose_flag(self, tmp_path) -> None:
        table = _write_table(tmp_path)
        result = runner.invoke(app, ["--verbose", "run", str(table), "a"])
        assert result.exit_code == 0

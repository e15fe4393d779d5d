import io
import logging
from pathlib import Path

import pydot
import pytest

from stagegraph import cli
from stagegraph.lib.io import read_layers

TWO_LAYERS = "0 0 1.0\t0 1 4.0\n0 0 2.0\t1 0 1.0\n"


@pytest.fixture
def layers_file(tmp_path: Path) -> Path:
    path = tmp_path / "layers.txt"
    path.write_text(TWO_LAYERS)
    return path


def test_no_arguments_prints_help_and_exits_zero(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 0
    assert "usage: stagegraph" in capsys.readouterr().out


def test_solve_writes_dot_to_stdout(layers_file: Path, capsys) -> None:
    cli.main(["solve", str(layers_file)])
    out = capsys.readouterr().out

    assert out.startswith("strict digraph")
    [graph] = pydot.graph_from_dot_data(out)
    highlighted = sorted(
        (e.get_source(), e.get_destination())
        for e in graph.get_edge_list()
        if str(e.get("color")).strip('"') == "red"
    )
    assert highlighted == [("node_0_0", "node_1_0"), ("node_1_0", "node_2_0")]


def test_solve_text_format(layers_file: Path, capsys) -> None:
    cli.main(["solve", "--format", "text", str(layers_file)])
    assert capsys.readouterr().out == "weight 3: 0 -> 0 -> 0\n"


def test_solve_reads_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("3 0 7.0\n"))
    cli.main(["solve", "-f", "text"])
    assert capsys.readouterr().out == "weight 7: 3 -> 0\n"


def test_solve_writes_output_file(layers_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "out" / "graph.dot"
    cli.main(["solve", str(layers_file), "--output", str(output)])
    assert output.read_text().startswith("strict digraph")


def test_solve_logs_summary(layers_file: Path, caplog, capsys) -> None:
    with caplog.at_level(logging.INFO, logger="stagegraph"):
        cli.main(["solve", "-f", "text", str(layers_file)])
    assert any(
        "Found 1 optimal path of weight 3 across 2 layers" in r.message
        for r in caplog.records
    )


def test_solve_missing_file_exits_one(tmp_path: Path, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="stagegraph"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["solve", str(tmp_path / "missing.txt")])
    assert exc_info.value.code == 1
    assert any("Input file not found" in r.message for r in caplog.records)


def test_solve_malformed_input_exits_one(tmp_path: Path, caplog) -> None:
    bad = tmp_path / "bad.txt"
    bad.write_text("0 0 1.0\n0 0\n")
    with caplog.at_level(logging.ERROR, logger="stagegraph"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["solve", str(bad)])
    assert exc_info.value.code == 1
    assert any("MalformedLayer" in r.message for r in caplog.records)


def test_solve_empty_input_exits_one(tmp_path: Path, caplog) -> None:
    empty = tmp_path / "empty.txt"
    empty.write_text("\n")
    with caplog.at_level(logging.ERROR, logger="stagegraph"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["solve", str(empty)])
    assert exc_info.value.code == 1
    assert any("NoReachableVertex" in r.message for r in caplog.records)


def test_solve_undecodable_input_exits_one(tmp_path: Path, caplog) -> None:
    binary = tmp_path / "binary.txt"
    binary.write_bytes(b"0 0 1.0\xff\n")
    with caplog.at_level(logging.ERROR, logger="stagegraph"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["solve", str(binary)])
    assert exc_info.value.code == 1
    assert any("not UTF-8 text" in r.message for r in caplog.records)


def test_solve_directory_input_exits_one(tmp_path: Path, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="stagegraph"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["solve", str(tmp_path)])
    assert exc_info.value.code == 1
    assert any("Failed to solve" in r.message for r in caplog.records)


def test_generate_unwritable_output_exits_one(tmp_path: Path, caplog) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    with caplog.at_level(logging.ERROR, logger="stagegraph"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["generate", "-o", str(blocker / "graph.txt")])
    assert exc_info.value.code == 1
    assert any("Failed to write output" in r.message for r in caplog.records)


def test_generate_is_reproducible(capsys) -> None:
    cli.main(["generate", "--seed", "5"])
    first = capsys.readouterr().out
    cli.main(["generate", "--seed", "5"])
    second = capsys.readouterr().out

    assert first == second
    assert list(read_layers(first.splitlines()))


def test_generate_then_solve(tmp_path: Path, capsys) -> None:
    graph = tmp_path / "graph.txt"
    cli.main(["generate", "-s", "11", "-o", str(graph)])
    cli.main(["solve", "-f", "text", str(graph)])

    lines = capsys.readouterr().out.splitlines()
    assert lines
    assert all(line.startswith("weight ") for line in lines)


def test_verbose_and_quiet_switch_levels(layers_file: Path, caplog, capsys) -> None:
    with caplog.at_level(logging.DEBUG, logger="stagegraph"):
        cli.main(["--verbose", "solve", str(layers_file)])
    messages = [r.message for r in caplog.records]
    assert "Debug logging enabled" in messages
    assert "Examining layer 2" in messages

    caplog.clear()
    with caplog.at_level(logging.INFO, logger="stagegraph"):
        cli.main(["--quiet", "solve", str(layers_file)])
    assert not any(r.levelno == logging.INFO for r in caplog.records)

import re

import pytest

from spider_rectgen import Rectangle, to_polygon
from spider_rectgen.cli import main, parse_number, split_argv
from spider_rectgen.wkt import ring

POLYGON = re.compile(
    r"^POLYGON \(\((-?\d+\.\d{6}) (-?\d+\.\d{6}), (-?\d+\.\d{6}) (-?\d+\.\d{6}), "
    r"(-?\d+\.\d{6}) (-?\d+\.\d{6}), (-?\d+\.\d{6}) (-?\d+\.\d{6}), "
    r"(-?\d+\.\d{6}) (-?\d+\.\d{6})\)\)$"
)


def test_to_polygon():
    assert to_polygon(Rectangle(0.0, 0.0, 1.0, 2.0)) == (
        "POLYGON ((0.000000 0.000000, 1.000000 0.000000, 1.000000 2.000000, "
        "0.000000 2.000000, 0.000000 0.000000))"
    )


def test_ring_is_closed():
    pts = ring(Rectangle(0.25, 0.5, 0.5, 0.25))
    assert len(pts) == 5
    assert pts[0] == pts[-1] == (0.25, 0.5)
    assert pts[2] == (0.75, 0.75)


@pytest.mark.parametrize(
    "token, expected",
    [("5", 5.0), ("0.25", 0.25), ("1e-3", 0.001), ("-2", -2.0), (".5", 0.5), ("0.5abc", 0.5), ("abc", 0.0)],
)
def test_parse_number(token, expected):
    assert parse_number(token) == expected


@pytest.mark.parametrize(
    "argv",
    [
        ["uniform", "5", "2", "0.1", "0.1"],
        ["diagonal", "5", "2", "0.1", "0.1", "0.5", "0.1"],
        ["gaussian", "5", "2", "0.1", "0.1"],
        ["sierpinsky", "5", "2", "0.1", "0.1"],
        ["bit", "5", "2", "0.1", "0.1", "0.5", "10"],
        ["parcel", "5", "2", "0.2", "0.1"],
        ["parcel", "5", "2", "0.2", "0.1", "0", "0"],
    ],
)
def test_cli_writes_one_polygon_per_rectangle(argv, capsys):
    assert main(argv + ["--seed", "4"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 5
    for line in lines:
        m = POLYGON.match(line)
        assert m is not None, line
        v = [float(g) for g in m.groups()]
        # closed ring: first vertex repeated
        assert v[:2] == v[8:]


def test_cli_same_seed_same_output(capsys):
    main(["gaussian", "20", "2", "0.05", "0.05", "--seed", "12"])
    first = capsys.readouterr().out
    main(["gaussian", "20", "2", "0.05", "0.05", "--seed", "12"])
    assert capsys.readouterr().out == first


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["uniform"],
        ["uniform", "5", "2", "0.1"],
        ["diagonal", "5", "2", "0.1", "0.1"],
        ["zipf", "5", "2", "0.1", "0.1"],
    ],
)
def test_cli_usage_errors_exit_1(argv, capsys):
    assert main(argv) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Usage:" in captured.err


def test_cli_strict_mode(capsys):
    assert main(["uniform", "5", "3", "0.1", "0.1", "--strict"]) == 1
    assert capsys.readouterr().out == ""
    assert main(["uniform", "5", "3", "0.1", "0.1"]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 5


def test_cli_output_file(tmp_path):
    out = tmp_path / "parcel.wkt"
    assert main(["parcel", "16", "2", "0.2", "0.0", "-o", str(out), "--seed", "1"]) == 0
    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 16
    assert all(line.startswith("POLYGON ((") for line in lines)


@pytest.mark.parametrize(
    "argv",
    [
        ["uniform", "3", "2", "-1e-3", "0.1"],
        ["uniform", "3", "2", "-abc", "0.1"],
        ["diagonal", "3", "2", "0.1", "0.1", "0.5", "-.5e-1"],
    ],
)
def test_cli_values_starting_with_dash_are_positional(argv, capsys):
    assert main(argv + ["--seed", "1"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert all(line.startswith("POLYGON ((") for line in lines)


def test_cli_options_anywhere_on_the_line(capsys):
    main(["uniform", "3", "2", "0.1", "0.1", "--seed", "3"])
    expected = capsys.readouterr().out

    assert main(["uniform", "--seed", "3", "3", "2", "0.1", "0.1"]) == 0
    assert capsys.readouterr().out == expected
    assert main(["--seed=3", "uniform", "3", "2", "-v", "0.1", "0.1"]) == 0
    assert capsys.readouterr().out == expected


def test_split_argv():
    assert split_argv(["uniform", "-o", "out.wkt", "5", "--strict", "2", "--", "-v", "--seed"]) == (
        ["-o", "out.wkt", "--strict"],
        ["uniform", "5", "2", "-v", "--seed"],
    )


@pytest.mark.parametrize("argv", [["uniform", "5", "2", "0.1", "0.1", "--seed", "x"], ["uniform", "5", "2", "0.1", "0.1", "--seed"]])
def test_cli_bad_option_value_exits_1(argv, capsys):
    assert main(argv) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Usage:" in captured.err


@pytest.mark.parametrize(
    "argv",
    [["parcel", "2.5", "2", "0.2", "0.1"], ["uniform", "2.5", "2", "0.1", "0.1"], ["bit", "2.1", "2", "0.1", "0.1", "0.5", "8"]],
)
def test_cli_fractional_cardinality_rounds_up(argv, capsys):
    assert main(argv + ["--seed", "1"]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 3

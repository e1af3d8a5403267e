import runpy
import sys

import pytest

from gray_invert.cli import main

from conftest import build_bmp, gray_rows

USAGE = "usage: gray-invert <input.bmp> <output.bmp>"


def test_success_is_silent(write_bmp, tmp_path, capsys):
    src = write_bmp(build_bmp(gray_rows([[0, 128, 255]])))
    out = tmp_path / "out.bmp"

    assert main([str(src), str(out)]) == 0

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""
    assert out.read_bytes()[54:63] == bytes([255] * 3 + [127] * 3 + [0] * 3)


@pytest.mark.parametrize("argv", [
    [],
    ["only-one.bmp"],
    ["a.bmp", "b.bmp", "c.bmp"],
    ["-h"],
    ["a.bmp", "b.bmp", "-c.bmp"],
])
def test_wrong_arguments_print_usage(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)

    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert USAGE in captured.err


def test_failure_reported_once(write_bmp, tmp_path, capsys):
    src = write_bmp(build_bmp([[(9, 9, 8)]]))
    out = tmp_path / "out.bmp"

    assert main([str(src), str(out)]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    lines = captured.err.splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("Error: image is not grayscale")
    assert not out.exists()


def test_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "nope.bmp"), str(tmp_path / "out.bmp")]) == 1
    assert "Error: cannot open input file" in capsys.readouterr().err


def test_unsupported_format_message(write_bmp, tmp_path, capsys):
    src = write_bmp(build_bmp(gray_rows([[1]]), bpp=16))
    assert main([str(src), str(tmp_path / "out.bmp")]) == 1
    assert "Error: unsupported pixel format" in capsys.readouterr().err


def test_module_entry_point(write_bmp, tmp_path, monkeypatch):
    src = write_bmp(build_bmp(gray_rows([[1]])))
    out = tmp_path / "out.bmp"
    monkeypatch.setattr(sys, "argv", ["gray-invert", str(src), str(out)])

    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module("gray_invert", run_name="__main__")

    assert excinfo.value.code == 0
    assert out.exists()


def test_dash_prefixed_paths_are_files(write_bmp, tmp_path, monkeypatch, capsys):
    write_bmp(build_bmp(gray_rows([[200]])), name="-in.bmp")
    monkeypatch.chdir(tmp_path)

    assert main(["-in.bmp", "-out.bmp"]) == 0

    assert capsys.readouterr().err == ""
    assert (tmp_path / "-out.bmp").read_bytes()[54:57] == bytes([55] * 3)


def test_help_flag_is_treated_as_input_path(tmp_path, capsys):
    assert main(["--help", str(tmp_path / "out.bmp")]) == 1
    assert "Error: cannot open input file --help" in capsys.readouterr().err


def test_huge_declared_size_is_reported(write_bmp, tmp_path, capsys):
    src = write_bmp(build_bmp(gray_rows([[1]]), width=0x7FFFFFFF, height=0x7FFFFFFF))

    assert main([str(src), str(tmp_path / "out.bmp")]) == 1

    lines = capsys.readouterr().err.splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("Error: cannot allocate")

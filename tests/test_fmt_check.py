"""Tests for the formatter check."""

import subprocess
from unittest import mock

from commitcheck.fmt_check import check_fmt


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def test_formatted(tmp_path):
    with mock.patch("subprocess.run", return_value=completed()) as run:
        assert check_fmt(tmp_path)

    run.assert_called_once()
    assert run.call_args.args[0] == ["gofmt", "-l", "."]
    assert run.call_args.kwargs["cwd"] == str(tmp_path)


def test_unformatted_files_listed(tmp_path, capsys):
    with mock.patch("subprocess.run", return_value=completed(stdout="main.go\n")):
        assert not check_fmt(tmp_path)

    assert "main.go" in capsys.readouterr().out


def test_formatter_error(tmp_path):
    with mock.patch("subprocess.run", return_value=completed(returncode=2)):
        assert not check_fmt(tmp_path, command=["black", "--check", "."])


def test_formatter_missing(tmp_path):
    with mock.patch("subprocess.run", side_effect=FileNotFoundError):
        assert not check_fmt(tmp_path)

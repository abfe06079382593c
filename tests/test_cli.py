"""CLI behaviour tests."""

from __future__ import annotations

import json

import pytest

from routedoc.cli import _build_parser, main
from tests._fixtures.repo_builder import APPLICATION_SOURCE, RepoBuilder


def test_cli_accepts_verbose_before_command() -> None:
    args = _build_parser().parse_args(["--verbose", "extract"])
    assert args.verbose is True
    assert args.command == "extract"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    args = _build_parser().parse_args(["extract", "src", "--verbose", "-o", "api.json", "--indent", "0"])
    assert args.verbose is True
    assert args.path == "src"
    assert args.output == "api.json"
    assert args.indent == 0


def test_cli_serve_options() -> None:
    args = _build_parser().parse_args(["serve", "--port", "9000"])
    assert args.command == "serve"
    assert args.port == 9000
    assert args.host == "127.0.0.1"


def test_extract_prints_json(repo_builder: RepoBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    repo_builder.write({"app.js": APPLICATION_SOURCE})

    main(["extract", str(repo_builder.path())])

    payload = json.loads(capsys.readouterr().out)
    assert payload["name"] == "svc"
    assert payload["modules"] == []


def test_extract_writes_output_file(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"app.js": APPLICATION_SOURCE})
    target = repo_builder.path() / "out" / "api.json"

    main(["extract", str(repo_builder.path()), "--output", str(target)])

    assert json.loads(target.read_text(encoding="utf-8"))["version"] == "1.0"


def test_extract_failure_exits_with_message(
    repo_builder: RepoBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_builder.write({"empty.js": "const x = 1;\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["extract", str(repo_builder.path())])

    assert excinfo.value.code == 1
    assert "application definition" in capsys.readouterr().err


def test_cli_accepts_quiet_and_log_file() -> None:
    args = _build_parser().parse_args(["extract", "--quiet", "--log-file", "run.log"])
    assert args.quiet is True
    assert args.verbose is False
    assert args.log_file == "run.log"

"""Tests for the ``step-mappings`` command line."""

from __future__ import annotations

import os
import typing as t

import pytest
from typer.testing import CliRunner

from step_mappings import __version__
from step_mappings.cli import app
from step_mappings.config import ENV_PREFIX

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from pathlib import Path

    from conftest import StepModuleWriter

LOGIN_STEPS = '''
def login(context):
    """@given ("a logged-in user")"""
'''


@pytest.fixture
def runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    """Create a CLI runner isolated from the project's own configuration."""
    monkeypatch.chdir(tmp_path)
    for name in [key for key in os.environ if key.startswith(ENV_PREFIX)]:
        monkeypatch.delenv(name)
    return CliRunner()


def _base_args(tmp_path: Path) -> list[str]:
    return [
        "--output",
        str(tmp_path / "step_mappings.py"),
        "--barrel",
        str(tmp_path / "steps" / "__init__.py"),
        "--steps-root",
        str(tmp_path / "steps"),
    ]


def test_version(runner: CliRunner) -> None:
    """--version prints the package version."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"step-mappings {__version__}" in result.output


def test_generates_from_explicit_files(
    runner: CliRunner, tmp_path: Path, write_step_module: StepModuleWriter
) -> None:
    """Positional step files are scanned and the module is written."""
    login = write_step_module("login.py", LOGIN_STEPS)

    result = runner.invoke(app, [str(login), *_base_args(tmp_path)])

    assert result.exit_code == 0, result.output
    content = (tmp_path / "step_mappings.py").read_text(encoding="utf-8")
    assert '"a logged-in user": step.login,' in content
    assert "from . import steps as step" in content
    assert "from 1 step files" in result.output


def test_discovers_step_files_by_pattern(
    runner: CliRunner, tmp_path: Path, write_step_module: StepModuleWriter
) -> None:
    """Without positional files the configured patterns are expanded."""
    write_step_module("__init__.py", '"""@given ("barrel is skipped")"""\n')
    write_step_module("login.py", LOGIN_STEPS)
    write_step_module(
        "cart/add.py",
        '''
        def add_item():
            """@when ("an item is added")"""
        ''',
    )

    result = runner.invoke(app, [*_base_args(tmp_path), "--pattern", "**/*.py"])

    assert result.exit_code == 0, result.output
    content = (tmp_path / "step_mappings.py").read_text(encoding="utf-8")
    assert '"an item is added": step.add_item,' in content
    assert "barrel is skipped" not in content
    assert "from 2 step files" in result.output


def test_check_reports_stale_and_fresh_modules(
    runner: CliRunner, tmp_path: Path, write_step_module: StepModuleWriter
) -> None:
    """--check exits 1 until the module matches, and never writes."""
    login = write_step_module("login.py", LOGIN_STEPS)
    args = [str(login), *_base_args(tmp_path)]
    output = tmp_path / "step_mappings.py"

    stale = runner.invoke(app, [*args, "--check"])
    assert stale.exit_code == 1
    assert "out of date" in stale.output
    assert not output.exists()

    assert runner.invoke(app, args).exit_code == 0

    fresh = runner.invoke(app, [*args, "--check"])
    assert fresh.exit_code == 0, fresh.output
    assert "up to date" in fresh.output


def test_malformed_annotation_exits_with_error(
    runner: CliRunner, tmp_path: Path, write_step_module: StepModuleWriter
) -> None:
    """Generation errors are reported and produce exit status 1."""
    broken = write_step_module(
        "broken.py",
        '''
        def broken():
            """@given a sentence without quotes"""
        ''',
    )

    result = runner.invoke(app, [str(broken), *_base_args(tmp_path)])

    assert result.exit_code == 1
    assert "Malformed @given annotation" in result.output
    assert "broken" in result.output


def test_reads_pyproject_configuration(
    runner: CliRunner, tmp_path: Path, write_step_module: StepModuleWriter
) -> None:
    """Settings can come from ``[tool.step-mappings]``."""
    write_step_module("login.py", LOGIN_STEPS)
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(
        "[tool.step-mappings]\n"
        'mapping-file = "generated/step_mappings.py"\n'
        'steps-barrel-file = "steps/__init__.py"\n'
        'steps-root = "steps"\n'
        "quote-mark = \"'\"\n",
        encoding="utf-8",
    )

    result = runner.invoke(app, ["--config", str(pyproject)])

    assert result.exit_code == 0, result.output
    content = (tmp_path / "generated" / "step_mappings.py").read_text(encoding="utf-8")
    assert "from .. import steps as step" in content
    assert "'a logged-in user': step.login," in content

"""Global test configuration and shared fixtures."""

from __future__ import annotations

import textwrap
import typing as t

import pytest

from step_mappings.config import GeneratorConfig

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from pathlib import Path

pytest_plugins = ("step_mappings.pytest_plugin", "pytester")


class StepModuleWriter(t.Protocol):
    """Callable writing a step-definition module for a test."""

    def __call__(self, name: str, source: str) -> Path: ...


@pytest.fixture
def steps_dir(tmp_path: Path) -> Path:
    """Return the ``steps`` package directory inside ``tmp_path``."""
    directory = tmp_path / "steps"
    directory.mkdir()
    return directory


@pytest.fixture
def write_step_module(steps_dir: Path) -> StepModuleWriter:
    """Return a helper writing dedented module source into ``steps_dir``."""

    def _write(name: str, source: str) -> Path:
        path = steps_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source).lstrip(), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def generator_config(tmp_path: Path, steps_dir: Path) -> GeneratorConfig:
    """Settings generating ``step_mappings.py`` beside a ``steps`` package."""
    return GeneratorConfig(
        steps_barrel_file=steps_dir / "__init__.py",
        mapping_file=tmp_path / "step_mappings.py",
        steps_root=steps_dir,
        generator_file=tmp_path / "tools" / "generator.py",
    )

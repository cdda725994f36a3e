"""Unit tests for generator configuration loading."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from step_mappings.config import (
    DEFAULT_QUOTE_MARK,
    DEFAULT_TAB,
    GENERATOR_FILE,
    GeneratorConfig,
    load_config,
)
from step_mappings.errors import ConfigurationError


def _write_pyproject(directory: Path, body: str) -> Path:
    path = directory / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_defaults() -> None:
    """Defaults describe a ``tests/steps`` package and four-space indentation."""
    config = GeneratorConfig()
    assert config.tab == DEFAULT_TAB
    assert config.quote_mark == DEFAULT_QUOTE_MARK
    assert config.generator_file == GENERATOR_FILE
    assert config.generator_file.name == "generator.py"
    assert config.steps_barrel_file == Path("tests/steps/__init__.py")
    assert config.mapping_file == Path("tests/step_mappings.py")
    assert config.step_patterns == ("**/*.py",)
    assert config.barrel_module is None


@pytest.mark.parametrize(
    ("kwargs", "error_msg"),
    [
        ({"quote_mark": "`"}, "quote_mark must be one of"),
        ({"tab": ""}, "tab must be"),
        ({"tab": "--"}, "tab must be"),
        ({"step_patterns": ()}, "step_patterns must contain"),
        ({"barrel_module": "tests/steps"}, "barrel_module must be a dotted"),
    ],
)
def test_invalid_settings_rejected(kwargs: dict[str, object], error_msg: str) -> None:
    """Unusable settings fail fast."""
    with pytest.raises(ConfigurationError, match=error_msg):
        GeneratorConfig(**kwargs)  # type: ignore[arg-type]


def test_string_paths_are_coerced() -> None:
    """Path fields accept strings."""
    config = GeneratorConfig(mapping_file="out/map.py")  # type: ignore[arg-type]
    assert config.mapping_file == Path("out/map.py")


def test_replace_skips_none() -> None:
    """``replace`` ignores ``None`` so optional CLI values can be passed through."""
    config = GeneratorConfig().replace(tab="  ", quote_mark=None)
    assert config.tab == "  "
    assert config.quote_mark == DEFAULT_QUOTE_MARK


def test_load_config_reads_pyproject_table(tmp_path: Path) -> None:
    """``[tool.step-mappings]`` values are read and resolved against its directory."""
    pyproject = _write_pyproject(
        tmp_path,
        """
        [tool.step-mappings]
        mapping-file = "features/step_mappings.py"
        steps-barrel-file = "features/steps/__init__.py"
        steps-root = "features/steps"
        quote-mark = "'"
        tab-width = 2
        step-patterns = ["*_steps.py"]
        """,
    )

    config = load_config(pyproject, environ={})

    assert config.mapping_file == (tmp_path / "features/step_mappings.py").resolve()
    assert config.steps_barrel_file == (
        tmp_path / "features/steps/__init__.py"
    ).resolve()
    assert config.steps_root == (tmp_path / "features/steps").resolve()
    assert config.quote_mark == "'"
    assert config.tab == "  "
    assert config.step_patterns == ("*_steps.py",)


def test_environment_overrides_pyproject(tmp_path: Path) -> None:
    """``STEP_MAPPINGS_*`` variables win over the pyproject table."""
    pyproject = _write_pyproject(
        tmp_path,
        """
        [tool.step-mappings]
        mapping-file = "a.py"
        """,
    )

    config = load_config(
        pyproject,
        environ={
            "STEP_MAPPINGS_MAPPING_FILE": "b.py",
            "STEP_MAPPINGS_STEP_PATTERNS": "one/*.py, two/*.py",
            "STEP_MAPPINGS_UNKNOWN": "ignored",
            "OTHER": "x",
        },
    )

    assert config.mapping_file == (tmp_path / "b.py").resolve()
    assert config.step_patterns == ("one/*.py", "two/*.py")


def test_explicit_overrides_win(tmp_path: Path) -> None:
    """Keyword overrides beat the environment; ``None`` values are skipped."""
    pyproject = _write_pyproject(tmp_path, "[project]\nname = 'demo'\n")

    config = load_config(
        pyproject,
        environ={"STEP_MAPPINGS_MAPPING_FILE": "env.py"},
        mapping_file="explicit.py",
        barrel_module=None,
    )

    assert config.mapping_file == (tmp_path / "explicit.py").resolve()
    assert config.barrel_module is None


def test_unknown_pyproject_key_rejected(tmp_path: Path) -> None:
    """Typos in the pyproject table are reported."""
    pyproject = _write_pyproject(
        tmp_path,
        """
        [tool.step-mappings]
        mapping-fiel = "x.py"
        """,
    )

    with pytest.raises(ConfigurationError, match="mapping-fiel"):
        load_config(pyproject, environ={})


def test_invalid_tab_width_rejected(tmp_path: Path) -> None:
    """``tab-width`` must be a positive integer."""
    with pytest.raises(ConfigurationError, match="tab_width"):
        load_config(None, environ={"STEP_MAPPINGS_TAB_WIDTH": "wide"})


def test_missing_pyproject_rejected(tmp_path: Path) -> None:
    """An explicitly named configuration file must exist."""
    with pytest.raises(ConfigurationError, match="not found"):
        load_config(tmp_path / "missing.toml", environ={})


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    """Broken TOML surfaces as a configuration error."""
    pyproject = _write_pyproject(tmp_path, "[tool.step-mappings\n")

    with pytest.raises(ConfigurationError, match="Invalid TOML"):
        load_config(pyproject, environ={})


def test_without_pyproject_paths_resolve_against_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """With no pyproject, relative paths are anchored at the working directory."""
    monkeypatch.chdir(tmp_path)

    config = load_config(environ={})

    assert config.mapping_file == (tmp_path / "tests/step_mappings.py").resolve()


def test_root_replaces_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """An explicit root is searched instead of the working directory."""
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    _write_pyproject(elsewhere, '[tool.step-mappings]\nmapping-file = "leaked.py"\n')
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(elsewhere)

    config = load_config(environ={}, root=project)

    assert config.mapping_file == (project / "tests/step_mappings.py").resolve()


def test_root_pyproject_is_read(tmp_path: Path) -> None:
    """A ``pyproject.toml`` inside the root is picked up automatically."""
    _write_pyproject(tmp_path, '[tool.step-mappings]\nmapping-file = "out.py"\n')

    config = load_config(environ={}, root=tmp_path)

    assert config.mapping_file == (tmp_path / "out.py").resolve()

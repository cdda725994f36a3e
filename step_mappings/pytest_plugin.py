"""Pytest plugin that regenerates the step mappings module before collection."""

from __future__ import annotations

import logging
import typing as t
from pathlib import Path

import pytest

from .collector import find_step_files
from .config import GeneratorConfig, load_config
from .errors import StepMappingsError
from .generator import generate

logger = logging.getLogger(__name__)

_PATH_INI_OPTIONS: t.Final[dict[str, str]] = {
    "step_mappings_output": "mapping_file",
    "step_mappings_barrel": "steps_barrel_file",
    "step_mappings_steps_root": "steps_root",
}


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("step_mappings")
    group.addoption(
        "--step-mappings-generate",
        action="store_true",
        dest="step_mappings_generate",
        default=None,
        help=(
            "Regenerate the step mappings module before collecting tests. "
            "Overrides the pytest.ini setting."
        ),
    )
    group.addoption(
        "--no-step-mappings-generate",
        action="store_false",
        dest="step_mappings_generate",
        default=None,
        help="Skip step mapping generation. Overrides the pytest.ini setting.",
    )
    parser.addini(
        "step_mappings_generate",
        "Regenerate the step mappings module at the start of each session.",
        type="bool",
        default=False,
    )
    parser.addini(
        "step_mappings_output",
        "Generated step mappings module, relative to the rootdir.",
        default="",
    )
    parser.addini(
        "step_mappings_barrel",
        "Module re-exporting every step function, relative to the rootdir.",
        default="",
    )
    parser.addini(
        "step_mappings_barrel_module",
        "Dotted name to import the barrel by instead of a relative import.",
        default="",
    )
    parser.addini(
        "step_mappings_steps_root",
        "Directory searched for step modules, relative to the rootdir.",
        default="",
    )
    parser.addini(
        "step_mappings_steps",
        "Glob patterns selecting step modules below the steps root.",
        type="linelist",
        default=[],
    )


def _generation_enabled(config: pytest.Config) -> bool:
    """Return whether generation should run; the CLI flag beats the ini value."""
    cli_value = config.getoption("step_mappings_generate")
    if cli_value is not None:
        return bool(cli_value)
    return bool(config.getini("step_mappings_generate"))


def plugin_config(config: pytest.Config) -> GeneratorConfig:
    """Build generator settings from the rootdir's pyproject and the ini options."""
    root = Path(config.rootpath)
    overrides: dict[str, t.Any] = {}
    for option, field in _PATH_INI_OPTIONS.items():
        value = config.getini(option)
        if value:
            overrides[field] = root / value
    barrel_module = config.getini("step_mappings_barrel_module")
    if barrel_module:
        overrides["barrel_module"] = barrel_module
    patterns = config.getini("step_mappings_steps")
    if patterns:
        overrides["step_patterns"] = tuple(patterns)

    return load_config(root=root, **overrides)


def pytest_sessionstart(session: pytest.Session) -> None:
    """Write the step mappings module so test modules can import it."""
    if not _generation_enabled(session.config):
        return
    try:
        settings = plugin_config(session.config)
        files = find_step_files(
            settings.steps_root,
            settings.step_patterns,
            exclude=(settings.steps_barrel_file, settings.mapping_file),
        )
        generate(config=settings).from_files(files)
    except StepMappingsError as exc:
        msg = f"step mappings generation failed: {exc}"
        raise pytest.UsageError(msg) from exc
    logger.debug("Regenerated %s from %d step files", settings.mapping_file, len(files))


@pytest.fixture
def step_mappings_config(request: pytest.FixtureRequest) -> GeneratorConfig:
    """Provide the generator settings resolved for this test session."""
    return plugin_config(request.config)

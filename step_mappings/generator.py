"""Generate the module mapping step sentences to step functions.

Generation is a two-phase builder::

    generate("tests/step_mappings.py", config=config).from_files(step_files)

The first phase creates the output directory and replaces the target with a
placeholder comment; the second assembles the full module and swaps it into
place. Both writes are atomic renames.
"""

from __future__ import annotations

import logging
import os
import typing as t
from pathlib import Path

from . import _path_utils as path_utils
from .collector import DefaultNameCounter, collect
from .config import GeneratorConfig
from .errors import ConfigurationError
from .exports import discover_exported_functions
from .fs_retry import write_text_atomic
from .models import StepKind
from .renderer import BARREL_ALIAS, INTERFACE_NAME, render

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .exports import ExportDiscovery

logger = logging.getLogger(__name__)

PLACEHOLDER: t.Final[str] = "# importing steps and creating given/when/then mappings..."


def _relative_to_mapping_file(
    target: Path, config: GeneratorConfig, *, what: str
) -> str:
    try:
        relative = path_utils.relative_path(target, config.mapping_file.parent)
    except ValueError as exc:
        # Windows: no relative path exists between different drives.
        msg = f"Cannot express {what} {target} relative to {config.mapping_file}"
        raise ConfigurationError(msg) from exc
    return path_utils.slash(relative)


def banner_line(config: GeneratorConfig) -> str:
    """Return the comment naming the module that produced the file."""
    source = _relative_to_mapping_file(
        config.generator_file, config, what="generator file"
    )
    return f"# this file was auto-generated by '{source}'"


def barrel_import_line(config: GeneratorConfig) -> str:
    """Return the statement importing the step barrel as ``step``.

    The barrel is addressed relative to the mapping file, so
    ``tests/steps/__init__.py`` seen from ``tests/step_mappings.py`` becomes
    ``from . import steps as step``.
    """
    if config.barrel_module is not None:
        return f"import {config.barrel_module} as {BARREL_ALIAS}"

    relative = _relative_to_mapping_file(
        config.steps_barrel_file, config, what="steps barrel"
    )
    parts = path_utils.strip_extension(relative).split("/")
    if parts[-1] == "__init__":
        parts.pop()

    levels = 1
    while parts and parts[0] in {".", ".."}:
        if parts.pop(0) == "..":
            levels += 1

    if not parts or not all(part.isidentifier() for part in parts):
        msg = (
            f"Steps barrel {config.steps_barrel_file} cannot be imported relative "
            f"to {config.mapping_file}; set barrel_module instead"
        )
        raise ConfigurationError(msg)

    package = "." * levels + ".".join(parts[:-1])
    return f"from {package} import {parts[-1]} as {BARREL_ALIAS}"


def header_lines(config: GeneratorConfig) -> list[str]:
    """Return the banner, imports and shared interface of the generated module."""
    return [
        banner_line(config),
        "# ruff: noqa: E501",
        "from __future__ import annotations",
        "",
        "import typing as t",
        "",
        barrel_import_line(config),
        "",
        f"{INTERFACE_NAME}: t.TypeAlias = t.Mapping[str, t.Callable[..., t.Any]]",
    ]


def build_lines(
    step_files: t.Iterable[os.PathLike[str] | str],
    config: GeneratorConfig | None = None,
    *,
    discover: ExportDiscovery = discover_exported_functions,
) -> list[str]:
    """Return every line of the generated module for *step_files*."""
    settings = config or GeneratorConfig()
    files = list(step_files)
    counter = DefaultNameCounter()

    lines = header_lines(settings)
    for kind in StepKind:
        mappings = collect(files, kind, counter=counter, discover=discover)
        lines.append("")
        lines.extend(render(mappings, kind, settings))
    lines.append("")
    return lines


def render_mapping_file(
    step_files: t.Iterable[os.PathLike[str] | str],
    config: GeneratorConfig | None = None,
    *,
    discover: ExportDiscovery = discover_exported_functions,
) -> str:
    """Return the generated module text, joined with the platform line ending."""
    return os.linesep.join(build_lines(step_files, config, discover=discover))


class MappingFileBuilder:
    """Second phase of :func:`generate`: assemble and write the module."""

    def __init__(
        self,
        output_path: Path,
        config: GeneratorConfig,
        *,
        discover: ExportDiscovery = discover_exported_functions,
    ) -> None:
        self._output_path = output_path
        self._config = config
        self._discover = discover

    @property
    def output_path(self) -> Path:
        """The file this builder writes."""
        return self._output_path

    def from_files(self, step_files: t.Iterable[os.PathLike[str] | str]) -> None:
        """Generate mappings for *step_files* and replace the placeholder."""
        files = list(step_files)
        content = render_mapping_file(files, self._config, discover=self._discover)
        write_text_atomic(self._output_path, content)
        logger.info(
            "Generated step mappings for %d files in %s",
            len(files),
            self._output_path,
        )


def generate(
    output_path: os.PathLike[str] | str | None = None,
    *,
    config: GeneratorConfig | None = None,
    discover: ExportDiscovery = discover_exported_functions,
) -> MappingFileBuilder:
    """Prepare *output_path* for generation and return the builder.

    Parameters
    ----------
    output_path:
        Destination module. Defaults to ``config.mapping_file``.
    config:
        Generator settings. Defaults to :class:`GeneratorConfig`.
    discover:
        Export discovery used for every step file.
    """
    settings = config or GeneratorConfig()
    target = Path(output_path) if output_path is not None else settings.mapping_file
    path_utils.ensure_directory_structure_exists(target)
    write_text_atomic(target, PLACEHOLDER)
    logger.debug("Wrote placeholder to %s", target)
    return MappingFileBuilder(target, settings, discover=discover)


__all__ = [
    "PLACEHOLDER",
    "MappingFileBuilder",
    "banner_line",
    "barrel_import_line",
    "build_lines",
    "generate",
    "header_lines",
    "render_mapping_file",
]

"""Settings consumed by the step mapping generator.

Values are layered, later sources winning: built-in defaults, the
``[tool.step-mappings]`` table of ``pyproject.toml``, ``STEP_MAPPINGS_*``
environment variables, and finally explicit keyword overrides.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import tomllib
import typing as t
from pathlib import Path

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

GENERATOR_FILE = Path(__file__).with_name("generator.py").resolve()

PYPROJECT_TABLE: t.Final[str] = "step-mappings"
ENV_PREFIX: t.Final[str] = "STEP_MAPPINGS_"

DEFAULT_TAB: t.Final[str] = "    "
DEFAULT_QUOTE_MARK: t.Final[str] = '"'
DEFAULT_STEPS_ROOT: t.Final[str] = "tests/steps"
DEFAULT_BARREL_FILE: t.Final[str] = "tests/steps/__init__.py"
DEFAULT_MAPPING_FILE: t.Final[str] = "tests/step_mappings.py"
DEFAULT_STEP_PATTERNS: t.Final[tuple[str, ...]] = ("**/*.py",)

_QUOTE_MARKS: t.Final[frozenset[str]] = frozenset({'"', "'"})
_PATH_FIELDS: t.Final[tuple[str, ...]] = (
    "generator_file",
    "steps_barrel_file",
    "mapping_file",
    "steps_root",
)


@dc.dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """
    Settings for a generation run.

    Attributes
    ----------
    tab : str
        Indentation unit used inside generated literals.
    quote_mark : str
        Quote character wrapped around sentences (``"`` or ``'``).
    generator_file : Path
        Source of the generator, named in the generated banner.
    steps_barrel_file : Path
        Module re-exporting every step function; imported as ``step``.
    mapping_file : Path
        Canonical location of the generated module.
    steps_root : Path
        Directory that step patterns are expanded against.
    step_patterns : tuple[str, ...]
        Glob patterns selecting step-definition modules below ``steps_root``.
    barrel_module : str | None
        Dotted module name to import instead of a relative barrel import.

    Raises
    ------
    ConfigurationError
        If the quote mark or tab is unusable.
    """

    tab: str = DEFAULT_TAB
    quote_mark: str = DEFAULT_QUOTE_MARK
    generator_file: Path = GENERATOR_FILE
    steps_barrel_file: Path = Path(DEFAULT_BARREL_FILE)
    mapping_file: Path = Path(DEFAULT_MAPPING_FILE)
    steps_root: Path = Path(DEFAULT_STEPS_ROOT)
    step_patterns: tuple[str, ...] = DEFAULT_STEP_PATTERNS
    barrel_module: str | None = None

    def __post_init__(self) -> None:
        """Validate and normalise field values."""
        if self.quote_mark not in _QUOTE_MARKS:
            msg = f"quote_mark must be one of {sorted(_QUOTE_MARKS)}, got {self.quote_mark!r}"
            raise ConfigurationError(msg)
        if not self.tab or self.tab.strip(" \t"):
            msg = f"tab must be a non-empty run of spaces or tabs, got {self.tab!r}"
            raise ConfigurationError(msg)
        if not self.step_patterns:
            msg = "step_patterns must contain at least one glob"
            raise ConfigurationError(msg)
        if self.barrel_module is not None and not _is_dotted_name(self.barrel_module):
            msg = f"barrel_module must be a dotted module name, got {self.barrel_module!r}"
            raise ConfigurationError(msg)
        for name in _PATH_FIELDS:
            object.__setattr__(self, name, Path(getattr(self, name)))
        object.__setattr__(self, "step_patterns", tuple(self.step_patterns))

    def replace(self, **changes: t.Any) -> GeneratorConfig:
        """Return a copy with *changes* applied, skipping ``None`` values."""
        return dc.replace(self, **{k: v for k, v in changes.items() if v is not None})

    def resolved(self, base: os.PathLike[str] | str) -> GeneratorConfig:
        """Return a copy whose relative paths are anchored at *base*."""
        root = Path(base)
        return dc.replace(
            self,
            **{
                name: (root / getattr(self, name)).resolve()
                for name in _PATH_FIELDS
            },
        )


def _is_dotted_name(value: str) -> bool:
    return all(part.isidentifier() for part in value.split("."))


def _tab_from_width(value: t.Any) -> str:
    try:
        width = int(value)
    except (TypeError, ValueError) as exc:
        msg = f"tab_width must be an integer, got {value!r}"
        raise ConfigurationError(msg) from exc
    if width < 1:
        msg = "tab_width must be >= 1"
        raise ConfigurationError(msg)
    return " " * width


def _normalise_settings(
    raw: t.Mapping[str, t.Any], *, strict: bool = True
) -> dict[str, t.Any]:
    """Map user-facing keys (``kebab-case``, ``tab-width``) onto config fields."""
    fields = {field.name for field in dc.fields(GeneratorConfig)}
    settings: dict[str, t.Any] = {}
    for key, value in raw.items():
        name = key.replace("-", "_").lower()
        if name == "tab_width":
            settings["tab"] = _tab_from_width(value)
            continue
        if name == "step_patterns" and isinstance(value, str):
            value = tuple(part.strip() for part in value.split(",") if part.strip())
        if name not in fields:
            if not strict:
                logger.warning("Ignoring unknown setting %s%s", ENV_PREFIX, key)
                continue
            msg = f"Unknown step-mappings setting: {key!r}"
            raise ConfigurationError(msg)
        settings[name] = value
    return settings


def _read_pyproject(path: Path) -> dict[str, t.Any]:
    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigurationError(msg) from exc
    table = document.get("tool", {}).get(PYPROJECT_TABLE, {})
    if not isinstance(table, dict):
        msg = f"[tool.{PYPROJECT_TABLE}] in {path} must be a table"
        raise ConfigurationError(msg)
    return table


def _read_environ(environ: t.Mapping[str, str]) -> dict[str, str]:
    return {
        key[len(ENV_PREFIX) :]: value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX) and value
    }


def load_config(
    pyproject: os.PathLike[str] | str | None = None,
    *,
    environ: t.Mapping[str, str] | None = None,
    root: os.PathLike[str] | str | None = None,
    **overrides: t.Any,
) -> GeneratorConfig:
    """
    Build a :class:`GeneratorConfig` from layered sources.

    Parameters
    ----------
    pyproject : PathLike | str | None
        ``pyproject.toml`` to read. When omitted, ``pyproject.toml`` in
        *root* is used if present.
    environ : Mapping[str, str] | None
        Environment to read ``STEP_MAPPINGS_*`` overrides from. Defaults to
        :data:`os.environ`.
    root : PathLike | str | None
        Project directory searched for ``pyproject.toml`` and used to resolve
        relative paths when no pyproject is found. Defaults to the current
        directory.
    **overrides
        Explicit settings; ``None`` values are ignored.

    Returns
    -------
    GeneratorConfig
        Settings with relative paths resolved against the pyproject's
        directory, or *root* without one.
    """
    base_dir = Path.cwd() if root is None else Path(root)
    if pyproject is None:
        candidate = base_dir / "pyproject.toml"
        pyproject_path = candidate if candidate.is_file() else None
    else:
        pyproject_path = Path(pyproject)
        if not pyproject_path.is_file():
            msg = f"Configuration file not found: {pyproject_path}"
            raise ConfigurationError(msg)

    settings: dict[str, t.Any] = {}
    if pyproject_path is not None:
        settings.update(_normalise_settings(_read_pyproject(pyproject_path)))
    env_settings = _read_environ(os.environ if environ is None else environ)
    settings.update(_normalise_settings(env_settings, strict=False))
    settings.update(
        _normalise_settings({k: v for k, v in overrides.items() if v is not None})
    )

    base = pyproject_path.parent if pyproject_path is not None else base_dir
    return GeneratorConfig(**settings).resolved(base)


__all__ = [
    "DEFAULT_BARREL_FILE",
    "DEFAULT_MAPPING_FILE",
    "DEFAULT_QUOTE_MARK",
    "DEFAULT_STEPS_ROOT",
    "DEFAULT_STEP_PATTERNS",
    "DEFAULT_TAB",
    "ENV_PREFIX",
    "GENERATOR_FILE",
    "GeneratorConfig",
    "load_config",
]

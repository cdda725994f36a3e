"""Collect step sentences and the functions implementing them."""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import typing as t
from pathlib import Path

from . import _path_utils as path_utils
from .annotations import iter_sentences
from .errors import MalformedAnnotationError
from .exports import discover_exported_functions
from .models import StepKind, StepMapping

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .exports import ExportDiscovery

logger = logging.getLogger(__name__)

DEFAULT_STEP_PREFIX: t.Final[str] = "default_step"


@dc.dataclass(slots=True)
class DefaultNameCounter:
    """Hand out ``default_step<N>`` names for files without a usable base name.

    One counter covers a single generation run; every step kind and file in
    the run draws from it so synthetic names never repeat.
    """

    prefix: str = DEFAULT_STEP_PREFIX
    _next: int = dc.field(default=0, init=False)

    def next_name(self) -> str:
        """Return the next unused synthetic file name."""
        name = f"{self.prefix}{self._next}"
        self._next += 1
        return name

    @property
    def issued(self) -> int:
        """Number of names handed out so far."""
        return self._next


def default_export_name(
    path: os.PathLike[str] | str, counter: DefaultNameCounter
) -> str:
    """Return the name the barrel uses for the default export of *path*."""
    name = path_utils.file_name(path) or counter.next_name()
    return path_utils.func_name_from_file_name(name)


def collect(
    step_files: t.Iterable[os.PathLike[str] | str],
    step_kind: StepKind | str,
    *,
    counter: DefaultNameCounter | None = None,
    discover: ExportDiscovery = discover_exported_functions,
) -> list[StepMapping]:
    """Return the mappings declared for *step_kind* across *step_files*.

    Mappings are returned in file, function and comment order; sorting is left
    to the renderer. Duplicated sentences are kept.

    Parameters
    ----------
    step_files:
        Step-definition modules to scan, in the order given.
    step_kind:
        The annotation tag to collect.
    counter:
        Source of synthetic names for files without a base name. A fresh
        counter is used when omitted.
    discover:
        Callable returning the exported functions of a file.
    """
    kind = StepKind.coerce(step_kind)
    names = counter if counter is not None else DefaultNameCounter()
    results: list[StepMapping] = []
    for path in step_files:
        fallback = default_export_name(path, names)
        for func_info in discover(path):
            step_func = fallback if func_info.is_default_export else func_info.function_name
            try:
                sentences = list(iter_sentences(func_info.doc_comments, kind))
            except MalformedAnnotationError as exc:
                raise exc.located(path, func_info.function_name) from exc
            results.extend(StepMapping(sentence, step_func) for sentence in sentences)

    logger.debug("Collected %d %s step mappings", len(results), kind.value)
    return results


def _is_excluded(path: Path, excluded: set[str]) -> bool:
    if "__pycache__" in path.parts:
        return True
    return path_utils.normalize_path(path) in excluded


def find_step_files(
    root: os.PathLike[str] | str,
    patterns: t.Iterable[str],
    *,
    exclude: t.Iterable[os.PathLike[str] | str] = (),
) -> list[Path]:
    """Expand glob *patterns* below *root* into a sorted list of modules.

    Only ``.py`` files are returned; ``__pycache__`` directories and anything
    listed in *exclude* (typically the barrel and the generated file) are
    skipped.
    """
    base = Path(root)
    excluded = {path_utils.normalize_path(item) for item in exclude}
    found: dict[str, Path] = {}
    for pattern in patterns:
        for candidate in base.glob(pattern):
            if candidate.suffix != ".py" or not candidate.is_file():
                continue
            if _is_excluded(candidate, excluded):
                continue
            found.setdefault(path_utils.normalize_path(candidate), candidate)
    return sorted(found.values(), key=lambda item: path_utils.slash(os.fspath(item)))


__all__ = [
    "DEFAULT_STEP_PREFIX",
    "DefaultNameCounter",
    "collect",
    "default_export_name",
    "find_step_files",
]

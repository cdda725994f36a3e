"""Discover the exported functions of a step module without importing it."""

from __future__ import annotations

import ast
import logging
import os
import typing as t
from pathlib import Path

from .annotations import split_doc_comments
from .errors import StepFileError
from .models import DEFAULT_EXPORT_NAME, ExportedFunctionInfo

logger = logging.getLogger(__name__)

_FunctionNode = ast.FunctionDef | ast.AsyncFunctionDef


def _literal_all(tree: ast.Module) -> set[str] | None:
    """Return the names in a literal ``__all__`` assignment, if any."""
    names: set[str] | None = None
    for node in tree.body:
        if isinstance(node, ast.Assign):
            targets = node.targets
            value = node.value
        elif isinstance(node, ast.AnnAssign) and node.value is not None:
            targets = [node.target]
            value = node.value
        else:
            continue

        if not any(isinstance(tgt, ast.Name) and tgt.id == "__all__" for tgt in targets):
            continue
        if not isinstance(value, ast.List | ast.Tuple):
            # A computed ``__all__`` cannot be evaluated statically.
            return None
        names = {
            elt.value
            for elt in value.elts
            if isinstance(elt, ast.Constant) and isinstance(elt.value, str)
        }
    return names


def _is_exported(name: str, public: set[str] | None) -> bool:
    if name == DEFAULT_EXPORT_NAME:
        return True
    if public is not None:
        return name in public
    return not name.startswith("_")


def _parse_module(path: Path) -> ast.Module:
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise StepFileError(path, str(exc)) from exc
    try:
        return ast.parse(source, filename=os.fspath(path))
    except SyntaxError as exc:
        raise StepFileError(path, f"syntax error on line {exc.lineno}") from exc


def exported_functions_in(tree: ast.Module) -> list[ExportedFunctionInfo]:
    """Return descriptors for the exported module-level functions of *tree*."""
    public = _literal_all(tree)
    functions: list[ExportedFunctionInfo] = []
    for node in tree.body:
        if not isinstance(node, _FunctionNode):
            continue
        if not _is_exported(node.name, public):
            continue
        functions.append(
            ExportedFunctionInfo(
                function_name=node.name,
                doc_comments=split_doc_comments(ast.get_docstring(node)),
            )
        )
    return functions


def discover_exported_functions(
    path: os.PathLike[str] | str,
) -> list[ExportedFunctionInfo]:
    """Parse the module at *path* and describe its exported functions.

    Raises
    ------
    StepFileError
        If the module cannot be read or is not valid Python.
    """
    module_path = Path(path)
    functions = exported_functions_in(_parse_module(module_path))
    logger.debug("Found %d exported functions in %s", len(functions), module_path)
    return functions


ExportDiscovery = t.Callable[[t.Any], t.Sequence[ExportedFunctionInfo]]

__all__ = [
    "ExportDiscovery",
    "discover_exported_functions",
    "exported_functions_in",
]

"""Shared helpers for naming files and normalizing paths across platforms."""

from __future__ import annotations

import keyword
import ntpath
import os
import re
from pathlib import Path

IS_WINDOWS = os.name == "nt"

_NON_IDENTIFIER = re.compile(r"\W+")


def normalize_path_string(path: str) -> str:
    """Return a normalized string path using platform rules."""
    module = ntpath if IS_WINDOWS else os.path
    normalized = module.normpath(path)
    if IS_WINDOWS:
        normalized = module.normcase(normalized)
    return normalized


def normalize_path(path: os.PathLike[str] | str) -> str:
    """Normalize *path* regardless of whether it is a string or Path."""
    return normalize_path_string(os.path.abspath(os.fspath(path)))


def file_name(path: os.PathLike[str] | str) -> str:
    """Return the final component of *path*, or ``""`` when there is none."""
    return os.path.basename(os.fspath(path))


def strip_extension(path: os.PathLike[str] | str) -> str:
    """Return *path* without its final suffix."""
    return os.path.splitext(os.fspath(path))[0]


def relative_path(
    target: os.PathLike[str] | str, start: os.PathLike[str] | str
) -> str:
    """Return *target* expressed relative to the directory *start*."""
    return os.path.relpath(os.fspath(target), os.fspath(start))


def slash(path: str) -> str:
    """Return *path* with Windows separators replaced by forward slashes."""
    return path.replace("\\", "/")


def func_name_from_file_name(name: str) -> str:
    """Derive an identifier for the default export of the file called *name*.

    ``login-user.py`` becomes ``login_user``; names starting with a digit gain a
    leading underscore and keywords a trailing one.
    """
    identifier = _NON_IDENTIFIER.sub("_", strip_extension(name)).strip("_")
    if not identifier:
        identifier = "step"
    if identifier[0].isdigit():
        identifier = f"_{identifier}"
    if keyword.iskeyword(identifier):
        identifier = f"{identifier}_"
    return identifier


def ensure_directory_structure_exists(path: os.PathLike[str] | str) -> Path:
    """Create every missing parent directory of the file *path*."""
    parent = Path(path).parent
    parent.mkdir(parents=True, exist_ok=True)
    return parent

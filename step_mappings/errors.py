"""Exception hierarchy for step mapping generation."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from pathlib import Path


class StepMappingsError(Exception):
    """Base class for errors raised while generating step mappings."""


class ConfigurationError(StepMappingsError, ValueError):
    """Raised when generator settings are missing or inconsistent."""


class StepFileError(StepMappingsError):
    """Raised when a step-definition module cannot be read or parsed.

    Parameters
    ----------
    path : Path | str
        The module that failed to load.
    reason : str
        Short description of the underlying failure.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"Cannot read step file {path}: {reason}")
        self.path = path
        self.reason = reason


class MalformedAnnotationError(StepMappingsError, ValueError):
    """Raised when a docstring carries a step marker without a quoted sentence.

    Attributes
    ----------
    comment : str
        The offending comment block.
    step_kind : str
        The marker that was found, without the leading ``@``.
    path : Path | str | None
        Step file the comment came from, once known.
    function_name : str | None
        Function the comment is attached to, once known.
    """

    def __init__(
        self,
        comment: str,
        step_kind: str,
        *,
        path: Path | str | None = None,
        function_name: str | None = None,
    ) -> None:
        self.comment = comment
        self.step_kind = step_kind
        self.path = path
        self.function_name = function_name
        super().__init__(self._describe())

    def _describe(self) -> str:
        location = ""
        if self.path is not None:
            location = f" in {self.path}"
            if self.function_name is not None:
                location += f" ({self.function_name})"
        return (
            f"Malformed @{self.step_kind} annotation{location}: expected "
            f'@{self.step_kind} ("sentence"), got {self.comment.strip()!r}'
        )

    def located(
        self, path: Path | str, function_name: str
    ) -> MalformedAnnotationError:
        """Return a copy of this error that names its source location."""
        return MalformedAnnotationError(
            self.comment,
            self.step_kind,
            path=path,
            function_name=function_name,
        )


__all__ = [
    "ConfigurationError",
    "MalformedAnnotationError",
    "StepFileError",
    "StepMappingsError",
]

"""Value types shared by the extraction, collection and rendering stages."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as t

DEFAULT_EXPORT_NAME: t.Final[str] = "default"


class StepKind(enum.Enum):
    """BDD phrase category a step sentence belongs to.

    Declaration order is the order in which blocks are generated.
    """

    GIVEN = "given"
    WHEN = "when"
    THEN = "then"
    BUT = "but"

    @property
    def marker(self) -> str:
        """Docstring tag announcing a sentence of this kind, e.g. ``@given``."""
        return f"@{self.value}"

    @classmethod
    def coerce(cls, value: StepKind | str) -> StepKind:
        """Return *value* as a :class:`StepKind`, accepting its string form."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(kind.value for kind in cls)
            msg = f"Unknown step kind {value!r}; expected one of: {choices}"
            raise ValueError(msg) from None


@dc.dataclass(frozen=True, slots=True)
class StepMapping:
    """A step sentence paired with the name of the function implementing it."""

    step_sentence: str
    step_func: str


@dc.dataclass(frozen=True, slots=True)
class ExportedFunctionInfo:
    """An exported function of a step module and its documentation blocks."""

    function_name: str
    doc_comments: tuple[str, ...] = ()

    @property
    def is_default_export(self) -> bool:
        """Return ``True`` when the barrel re-exports this under the file's name."""
        return self.function_name == DEFAULT_EXPORT_NAME


__all__ = [
    "DEFAULT_EXPORT_NAME",
    "ExportedFunctionInfo",
    "StepKind",
    "StepMapping",
]

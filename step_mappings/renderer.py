"""Render collected step mappings as Python source lines."""

from __future__ import annotations

import functools
import typing as t

import pyuca

from ._text_utils import surround, upper_case_first_letter
from .config import GeneratorConfig
from .models import StepKind, StepMapping

BARREL_ALIAS: t.Final[str] = "step"
INTERFACE_NAME: t.Final[str] = "StepMappings"


def mappings_name(step_kind: StepKind | str) -> str:
    """Return the constant name for *step_kind*, e.g. ``given_step_mappings``."""
    return f"{StepKind.coerce(step_kind).value}_step_mappings"


def type_name(step_kind: StepKind | str) -> str:
    """Return the key type alias for *step_kind*, e.g. ``GivenStep``."""
    return f"{upper_case_first_letter(StepKind.coerce(step_kind).value)}Step"


@functools.cache
def _collator() -> pyuca.Collator:
    # Loading the collation table is slow; one instance serves every run.
    return pyuca.Collator()


def sort_mappings(mappings: t.Iterable[StepMapping]) -> list[StepMapping]:
    """Order *mappings* by sentence using Unicode root collation.

    Case and accents only break ties, so ``apple`` sorts before ``Banana``
    whatever the process locale. The sort is stable, so duplicated sentences
    keep their collection order.
    """
    collator = _collator()
    return sorted(mappings, key=lambda mapping: collator.sort_key(mapping.step_sentence))


def render(
    mappings: t.Iterable[StepMapping],
    step_kind: StepKind | str,
    config: GeneratorConfig | None = None,
) -> list[str]:
    """Return the constant and key type declarations for one step kind.

    An empty mapping renders as an empty dict whose key type is
    ``t.NoReturn``, so no sentence type-checks against it.
    """
    settings = config or GeneratorConfig()
    const = mappings_name(step_kind)
    alias = type_name(step_kind)
    ordered = sort_mappings(mappings)

    if not ordered:
        return [
            f"{const}: {INTERFACE_NAME} = {{}}",
            f"{alias}: t.TypeAlias = t.NoReturn",
        ]

    quoted = [
        (surround(mapping.step_sentence, with_=settings.quote_mark), mapping.step_func)
        for mapping in ordered
    ]
    lines = [f"{const}: {INTERFACE_NAME} = {{"]
    lines.extend(
        f"{settings.tab}{sentence}: {BARREL_ALIAS}.{func}," for sentence, func in quoted
    )
    lines.append("}")
    lines.append(f"{alias} = t.Literal[")
    lines.extend(f"{settings.tab}{sentence}," for sentence, _ in quoted)
    lines.append("]")
    return lines


__all__ = [
    "BARREL_ALIAS",
    "INTERFACE_NAME",
    "mappings_name",
    "render",
    "sort_mappings",
    "type_name",
]

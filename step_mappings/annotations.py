"""Read ``@given ("sentence")`` style annotations out of docstrings.

A step function announces the sentences it implements in its docstring::

    def login(context):
        '''Sign the default user in.

        @given ("a logged-in user")
        @when ("the user signs in")
        '''

Each line starting with a tag opens a new comment block, and each block is
matched independently against the requested step kind.
"""

from __future__ import annotations

import functools
import re
import typing as t

from .errors import MalformedAnnotationError
from .models import StepKind

_TAG_LINE = re.compile(r"^\s*@\w")


@functools.cache
def _marker_pattern(kind: StepKind) -> re.Pattern[str]:
    return re.compile(rf"{kind.marker}\b")


@functools.cache
def _annotation_pattern(kind: StepKind) -> re.Pattern[str]:
    return re.compile(
        rf"{kind.marker}\b\s*\(\s*(?P<quote>[\"'])(?P<sentence>[^\r\n]*?)(?P=quote)\s*\)"
    )


def has_marker(comment: str, step_kind: StepKind | str) -> bool:
    """Return ``True`` if *comment* mentions the tag for *step_kind*."""
    kind = StepKind.coerce(step_kind)
    return _marker_pattern(kind).search(comment) is not None


def extract_sentence(comment: str, step_kind: StepKind | str) -> str | None:
    """Return the sentence declared for *step_kind* in *comment*.

    Parameters
    ----------
    comment : str
        A single documentation block.
    step_kind : StepKind | str
        The tag to look for.

    Returns
    -------
    str | None
        The quoted sentence of the first matching annotation, or ``None`` when
        the block does not mention the tag at all. Sentence content is not
        validated, so empty sentences are returned as ``""``.

    Raises
    ------
    MalformedAnnotationError
        When the tag is present but not followed by ``("sentence")``, or
        the sentence wraps onto another line.
    """
    kind = StepKind.coerce(step_kind)
    if not has_marker(comment, kind):
        return None

    match = _annotation_pattern(kind).search(comment)
    if match is None:
        raise MalformedAnnotationError(comment, kind.value)
    return match.group("sentence")


def split_doc_comments(docstring: str | None) -> tuple[str, ...]:
    """Split *docstring* into blocks that each start at a tag line."""
    if not docstring:
        return ()

    blocks: list[list[str]] = [[]]
    for line in docstring.splitlines():
        if _TAG_LINE.match(line) and blocks[-1]:
            blocks.append([])
        blocks[-1].append(line)

    return tuple(
        text for block in blocks if (text := "\n".join(block).strip())
    )


def iter_sentences(
    comments: t.Iterable[str], step_kind: StepKind | str
) -> t.Iterator[str]:
    """Yield one sentence per comment in *comments* that declares *step_kind*."""
    for comment in comments:
        sentence = extract_sentence(comment, step_kind)
        if sentence is not None:
            yield sentence


__all__ = [
    "extract_sentence",
    "has_marker",
    "iter_sentences",
    "split_doc_comments",
]

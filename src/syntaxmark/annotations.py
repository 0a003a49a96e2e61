"""Annotation records and the store the renderer reads them from.

Annotations are appended in scan order.  Within a line, overlapping rules
that complete on the same byte can append a smaller column after a larger
one (``#if`` then ``if``).  Lookup treats the store as an ordered walk from
the head: the first annotation not positioned before the query decides the
answer.  An annotation whose position does not exceed every earlier
position is therefore never returned, which keeps a keyword nested inside a
longer match from being highlighted twice.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True)
class Annotation:
    """Markup to insert immediately before the byte at (line, column)."""

    line: int
    column: int
    markup: str

    @property
    def position(self) -> tuple[int, int]:
        return (self.line, self.column)


class AnnotationStore:
    """Append-only annotation list with an O(1) position index."""

    def __init__(self) -> None:
        self._annotations: list[Annotation] = []
        self._index: dict[tuple[int, int], str] = {}
        self._high_water: tuple[int, int] | None = None

    def append(self, annotation: Annotation) -> None:
        self._annotations.append(annotation)
        position = annotation.position
        if self._high_water is None or position > self._high_water:
            self._index[position] = annotation.markup
            self._high_water = position

    def lookup(self, line: int, column: int) -> str | None:
        """Return the markup recorded at exactly (line, column), if any."""
        return self._index.get((line, column))

    def clear(self) -> None:
        self._annotations.clear()
        self._index.clear()
        self._high_water = None

    def describe(self) -> list[tuple[str, str, str]]:
        """Rows of (line, column, markup) in append order, zero-padded."""
        return [
            (f"{a.line:06d}", f"{a.column:06d}", a.markup) for a in self._annotations
        ]

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self._annotations)

    def __len__(self) -> int:
        return len(self._annotations)

"""Pattern rules and the catalog the match engine walks.

A rule is a literal byte pattern plus the markup to wrap around it.
Single-ended rules (keywords, directives) highlight exactly the matched
bytes; double-ended rules (comments, literals) open a region on their
opening pattern and close it on a separate closing pattern.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

CLOSE_FONT = "</font>"

PREPROCESSOR_MARKUP = "<font color=purple>"
CONTROL_MARKUP = "<font color=#c0c000>"
TYPE_MARKUP = "<font color=#00ee00>"
COMMENT_MARKUP = "<font color=#0000ff>"
LITERAL_MARKUP = "<font color=red>"

PREPROCESSOR_DIRECTIVES = (
    b"#if",
    b"#elif",
    b"#else",
    b"#endif",
    b"#include",
    b"#define",
)
CONTROL_KEYWORDS = (
    b"while",
    b"for",
    b"switch",
    b"case",
    b"break",
    b"continue",
    b"do",
    b"if",
    b"else",
    b"default",
    b"sizeof",
    b"return",
)
TYPE_KEYWORDS = (
    b"void",
    b"unsigned",
    b"signed",
    b"int",
    b"const",
    b"char",
    b"static",
    b"long",
    b"float",
    b"double",
    b"short",
    b"struct",
    b"enum",
)


class RuleKind(StrEnum):
    """Whether a match closes immediately or opens a region."""

    SINGLE_ENDED = "single"
    DOUBLE_ENDED = "double"


@dataclass
class PatternRule:
    """A literal pattern with its markup and live match state.

    Attributes:
        open_pattern: Bytes that start a match.
        close_pattern: Bytes that end a region (double-ended rules only).
        kind: Single- or double-ended.
        open_markup: Emitted before the first byte of the opening match.
        close_markup: Emitted after the last byte of the match or region.
        cursor: Bytes of the currently tracked pattern matched so far.
        active: True while a double-ended rule is inside its region.
    """

    open_pattern: bytes
    close_pattern: bytes | None
    kind: RuleKind
    open_markup: str
    close_markup: str
    cursor: int = 0
    active: bool = False

    def __post_init__(self) -> None:
        if not self.open_pattern:
            msg = "open_pattern must not be empty"
            raise ValueError(msg)
        if self.kind is RuleKind.DOUBLE_ENDED and not self.close_pattern:
            msg = f"double-ended rule {self.open_pattern!r} needs a close_pattern"
            raise ValueError(msg)
        if self.kind is RuleKind.SINGLE_ENDED and self.close_pattern is not None:
            msg = f"single-ended rule {self.open_pattern!r} cannot have a close_pattern"
            raise ValueError(msg)

    def reset(self) -> None:
        self.cursor = 0
        self.active = False


def _display_pattern(pattern: bytes | None) -> str:
    if pattern is None:
        return "(none)"
    if pattern == b"\n":
        return "nl"
    return pattern.decode("latin-1")


class RuleCatalog:
    """Ordered collection of pattern rules; registration order is scan order."""

    def __init__(self) -> None:
        self._rules: list[PatternRule] = []

    def register(
        self,
        open_pattern: bytes,
        close_pattern: bytes | None,
        kind: RuleKind,
        open_markup: str,
        close_markup: str,
    ) -> PatternRule:
        """Append a new idle rule and return it."""
        rule = PatternRule(
            open_pattern=open_pattern,
            close_pattern=close_pattern,
            kind=kind,
            open_markup=open_markup,
            close_markup=close_markup,
        )
        self._rules.append(rule)
        return rule

    def reset(self) -> None:
        """Return every rule to its idle state."""
        for rule in self._rules:
            rule.reset()

    def describe(self) -> list[tuple[str, str, str, str]]:
        """Rows of (open pattern, close pattern, open markup, close markup)."""
        return [
            (
                _display_pattern(rule.open_pattern),
                _display_pattern(rule.close_pattern),
                rule.open_markup,
                rule.close_markup,
            )
            for rule in self._rules
        ]

    def __iter__(self) -> Iterator[PatternRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


def default_catalog() -> RuleCatalog:
    """Build a fresh catalog of the standard C highlighting rules."""
    catalog = RuleCatalog()

    single = RuleKind.SINGLE_ENDED
    double = RuleKind.DOUBLE_ENDED

    for directive in PREPROCESSOR_DIRECTIVES:
        catalog.register(directive, None, single, PREPROCESSOR_MARKUP, CLOSE_FONT)
    for keyword in CONTROL_KEYWORDS:
        catalog.register(keyword, None, single, CONTROL_MARKUP, CLOSE_FONT)
    for keyword in TYPE_KEYWORDS:
        catalog.register(keyword, None, single, TYPE_MARKUP, CLOSE_FONT)

    # comments
    catalog.register(b"/*", b"*/", double, COMMENT_MARKUP, CLOSE_FONT)
    catalog.register(b"//", b"\n", double, COMMENT_MARKUP, CLOSE_FONT)

    # string and character literals
    catalog.register(b'"', b'"', double, LITERAL_MARKUP, CLOSE_FONT)
    catalog.register(b"'", b"'", double, LITERAL_MARKUP, CLOSE_FONT)

    # line continuation and the null pointer constant
    catalog.register(b"\\", None, single, LITERAL_MARKUP, CLOSE_FONT)
    catalog.register(b"NULL", None, single, LITERAL_MARKUP, CLOSE_FONT)

    return catalog

"""Single-pass, byte-at-a-time multi-pattern match engine.

Every rule keeps its own cursor into the pattern it is currently tracking
and all cursors advance together, one byte at a time.  While a double-ended
rule is inside its region every other rule is frozen at cursor zero, so at
most one region is ever open.

Matching never backtracks: on a mismatch a rule's cursor drops to zero and
the mismatching byte is not retried against the start of the pattern.  For
a pattern like ``if`` the input ``iif`` therefore does not match.

Annotation columns are offset by two from the zero-based scan column: the
renderer counts columns from one and inserts markup *before* the byte at a
column, so a match ending at scan column ``c`` closes at ``c + 2`` and one
of length ``n`` opens at ``c + 2 - n``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from syntaxmark.annotations import Annotation, AnnotationStore
from syntaxmark.rules import RuleKind
from syntaxmark.source import iter_bytes

if TYPE_CHECKING:
    from typing import BinaryIO

    from syntaxmark.rules import PatternRule, RuleCatalog
    from syntaxmark.source import ScanPosition

logger = logging.getLogger(__name__)

# Renderer columns are one-based and markup precedes the byte it is keyed on
_COLUMN_OFFSET = 2


class MatchEngine:
    """Runs a rule catalog over a byte stream and records annotations."""

    def __init__(
        self, catalog: RuleCatalog, store: AnnotationStore | None = None
    ) -> None:
        self.catalog = catalog
        self.store = store if store is not None else AnnotationStore()

    @property
    def region_active(self) -> bool:
        """Whether any double-ended rule is currently inside its region."""
        return any(rule.active for rule in self.catalog)

    def process(self, byte: int, position: ScanPosition) -> None:
        """Advance every rule's cursor over one byte.

        Region state is re-checked before each rule, so a region opened by
        an earlier rule freezes the later ones on this same byte, and a
        region closed by an earlier rule lets the later ones try to open.
        """
        region_active = self.region_active
        for rule in self.catalog:
            if region_active:
                if rule.active:
                    if self._advance_close(rule, byte, position):
                        region_active = False
                else:
                    rule.cursor = 0
            elif self._advance_open(rule, byte, position):
                region_active = True

    def _advance_close(
        self, rule: PatternRule, byte: int, position: ScanPosition
    ) -> bool:
        """Track the close pattern; return True when the region ends."""
        close_pattern = rule.close_pattern
        assert close_pattern is not None, "active rule without a close pattern"

        if close_pattern[rule.cursor] != byte:
            rule.cursor = 0
            return False

        rule.cursor += 1
        if rule.cursor < len(close_pattern):
            return False

        rule.cursor = 0
        rule.active = False
        end = position.column + _COLUMN_OFFSET
        self._record(position.line, end, rule.close_markup)
        logger.debug(
            "Closed %r region at line %d column %d",
            rule.open_pattern,
            position.line,
            position.column,
        )
        return True

    def _advance_open(
        self, rule: PatternRule, byte: int, position: ScanPosition
    ) -> bool:
        """Track the open pattern; return True when a region starts."""
        open_pattern = rule.open_pattern

        if open_pattern[rule.cursor] != byte:
            rule.cursor = 0
            return False

        rule.cursor += 1
        if rule.cursor < len(open_pattern):
            return False

        rule.cursor = 0
        start = position.column + _COLUMN_OFFSET - len(open_pattern)
        self._record(position.line, start, rule.open_markup)
        logger.debug(
            "Matched %r at line %d column %d",
            open_pattern,
            position.line,
            start,
        )

        if rule.kind is RuleKind.SINGLE_ENDED:
            end = position.column + _COLUMN_OFFSET
            self._record(position.line, end, rule.close_markup)
            return False

        rule.active = True
        return True

    def _record(self, line: int, column: int, markup: str) -> None:
        self.store.append(Annotation(line=line, column=column, markup=markup))

    def scan(self, stream: BinaryIO) -> AnnotationStore:
        """Run the whole stream through :meth:`process` from the start."""
        count = 0
        for byte, position in iter_bytes(stream):
            self.process(byte, position)
            count += 1
        logger.info(
            "Scanned %d bytes with %d rules: %d annotations%s",
            count,
            len(self.catalog),
            len(self.store),
            " (region left open)" if self.region_active else "",
        )
        return self.store

    def reset(self) -> None:
        """Idle every rule and drop recorded annotations."""
        self.catalog.reset()
        self.store.clear()

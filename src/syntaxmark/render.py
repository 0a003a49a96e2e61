"""Second pass: echo the source bytes with recorded markup woven in.

The renderer re-reads the stream from the start and, for each byte, emits
any annotation keyed on that byte's position before echoing the byte
itself.  Columns here are one-based: the column counter is bumped before
the lookup.  Source bytes are written unescaped.

Line starts check ``region_left_open``, a snapshot of whether the scan
*ended* inside a region, not whether a region is open at that line.  A
file whose last region never closed therefore gets the dangling close
markup at the start of every line, and any other file never does.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from syntaxmark.config import RenderConfig
from syntaxmark.source import LINE_FEED

if TYPE_CHECKING:
    from typing import BinaryIO

    from syntaxmark.annotations import AnnotationStore

logger = logging.getLogger(__name__)

POSTAMBLE = "</pre>\n</html>\n"


def _encode(text: str) -> bytes:
    return text.encode("utf-8")


class Renderer:
    """Writes the HTML document for one annotated source stream."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config if config is not None else RenderConfig()

    def preamble(self, name: str) -> str:
        return f'<html>\n<a name="{name}"></a><h3>{name}</h3>\n<pre>\n'

    def line_label(self, name: str, line: int) -> str:
        """Anchor plus zero-padded line number for the start of *line*."""
        width = self.config.line_number_width
        color = self.config.line_number_color
        number = f"{line:0{width}d}"
        return f'<a name="{name}{line}"></a><font color={color}>{number}</font> '

    def render(
        self,
        stream: BinaryIO,
        store: AnnotationStore,
        sink: BinaryIO,
        *,
        name: str,
        region_left_open: bool = False,
    ) -> None:
        """Render *stream* to *sink* using the annotations in *store*.

        Args:
            stream: Seekable binary source; rewound before reading.
            store: Annotations from a completed scan of the same stream.
            sink: Binary output stream.
            name: Identifying file name used for the heading and anchors.
            region_left_open: Whether the scan ended inside a region.
        """
        dangling = _encode(self.config.dangling_close_markup)
        sink.write(_encode(self.preamble(name)))

        stream.seek(0)
        line = 0
        column = 0
        new_line = True
        emitted = 0

        while chunk := stream.read(1):
            column += 1
            if new_line:
                if region_left_open:
                    sink.write(dangling)
                sink.write(_encode(self.line_label(name, line)))
                new_line = False

            markup = store.lookup(line, column)
            if markup is not None:
                sink.write(_encode(markup))
                emitted += 1

            if chunk[0] == LINE_FEED:
                new_line = True
                line += 1
                column = 0

            sink.write(chunk)

        sink.write(_encode(POSTAMBLE))
        sink.flush()
        logger.info(
            "Rendered %s: %d lines, %d of %d annotations emitted",
            name,
            line + (0 if new_line else 1),
            emitted,
            len(store),
        )

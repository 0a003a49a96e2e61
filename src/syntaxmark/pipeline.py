"""Two-pass highlighting: scan the stream, then render it."""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING

from syntaxmark.engine import MatchEngine
from syntaxmark.render import Renderer
from syntaxmark.rules import default_catalog

if TYPE_CHECKING:
    from typing import BinaryIO

    from syntaxmark.annotations import AnnotationStore
    from syntaxmark.config import RenderConfig
    from syntaxmark.rules import RuleCatalog

logger = logging.getLogger(__name__)


def scan(stream: BinaryIO, catalog: RuleCatalog | None = None) -> MatchEngine:
    """Run pass one and return the engine holding its end state and store."""
    engine = MatchEngine(catalog if catalog is not None else default_catalog())
    engine.scan(stream)
    return engine


def highlight(
    stream: BinaryIO,
    sink: BinaryIO,
    *,
    name: str,
    catalog: RuleCatalog | None = None,
    render_config: RenderConfig | None = None,
) -> AnnotationStore:
    """Highlight *stream* into *sink* as an HTML document.

    A fresh default catalog is built when none is given.  A caller-supplied
    catalog is reset first so state from an earlier render cannot leak in.

    Returns:
        The annotation store produced by the scan.
    """
    logger.debug("Highlighting %s", name)
    if catalog is not None:
        catalog.reset()
    engine = scan(stream, catalog)
    Renderer(render_config).render(
        stream,
        engine.store,
        sink,
        name=name,
        region_left_open=engine.region_active,
    )
    return engine.store


def highlight_bytes(
    data: bytes,
    *,
    name: str = "",
    catalog: RuleCatalog | None = None,
    render_config: RenderConfig | None = None,
) -> bytes:
    """Highlight an in-memory source and return the HTML bytes."""
    sink = io.BytesIO()
    highlight(
        io.BytesIO(data),
        sink,
        name=name,
        catalog=catalog,
        render_config=render_config,
    )
    return sink.getvalue()

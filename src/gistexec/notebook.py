from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional

import nbformat

from .config import DEFAULT_KERNEL
from .markdown import MarkdownRenderer, executable_block_html, prose_block_html
from .model import Cell, Notebook, RenderedBlock, Schema, as_source

logger = logging.getLogger(__name__)


def detect_schema(d: Dict) -> Schema:
    """Legacy notebooks keep their cells under a `worksheets` list."""
    if isinstance(d.get("worksheets"), list) and "cells" not in d:
        return Schema.LEGACY
    return Schema.CURRENT


def _raw_cells(d: Dict, schema: Schema) -> List:
    if schema is Schema.LEGACY:
        worksheets = d.get("worksheets") or []
        first = worksheets[0] if worksheets else {}
        cells = first.get("cells") if isinstance(first, dict) else None
    else:
        cells = d.get("cells")
    return cells if isinstance(cells, list) else []


def _cell_from_dict(raw: object, schema: Schema) -> Cell:
    if not isinstance(raw, dict):
        return Cell(cell_type=None, source=None)
    src = raw.get("source")
    if schema is Schema.LEGACY and "input" in raw:
        # v3 code cells store their text under `input`
        src = raw.get("input")
    cell_type = raw.get("cell_type")
    return Cell(
        cell_type=str(cell_type) if cell_type else None,
        source=as_source(src),
    )


def normalize_notebook(d: Dict, *, path: Optional[str] = None) -> Notebook:
    """Reduce a current or legacy notebook dict to a flat list of cells.

    Cell count and order are kept exactly; cells that can't be rendered
    are kept as empty Cells and dropped later, at render time.
    """
    if not isinstance(d, dict):
        raise ValueError("Notebook JSON must be an object")
    schema = detect_schema(d)
    cells = [_cell_from_dict(c, schema) for c in _raw_cells(d, schema)]
    meta = d.get("metadata")
    return Notebook(
        cells=cells,
        metadata=meta if isinstance(meta, dict) else {},
        schema=schema,
        path=path,
    )


def load_notebook(text: str, *, path: Optional[str] = None) -> Notebook:
    # No nbformat validation: legacy and partly broken notebooks still render.
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Notebook JSON must be an object")
    return normalize_notebook(nbformat.from_dict(data), path=path)


def render_cell(cell: Cell, renderer: MarkdownRenderer) -> Optional[RenderedBlock]:
    if not cell.cell_type or cell.source is None:
        logger.debug("No cell source and/or cell_type: %r", cell)
        return None
    text = cell.text()
    if cell.cell_type == "code":
        return RenderedBlock(html=executable_block_html(text), executable=True, code=[text])
    if cell.cell_type == "markdown":
        return RenderedBlock(html=prose_block_html(renderer.render(text)))
    logger.info("Skipping unrecognized cell type %r", cell.cell_type)
    return None


def resolve_kernel(nb: Notebook, default: str = DEFAULT_KERNEL) -> str:
    return nb.kernel_name() or default


def render_notebook(nb: Notebook, page, *, default_kernel: str = DEFAULT_KERNEL) -> str:
    """Append one block per renderable cell, then bind the execution widget.

    Returns the kernel name the page was bound to.
    """
    logger.info("Rendering notebook %s (%d cells)", nb.path or "<inline>", len(nb.cells))
    renderer = MarkdownRenderer()
    for cell in nb.cells:
        block = render_cell(cell, renderer)
        if block is not None:
            page.append(block)
    page.queue_typeset()
    kernel = resolve_kernel(nb, default_kernel)
    page.bind(kernel)
    return kernel

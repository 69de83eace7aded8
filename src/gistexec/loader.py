from __future__ import annotations

import logging
from pathlib import Path

from .config import DEFAULT_KERNEL
from .documents import classify, render_document
from .gist import GistClient, GistFile

logger = logging.getLogger(__name__)


def resolve_content(gist_file: GistFile, client: GistClient) -> str:
    """Inline content, or the raw body when the listing truncated it."""
    if gist_file.truncated:
        if not gist_file.raw_url:
            raise ValueError(f"{gist_file.filename} is truncated and has no raw_url")
        logger.info("File %s truncated, fetching raw URL", gist_file.filename)
        return client.read_raw(gist_file.raw_url)
    return gist_file.content or ""


def load_gist(
    gist_id: str, page, client: GistClient, *, default_kernel: str = DEFAULT_KERNEL
) -> int:
    """Render every recognised file of a gist onto `page`, in listing order.

    Files with other extensions are skipped. Returns how many files were
    rendered. Network and decoding errors propagate.
    """
    files = client.get_files(gist_id)
    rendered = 0
    for filename, gist_file in files.items():
        kind = classify(filename)
        if kind is None:
            logger.debug("Skipping %s: not a notebook or markdown file", filename)
            continue
        content = resolve_content(gist_file, client)
        render_document(
            kind, content, page, filename=filename, default_kernel=default_kernel
        )
        rendered += 1
    logger.info("Rendered %d file(s) from gist %s", rendered, gist_id)
    return rendered


def render_file(path: str, page, *, default_kernel: str = DEFAULT_KERNEL) -> bool:
    """Render a local file the same way a gist file would be.

    Returns False when the extension isn't recognised.
    """
    kind = classify(Path(path).name)
    if kind is None:
        logger.warning("Not rendering %s: unrecognised extension", path)
        return False
    text = Path(path).read_text(encoding="utf-8")
    render_document(kind, text, page, filename=path, default_kernel=default_kernel)
    return True

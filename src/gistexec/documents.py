from __future__ import annotations

import html
import logging
from enum import Enum
from typing import Optional

from .config import DEFAULT_KERNEL
from .frontmatter import split_front_matter
from .markdown import (
    MarkdownRenderer,
    executable_fence,
    language_capturing_fence,
    prose_block_html,
)
from .model import RenderedBlock
from .notebook import load_notebook, render_notebook

logger = logging.getLogger(__name__)

RMARKDOWN_KERNEL = "R"


class DocumentKind(Enum):
    NOTEBOOK = "notebook"
    MARKDOWN = "markdown"
    RMARKDOWN = "rmarkdown"


# First match wins; matched as substrings of the lower-cased filename.
_EXTENSIONS = [
    (".ipynb", DocumentKind.NOTEBOOK),
    (".md", DocumentKind.MARKDOWN),
    (".rmd", DocumentKind.RMARKDOWN),
]


def classify(filename: str) -> Optional[DocumentKind]:
    name = (filename or "").lower()
    for ext, kind in _EXTENSIONS:
        if ext in name:
            return kind
    return None


def render_markdown_document(
    text: str, page, *, default_kernel: str = DEFAULT_KERNEL
) -> str:
    """Replace the page content with a Markdown document.

    Every fenced block becomes executable; the language annotation of
    the last annotated fence picks the kernel.
    """
    page.clear()
    env: dict = {}
    body = MarkdownRenderer(fence=language_capturing_fence).render(text, env)
    page.append(
        RenderedBlock(
            html=prose_block_html(body),
            code=env.get("code", []),
            language=env.get("language"),
        )
    )
    page.queue_typeset()
    kernel = env.get("language") or default_kernel
    page.bind(kernel)
    return kernel


def render_rmarkdown_document(text: str, page) -> str:
    """Replace the page content with an R Markdown document.

    Front matter title/author/date become a heading and paragraphs and
    set the page title. Chunk options in fence headers are ignored.
    """
    page.clear()
    front, body = split_front_matter(text)
    if front.title:
        page.append(RenderedBlock(html=f'<h1 class="title">{html.escape(front.title)}</h1>'))
    if front.author:
        page.append(RenderedBlock(html=f'<p class="author">{html.escape(front.author)}</p>'))
    if front.date:
        page.append(RenderedBlock(html=f'<p class="date">{html.escape(front.date)}</p>'))
    if front.present():
        page.title = " - ".join(front.present())

    env: dict = {}
    rendered = MarkdownRenderer(fence=executable_fence).render(body, env)
    page.append(RenderedBlock(html=prose_block_html(rendered), code=env.get("code", [])))
    page.queue_typeset()
    page.bind(RMARKDOWN_KERNEL)
    return RMARKDOWN_KERNEL


def render_document(
    kind: DocumentKind,
    content: str,
    page,
    *,
    filename: Optional[str] = None,
    default_kernel: str = DEFAULT_KERNEL,
) -> str:
    """Render `content` with the strategy for `kind`; returns the bound kernel."""
    logger.debug("Rendering %s as %s", filename or "<inline>", kind.value)
    if kind is DocumentKind.NOTEBOOK:
        nb = load_notebook(content, path=filename)
        return render_notebook(nb, page, default_kernel=default_kernel)
    if kind is DocumentKind.MARKDOWN:
        return render_markdown_document(content, page, default_kernel=default_kernel)
    return render_rmarkdown_document(content, page)

from __future__ import annotations

import html
from typing import List, Optional

from .binder import ExecutionBinder
from .config import Settings
from .model import RenderedBlock

DEFAULT_TITLE = "gistexec"

_MATHJAX_CONFIG = (
    'MathJax.Hub.Config({tex2jax: {inlineMath: [["$","$"], ["\\\\(","\\\\)"]], '
    "processEscapes: true}});"
)


class Page:
    """Render target: the ordered blocks of `#container` plus page state.

    Renderers append blocks in reading order, queue a math typeset pass
    and attach an execution binder once their document is complete.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.title = DEFAULT_TITLE
        self.blocks: List[RenderedBlock] = []
        self.binder: Optional[ExecutionBinder] = None
        self.typeset_passes = 0

    def append(self, block: RenderedBlock) -> None:
        self.blocks.append(block)

    def clear(self) -> None:
        self.blocks = []

    def queue_typeset(self) -> None:
        self.typeset_passes += 1

    def executable_code(self) -> List[str]:
        """Source of every executable block on the page, in page order."""
        return [code for b in self.blocks for code in b.code]

    def bind(self, kernel_name: str) -> ExecutionBinder:
        binder = ExecutionBinder(self.settings.exec_url, kernel_name)
        binder.bind(self)
        self.binder = binder
        return binder

    def body_html(self) -> str:
        return "".join(b.html for b in self.blocks)

    def to_html(self) -> str:
        s = self.settings
        scripts = [f'<script src="{html.escape(s.jquery_url)}"></script>']
        if self.typeset_passes:
            scripts.append(
                f'<script type="text/x-mathjax-config">{_MATHJAX_CONFIG}</script>'
            )
            scripts.append(f'<script src="{html.escape(s.mathjax_url)}"></script>')
        ready: List[str] = []
        if self.typeset_passes:
            ready.append('MathJax.Hub.Queue(["Typeset", MathJax.Hub]);')
        if self.binder is not None:
            scripts.append(f'<script src="{html.escape(s.thebe_url)}"></script>')
            ready.append(self.binder.script())
        if ready:
            scripts.append("<script>$(function () { " + " ".join(ready) + " });</script>")

        return (
            "<!DOCTYPE html>\n"
            "<html>\n<head>\n"
            '<meta charset="utf-8">\n'
            f"<title>{html.escape(self.title)}</title>\n"
            "</head>\n<body>\n"
            f'<div id="container">\n{self.body_html()}</div>\n'
            + "\n".join(scripts)
            + "\n</body>\n</html>\n"
        )

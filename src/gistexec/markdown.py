from __future__ import annotations

import html
import re
from typing import Callable, Dict, Optional

from markdown_it import MarkdownIt
from mdit_py_plugins.dollarmath import dollarmath_plugin

FenceRule = Callable[..., str]


def executable_block_html(code: str, language: Optional[str] = None) -> str:
    """HTML for a code block the execution widget will pick up."""
    lang_attr = f' data-language="{html.escape(language)}"' if language else ""
    return f'<pre data-executable="true"{lang_attr}>{html.escape(code, quote=False)}</pre>\n'


def prose_block_html(inner_html: str) -> str:
    return f'<div class="md">{inner_html}</div>'


def fence_language(info: str) -> Optional[str]:
    """Language word of a fence info string.

    "python title=x" -> "python"; "{r setup, echo=FALSE}" -> "r".
    """
    info = (info or "").strip()
    if info.startswith("{"):
        info = info[1:].split("}", 1)[0]
    word = re.split(r"[\s,]", info.strip(), maxsplit=1)[0]
    return word or None


def _record(env, code: str) -> None:
    if isinstance(env, dict):
        env.setdefault("code", []).append(code)


def executable_fence(tokens, idx, options, env):
    # Info strings such as "{r setup, echo=FALSE}" are left unparsed.
    code = tokens[idx].content.rstrip("\n")
    _record(env, code)
    return executable_block_html(code)


def language_capturing_fence(tokens, idx, options, env):
    token = tokens[idx]
    language = fence_language(token.info)
    if language and isinstance(env, dict):
        env["language"] = language
    code = token.content.rstrip("\n")
    _record(env, code)
    return executable_block_html(code, language)


def _math_inline(tokens, idx, options, env):
    return f"${html.escape(tokens[idx].content, quote=False)}$"


def _math_inline_double(tokens, idx, options, env):
    return f"$${html.escape(tokens[idx].content, quote=False)}$$"


def _math_block(tokens, idx, options, env):
    body = (tokens[idx].content or "").strip()
    return f"<div class=\"math\">$$\n{html.escape(body, quote=False)}\n$$</div>\n"


class MarkdownRenderer:
    """Markdown to HTML with TeX left intact for the page's math typesetter.

    `fence` replaces the renderer's fenced-code rule; it receives the
    render `env` dict, so rules can report back (e.g. the fence language).
    """

    def __init__(self, fence: Optional[FenceRule] = None) -> None:
        self._md = (
            MarkdownIt("commonmark", {"html": True})
            .enable("table")
            .enable("strikethrough")
        )
        self._md.use(dollarmath_plugin)
        self._md.renderer.rules["math_inline"] = _math_inline
        self._md.renderer.rules["math_inline_double"] = _math_inline_double
        self._md.renderer.rules["math_block"] = _math_block
        self._md.renderer.rules["math_block_label"] = _math_block
        if fence is not None:
            self._md.renderer.rules["fence"] = fence

    def render(self, text: str, env: Optional[Dict] = None) -> str:
        return self._md.render(text, env if env is not None else {})

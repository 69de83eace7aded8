import json
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from gistexec.documents import (
    DocumentKind,
    classify,
    render_document,
    render_markdown_document,
    render_rmarkdown_document,
)
from gistexec.markdown import fence_language
from gistexec.model import RenderedBlock
from gistexec.page import Page

EXAMPLES = Path(__file__).resolve().parents[1] / "examples"


class TestClassify(unittest.TestCase):
    def test_extensions(self):
        self.assertIs(classify("analysis.ipynb"), DocumentKind.NOTEBOOK)
        self.assertIs(classify("README.MD"), DocumentKind.MARKDOWN)
        self.assertIs(classify("report.Rmd"), DocumentKind.RMARKDOWN)
        self.assertIsNone(classify("script.py"))
        self.assertIsNone(classify("data.csv"))
        self.assertIsNone(classify(""))


class TestRMarkdown(unittest.TestCase):
    def test_front_matter_blocks_title_and_kernel(self):
        page = Page()
        page.append(RenderedBlock(html="<p>stale</p>"))
        text = (EXAMPLES / "report.Rmd").read_text(encoding="utf-8")
        kernel = render_rmarkdown_document(text, page)

        self.assertEqual(kernel, "R")
        self.assertEqual(page.binder.kernel_name, "R")
        self.assertEqual(page.title, "T - A")
        self.assertEqual(page.blocks[0].html, '<h1 class="title">T</h1>')
        self.assertEqual(page.blocks[1].html, '<p class="author">A</p>')
        self.assertEqual(len(page.blocks), 3)
        body = page.blocks[2]
        self.assertIn("<p>Some text.</p>", body.html)
        self.assertIn(
            '<pre data-executable="true">x &lt;- c(1, 2, 3)\nmean(x)</pre>', body.html
        )
        self.assertEqual(page.executable_code(), ["x <- c(1, 2, 3)\nmean(x)"])

    def test_r_kernel_ignores_fence_language(self):
        page = Page()
        kernel = render_rmarkdown_document("```python\n1\n```\n", page)
        self.assertEqual(kernel, "R")
        self.assertEqual(page.title, "gistexec")
        self.assertEqual(len(page.blocks), 1)

    def test_date_only(self):
        page = Page()
        render_rmarkdown_document("---\ndate: today\n---\nx\n", page)
        self.assertEqual(page.title, "today")
        self.assertEqual(page.blocks[0].html, '<p class="date">today</p>')


class TestMarkdown(unittest.TestCase):
    def test_last_fence_language_picks_kernel(self):
        page = Page()
        text = "# Notes\n\n```python\nprint(1)\n```\n\ntext\n\n```julia\n1 + 1\n```\n\n```\nplain\n```\n"
        kernel = render_markdown_document(text, page)
        self.assertEqual(kernel, "julia")
        self.assertEqual(page.binder.kernel_name, "julia")
        self.assertEqual(page.executable_code(), ["print(1)", "1 + 1", "plain"])
        html = page.blocks[0].html
        self.assertIn('<pre data-executable="true" data-language="python">print(1)</pre>', html)
        self.assertIn('<pre data-executable="true">plain</pre>', html)
        self.assertIn("<h1>Notes</h1>", html)

    def test_block_records_kernel_language(self):
        page = Page()
        render_markdown_document("```ruby\nputs 1\n```\n", page)
        self.assertEqual(page.blocks[0].language, "ruby")
        render_markdown_document("no code", page)
        self.assertIsNone(page.blocks[0].language)

    def test_brace_annotation(self):
        page = Page()
        kernel = render_markdown_document("```{python}\nprint(1)\n```\n", page)
        self.assertEqual(kernel, "python")
        self.assertEqual(fence_language("{r setup, echo=FALSE}"), "r")
        self.assertEqual(fence_language("{r,echo=FALSE}"), "r")
        self.assertEqual(fence_language("python title=x"), "python")
        self.assertIsNone(fence_language("{}"))
        self.assertIsNone(fence_language(""))

    def test_display_math_kept_for_typesetter(self):
        page = Page()
        render_markdown_document("$$ x $$ (1)\n\n$$\ny = 2\n$$\n", page)
        html = page.blocks[0].html
        self.assertIn("$$\nx\n$$", html)
        self.assertIn("$$\ny = 2\n$$", html)
        self.assertNotIn("mathlabel", html)

    def test_default_kernel_without_fences(self):
        page = Page()
        self.assertEqual(render_markdown_document("just *text*", page), "python3")
        self.assertEqual(
            render_markdown_document("just *text*", page, default_kernel="ir"), "ir"
        )
        self.assertEqual(len(page.blocks), 1)


class TestRenderDocument(unittest.TestCase):
    def test_notebook_dispatch(self):
        page = Page()
        nb = {"cells": [{"cell_type": "code", "source": "print(1)"}]}
        kernel = render_document(DocumentKind.NOTEBOOK, json.dumps(nb), page, filename="a.ipynb")
        self.assertEqual(kernel, "python3")
        self.assertEqual(page.executable_code(), ["print(1)"])

    def test_notebook_bad_json_propagates(self):
        with self.assertRaises(ValueError):
            render_document(DocumentKind.NOTEBOOK, "{not json", Page())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

import json
import sys
import tempfile
import unittest
from collections import OrderedDict
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from gistexec.gist import GistFile
from gistexec.loader import load_gist, render_file, resolve_content
from gistexec.page import Page

EXAMPLES = Path(__file__).resolve().parents[1] / "examples"


class FakeGistClient:
    def __init__(self, files, raw=None):
        self.files = files
        self.raw = raw or {}
        self.requested = []
        self.raw_reads = []

    def get_files(self, gist_id):
        self.requested.append(gist_id)
        return OrderedDict((f.filename, f) for f in self.files)

    def read_raw(self, raw_url):
        self.raw_reads.append(raw_url)
        return self.raw[raw_url]


def notebook(*sources):
    return json.dumps(
        {"cells": [{"cell_type": "code", "source": s} for s in sources], "metadata": {}}
    )


class TestLoadGist(unittest.TestCase):
    def test_renders_matching_files_in_listing_order(self):
        client = FakeGistClient(
            [
                GistFile("first.ipynb", content=notebook("a = 1")),
                GistFile("notes.txt", content="ignored"),
                GistFile(
                    "big.ipynb",
                    content=None,
                    truncated=True,
                    raw_url="https://gist.example/raw/big.ipynb",
                ),
            ],
            raw={"https://gist.example/raw/big.ipynb": notebook("b = 2", "c = 3")},
        )
        page = Page()
        rendered = load_gist("abc123", page, client)

        self.assertEqual(rendered, 2)
        self.assertEqual(client.requested, ["abc123"])
        self.assertEqual(client.raw_reads, ["https://gist.example/raw/big.ipynb"])
        self.assertEqual(page.executable_code(), ["a = 1", "b = 2", "c = 3"])
        self.assertEqual(page.binder.code, ["a = 1", "b = 2", "c = 3"])

    def test_nothing_recognised(self):
        client = FakeGistClient([GistFile("script.py", content="print(1)")])
        page = Page()
        self.assertEqual(load_gist("abc", page, client), 0)
        self.assertEqual(page.blocks, [])
        self.assertIsNone(page.binder)

    def test_markdown_file_replaces_page(self):
        client = FakeGistClient(
            [
                GistFile("nb.ipynb", content=notebook("x")),
                GistFile("README.md", content="```r\nx\n```\n"),
            ]
        )
        page = Page()
        load_gist("abc", page, client)
        self.assertEqual(len(page.blocks), 1)
        self.assertEqual(page.binder.kernel_name, "r")

    def test_truncated_without_raw_url(self):
        with self.assertRaises(ValueError):
            resolve_content(GistFile("x.ipynb", truncated=True), FakeGistClient([]))

    def test_fetch_error_propagates(self):
        class Boom(FakeGistClient):
            def get_files(self, gist_id):
                raise ConnectionError("offline")

        with self.assertRaises(ConnectionError):
            load_gist("abc", Page(), Boom([]))


class TestRenderFile(unittest.TestCase):
    def test_local_notebook(self):
        page = Page()
        self.assertTrue(render_file(str(EXAMPLES / "hello.ipynb"), page))
        self.assertEqual(page.executable_code(), ["print(1)"])

    def test_unknown_extension(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "data.csv"
            p.write_text("a,b\n", encoding="utf-8")
            page = Page()
            self.assertFalse(render_file(str(p), page))
            self.assertEqual(page.blocks, [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

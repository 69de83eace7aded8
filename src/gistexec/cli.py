from __future__ import annotations

import argparse
import logging
import sys
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from typing import Optional

import requests

from .config import Settings, load_settings
from .gist import GistClient
from .loader import load_gist, render_file
from .page import Page
from .params import get_url_params

logger = logging.getLogger("gistexec")


def _resolve_gist_id(target: Optional[str], default: str) -> Optional[str]:
    """A bare id, or the gistID parameter of a URL or query string."""
    if target and ("?" in target or "=" in target):
        target = get_url_params(target).get("gistID")
    return target or default or None


def render_gist_page(settings: Settings, gist_id: str) -> str:
    page = Page(settings)
    with GistClient(settings.api_url, timeout=settings.timeout) as client:
        load_gist(gist_id, page, client, default_kernel=settings.default_kernel)
    return page.to_html()


def _write(text: str, output: Optional[str]) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        print(f"Wrote {output}")
    else:
        print(text, end="")


def _cmd_render(
    settings: Settings,
    target: Optional[str],
    *,
    file: Optional[str] = None,
    output: Optional[str] = None,
) -> int:
    if file:
        page = Page(settings)
        if not render_file(file, page, default_kernel=settings.default_kernel):
            print(f"render: unsupported file type: {file}", file=sys.stderr)
            return 2
        _write(page.to_html(), output)
        return 0

    gist_id = _resolve_gist_id(target, settings.default_gist_id)
    if not gist_id:
        print("render: no gistID given and no default configured", file=sys.stderr)
        return 2
    try:
        text = render_gist_page(settings, gist_id)
    except requests.RequestException as e:
        print(f"render: failed to fetch gist {gist_id}: {e}", file=sys.stderr)
        return 1
    _write(text, output)
    return 0


def _make_handler(settings: Settings):
    class GistPageHandler(BaseHTTPRequestHandler):
        """Serves `/?gistID=...` as a rendered page."""

        def do_GET(self):
            route = self.path.split("?", 1)[0].split("#", 1)[0]
            gist_id = get_url_params(self.path).get("gistID") or settings.default_gist_id
            if route not in ("", "/") or not gist_id:
                self._send_html(404, "<h1>Not Found</h1>")
                return
            try:
                body = render_gist_page(settings, gist_id)
            except requests.RequestException as e:
                logger.error("Fetching gist %s failed: %s", gist_id, e)
                self._send_html(502, "<h1>Bad Gateway</h1>")
                return
            self._send_html(200, body)

        def _send_html(self, code, body):
            encoded = body.encode("utf-8")
            self.send_response(code)
            self.send_header("Content-Type", "text/html; charset=utf-8")
            self.send_header("Content-Length", str(len(encoded)))
            self.end_headers()
            self.wfile.write(encoded)

        def log_message(self, fmt, *args):
            logger.info(fmt, *args)

    return GistPageHandler


def _cmd_serve(settings: Settings, host: str, port: int) -> int:
    server = HTTPServer((host, port), _make_handler(settings))
    print(f"Serving gist pages at http://{host}:{port}/?gistID=<id>")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down.")
    finally:
        server.server_close()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gistexec", description="Render gist notebooks as executable pages"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--config", help="YAML settings file")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_render = sub.add_parser("render", help="Render a gist (or local file) to HTML")
    p_render.add_argument(
        "target", nargs="?", help="Gist id, or a URL/query string carrying gistID"
    )
    p_render.add_argument("--file", help="Render a local .ipynb/.md/.Rmd file instead")
    p_render.add_argument("-o", "--output", help="Output .html file (default: stdout)")

    p_serve = sub.add_parser("serve", help="Serve rendered gists over HTTP")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings(args.config)

    if args.cmd == "render":
        return _cmd_render(settings, args.target, file=args.file, output=args.output)
    if args.cmd == "serve":
        return _cmd_serve(settings, args.host, args.port)
    return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

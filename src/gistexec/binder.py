from __future__ import annotations

import json
import logging
from typing import Dict, List

logger = logging.getLogger(__name__)


class ExecutionBinder:
    """Points the execution widget at a page's executable blocks.

    One binder is created per full document render, after every block
    of that document is on the page. The widget itself (Thebe) runs in
    the browser; this side only supplies its service URL and kernel.
    """

    def __init__(self, url: str, kernel_name: str):
        if not kernel_name or not kernel_name.strip():
            raise ValueError("kernel_name must be a non-empty string")
        self.url = url
        self.kernel_name = kernel_name
        self.code: List[str] = []

    def bind(self, page) -> int:
        self.code = page.executable_code()
        logger.debug(
            "Bound %d executable block(s) to kernel %s at %s",
            len(self.code),
            self.kernel_name,
            self.url,
        )
        return len(self.code)

    def config(self) -> Dict[str, str]:
        return {"url": self.url, "kernel_name": self.kernel_name}

    def script(self) -> str:
        payload = json.dumps(self.config()).replace("</", "<\\/")
        return f"new Thebe({payload});"

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from .config import DEFAULT_API_URL

logger = logging.getLogger(__name__)


@dataclass
class GistFile:
    """One entry of a gist's `files` listing.

    content is None or partial when the API marks the file truncated;
    the full body is then at raw_url.
    """

    filename: str
    content: Optional[str] = None
    truncated: bool = False
    raw_url: Optional[str] = None
    language: Optional[str] = None

    @classmethod
    def from_api(cls, filename: str, data: Dict) -> "GistFile":
        data = data if isinstance(data, dict) else {}
        return cls(
            filename=data.get("filename") or filename,
            content=data.get("content"),
            truncated=bool(data.get("truncated", False)),
            raw_url=data.get("raw_url"),
            language=data.get("language"),
        )


class GistClient:
    """Read-only access to gists through the GitHub REST API.

    No authentication, retries or caching; HTTP errors surface as
    requests.HTTPError.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "application/vnd.github+json")

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "GistClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def get_files(self, gist_id: str) -> "OrderedDict[str, GistFile]":
        if not gist_id:
            raise ValueError("gist_id must be a non-empty string")
        url = f"{self.api_url}/gists/{gist_id}"
        logger.debug("GET %s", url)
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        files = resp.json().get("files") or {}
        out: "OrderedDict[str, GistFile]" = OrderedDict()
        for filename, data in files.items():
            out[filename] = GistFile.from_api(filename, data)
        return out

    def read_raw(self, raw_url: str) -> str:
        logger.debug("GET %s", raw_url)
        resp = self.session.get(raw_url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.text

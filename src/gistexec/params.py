from __future__ import annotations

from typing import Dict
from urllib.parse import unquote_plus


def get_url_params(url: str = "") -> Dict[str, str]:
    """Return a flat mapping of the query parameters in `url`.

    Accepts a full URL, a request path, or a bare query string
    ("a=1&b=2"). The fragment is discarded; "+" decodes to a space and
    percent escapes are decoded. A repeated key keeps its last value.
    Never raises: anything unparseable yields {}.
    """
    url = (url or "").split("#", 1)[0]
    _, sep, query = url.partition("?")
    if not sep and "=" in url:
        query = url

    params: Dict[str, str] = {}
    if not query:
        return params
    for pair in query.split("&"):
        name, _, value = pair.partition("=")
        if not name:
            continue
        params[unquote_plus(name)] = unquote_plus(value)
    return params

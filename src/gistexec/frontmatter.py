from __future__ import annotations

from typing import Tuple

from ruamel.yaml import YAML

from .model import FrontMatter

DELIMITER = "---"


def _as_text(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def _front_matter_from_mapping(data: dict) -> FrontMatter:
    extra = {k: v for k, v in data.items() if k not in {"title", "author", "date"}}
    return FrontMatter(
        title=_as_text(data.get("title")),
        author=_as_text(data.get("author")),
        date=_as_text(data.get("date")),
        extra=extra,
    )


def split_front_matter(text: str) -> Tuple[FrontMatter, str]:
    """Split a leading '---' delimited YAML block from the document body.

    Returns (front_matter, body). Without an opening delimiter on the
    first line, or without a closing one, the whole text is the body.
    YAML errors from the block propagate unchanged.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != DELIMITER:
        return FrontMatter(), text

    for idx in range(1, len(lines)):
        if lines[idx].rstrip("\r\n") != DELIMITER:
            continue
        yaml_text = "".join(lines[1:idx])
        body = "".join(lines[idx + 1 :])
        data = YAML(typ="safe").load(yaml_text)
        if data is None:
            return FrontMatter(), body
        if not isinstance(data, dict):
            raise ValueError("Front matter must be a YAML mapping")
        return _front_matter_from_mapping(data), body

    return FrontMatter(), text

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


@dataclass
class Scalar:
    """Cell source stored as one string."""

    text: str

    def join(self) -> str:
        return self.text


@dataclass
class Fragments:
    """Cell source stored as an ordered list of string fragments."""

    parts: List[str]

    def join(self) -> str:
        return "".join(self.parts)


Source = Union[Scalar, Fragments]


def as_source(value: object) -> Optional[Source]:
    """Wrap a raw JSON source value; None/empty string means absent."""
    if value is None:
        return None
    if isinstance(value, str):
        return Scalar(value) if value else None
    if isinstance(value, (list, tuple)):
        return Fragments([str(p) for p in value])
    return Scalar(str(value))


class Schema(Enum):
    LEGACY = "legacy"  # nbformat <= 3: cells nested under worksheets[0]
    CURRENT = "current"


@dataclass
class Cell:
    """A single notebook cell after schema normalization.

    cell_type: "code", "markdown", or anything else (rendered as nothing).
    source: None when the cell carried no usable source.
    """

    cell_type: Optional[str]
    source: Optional[Source]

    def text(self) -> str:
        return self.source.join() if self.source is not None else ""


@dataclass
class Notebook:
    """A notebook reduced to a flat ordered list of cells.

    metadata: top-level notebook metadata (kernelspec lives here).
    schema: which on-disk layout the cells were taken from.
    path: optional origin (filename or local path).
    """

    cells: List[Cell]
    metadata: Dict = field(default_factory=dict)
    schema: Schema = Schema.CURRENT
    path: Optional[str] = None

    def kernel_name(self) -> Optional[str]:
        meta = self.metadata if isinstance(self.metadata, dict) else {}
        spec = meta.get("kernelspec")
        name = spec.get("name") if isinstance(spec, dict) else None
        if isinstance(name, str) and name.strip():
            return name
        return None


@dataclass
class FrontMatter:
    title: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    extra: Dict = field(default_factory=dict)

    def present(self) -> List[str]:
        """Title, author and date values that are set, in that order."""
        return [v for v in (self.title, self.author, self.date) if v]

    def is_empty(self) -> bool:
        return not self.present() and not self.extra


@dataclass
class RenderedBlock:
    """One HTML fragment appended to a page.

    executable: the fragment itself is a `<pre data-executable>` block.
    code: source of every executable block in the fragment, in order;
    prose blocks rendered from Markdown may embed several.
    language: fence language that picked the kernel, when one did.
    """

    html: str
    executable: bool = False
    code: List[str] = field(default_factory=list)
    language: Optional[str] = None

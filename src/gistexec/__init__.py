"""gistexec: render notebooks and Markdown from gists as executable pages.

Code blocks are marked for a remote execution widget (Thebe) so readers
can run them against a live kernel.
"""

__all__ = [
    "Notebook",
    "Cell",
    "Page",
    "get_url_params",
    "split_front_matter",
    "classify",
    "load_notebook",
    "render_notebook",
    "load_gist",
]

__version__ = "0.1.0"

from .model import Notebook, Cell  # noqa: E402
from .page import Page  # noqa: E402
from .params import get_url_params  # noqa: E402
from .frontmatter import split_front_matter  # noqa: E402
from .documents import classify  # noqa: E402
from .notebook import load_notebook, render_notebook  # noqa: E402
from .loader import load_gist  # noqa: E402

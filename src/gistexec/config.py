from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional

from ruamel.yaml import YAML

ENV_PREFIX = "GISTEXEC_"

DEFAULT_GIST_ID = "cb6da4c0f285713fb4b5"
DEFAULT_EXEC_URL = "https://tmp23.tmpnb.org"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_KERNEL = "python3"


@dataclass
class Settings:
    """Runtime settings.

    default_gist_id: rendered when no gistID is given; "" renders nothing.
    exec_url: base URL of the remote kernel service the widget talks to.
    """

    default_gist_id: str = DEFAULT_GIST_ID
    exec_url: str = DEFAULT_EXEC_URL
    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0
    default_kernel: str = DEFAULT_KERNEL
    jquery_url: str = "https://code.jquery.com/jquery-2.2.4.min.js"
    mathjax_url: str = (
        "https://cdnjs.cloudflare.com/ajax/libs/mathjax/2.7.9/MathJax.js"
        "?config=TeX-AMS-MML_HTMLorMML"
    )
    thebe_url: str = "https://rawgit.com/oreillymedia/thebe/master/static/main-built.js"


def _coerce(current: object, value: object) -> object:
    if isinstance(current, float):
        return float(value)  # type: ignore[arg-type]
    return "" if value is None else str(value)


def _apply(settings: Settings, data: Mapping) -> None:
    for f in fields(Settings):
        if f.name in data:
            setattr(settings, f.name, _coerce(getattr(settings, f.name), data[f.name]))


def _read_yaml(path: str) -> dict:
    yaml = YAML(typ="safe")
    data = yaml.load(Path(path).read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a YAML mapping")
    return data


def load_settings(
    path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
) -> Settings:
    """Defaults, then the YAML file at `path`, then GISTEXEC_* variables."""
    settings = Settings()
    if path:
        _apply(settings, _read_yaml(path))
    env = os.environ if environ is None else environ
    overrides = {}
    for f in fields(Settings):
        key = ENV_PREFIX + f.name.upper()
        if key in env:
            overrides[f.name] = env[key]
    _apply(settings, overrides)
    return settings

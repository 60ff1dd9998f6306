"""Loading of the widget icons sent along with push updates."""

from __future__ import annotations

import base64
from importlib import resources
from pathlib import Path
from typing import Optional

DEFAULT_WORK_ICON = "red.png"
DEFAULT_BREAK_ICON = "green.png"


class IconError(Exception):
    """Raised when an icon file cannot be read."""


def load_icon(path: Optional[str], default: str) -> str:
    """Return the base64 encoded content of *path*, or of a bundled icon."""
    try:
        if path:
            data = Path(path).read_bytes()
        else:
            data = resources.files("tomato.assets").joinpath(default).read_bytes()
    except OSError as exc:
        raise IconError(f"Unable to load icon: {exc}") from exc
    return base64.b64encode(data).decode("ascii")

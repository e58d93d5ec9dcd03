"""Named style presets for the star rating view.

A style is the look of the control (star count, colors, padding and an icon
path) saved under a name in ``styles.json`` inside the per-user config
directory. Rating values are never stored here.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

from .logging_config import get_logger


logger = get_logger(__name__)

STYLES_FILENAME = "styles.json"
STYLE_KEYS = ("star_count", "highlight_color", "normal_color", "horizontal_padding", "icon_path")


def config_dir() -> Path:
    override = os.getenv("STAR_RATING_CONFIG_DIR")
    if override:
        base = Path(os.path.expanduser(override))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support" / "StarRating"
    elif os.name == "nt":
        base = Path(os.path.expanduser(os.getenv("APPDATA", "~"))) / "StarRating"
    else:
        base = Path.home() / ".config" / "star-rating"
    base.mkdir(parents=True, exist_ok=True)
    return base


def styles_path() -> Path:
    return config_dir() / STYLES_FILENAME


def load_styles() -> dict:
    """Return every saved style, keyed by name.

    A missing file is an empty store. A corrupt file is logged and treated as
    empty so the control still comes up with its defaults.
    """
    path = styles_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable styles file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring styles file %s: expected a JSON object", path)
        return {}
    return data


def save_styles(styles: dict) -> None:
    path = styles_path()
    path.write_text(json.dumps(styles, indent=2, sort_keys=True), encoding="utf-8")


def get_style(name: str) -> dict | None:
    return load_styles().get(name)


def set_style(name: str, style: dict) -> None:
    """Save ``style`` under ``name``, keeping only the known style keys."""
    record = {key: style[key] for key in STYLE_KEYS if key in style}
    styles = load_styles()
    styles[name] = record
    save_styles(styles)
    logger.debug("Saved style %r: %s", name, record)


def delete_style(name: str) -> bool:
    styles = load_styles()
    if name not in styles:
        return False
    del styles[name]
    save_styles(styles)
    return True

"""Persistent JSON config helpers.

Stores the default file filter, key bindings, skip step, and logging options.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from ..file_tree_model import FilterSpec
from ..input.keymap import DEFAULT_KEYSET, DEFAULT_SKIP_STEP, NavigationCommand, build_keymap
from .logs import LoggingConfig

APP_NAME = "lazyslides"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_EXTENSIONS: tuple[str, ...] = ("bmp", "jpg", "jpeg", "png", "gif")


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def default_filter_spec() -> FilterSpec:
    return FilterSpec.from_extensions(DEFAULT_EXTENSIONS)


def load_filter_spec() -> FilterSpec:
    """Return the persisted filter.

    A non-empty ``glob`` string wins over ``extensions``. Extension lists
    must hold strings only; anything else falls back to the image defaults.
    """
    data = load_config()
    pattern = data.get("glob")
    if isinstance(pattern, str) and pattern:
        return FilterSpec.from_glob(pattern)

    extensions = data.get("extensions")
    if isinstance(extensions, list) and extensions and all(isinstance(ext, str) for ext in extensions):
        spec = FilterSpec.from_extensions(extensions)
        if spec.extensions:
            return spec
    return default_filter_spec()


def save_filter_spec(spec: FilterSpec) -> None:
    """Persist ``spec`` as either ``glob`` or a sorted ``extensions`` list."""
    config = load_config()
    if spec.pattern is not None:
        config["glob"] = spec.pattern
        config.pop("extensions", None)
    else:
        config["extensions"] = sorted(spec.extensions)
        config.pop("glob", None)
    save_config(config)


def load_keymap() -> dict[str, NavigationCommand]:
    """Return default key bindings overlaid with the ``keymap`` config object."""
    keyset: dict[object, object] = dict(DEFAULT_KEYSET)
    overrides = load_config().get("keymap")
    if isinstance(overrides, dict):
        keyset.update(overrides)
    return build_keymap(keyset)


def load_skip_step() -> int:
    """Return the page-skip offset; booleans and non-positive values are ignored."""
    value = load_config().get("skip_step")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_SKIP_STEP
    return value


def load_logging_config(level: str | None = None, log_file: Path | None = None) -> LoggingConfig:
    """Build ``LoggingConfig`` from config values, with explicit overrides winning."""
    data = load_config()
    if level is None:
        raw_level = data.get("log_level")
        level = raw_level if isinstance(raw_level, str) else "WARNING"
    if log_file is None:
        raw_log_file = data.get("log_file")
        if isinstance(raw_log_file, str) and raw_log_file:
            log_file = Path(raw_log_file).expanduser()
    return LoggingConfig(level=level, log_file=log_file)


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_EXTENSIONS",
    "default_filter_spec",
    "load_config",
    "save_config",
    "load_filter_spec",
    "save_filter_spec",
    "load_keymap",
    "load_skip_step",
    "load_logging_config",
]

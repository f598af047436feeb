"""Configuration file loading and merging with CLI arguments."""

from __future__ import annotations

import logging
import os
import pathlib
import tomllib


logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"

_DEFAULTS: dict[str, object] = {
    "mode": "sha256",
    "display": 10,
    "show_progress": False,
    "workers": None,
    "paths": [],
    "exclude": [],
}

_LIST_KEYS = ("paths", "exclude")


def _config_dir() -> pathlib.Path:
    """Return the finddupes config directory (not created)."""
    base = pathlib.Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()
    return base / "finddupes"


def load_config(config_dir: pathlib.Path | None = None) -> dict:
    """Load config.toml and return its contents as a dict.

    Returns {} if no file exists or it cannot be parsed.
    """
    if config_dir is None:
        config_dir = _config_dir()
    path = config_dir / CONFIG_FILENAME
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Ignoring unreadable config {path}: {e}")
        return {}


def merge_config_into_args(args, config: dict) -> None:
    """Three-layer merge: CLI > config > hardcoded defaults.

    List values are combined: CLI entries first, then config entries not
    already given. Mutates *args* in place.
    """
    for key in ("mode", "display", "workers"):
        if getattr(args, key, None) is not None:
            continue
        cfg_val = config.get(key)
        setattr(args, key, cfg_val if cfg_val is not None else _DEFAULTS[key])

    if getattr(args, "show_progress", None) is None:
        cfg_val = config.get("show_progress")
        args.show_progress = bool(cfg_val) if cfg_val is not None else _DEFAULTS["show_progress"]

    for key in _LIST_KEYS:
        cli_val = [str(v) for v in (getattr(args, key, None) or [])]
        raw = config.get(key) or []
        if not isinstance(raw, list):
            logger.warning(f"Ignoring config key {key!r}: expected a list, got {type(raw).__name__}")
            raw = []
        cfg_val = [str(v) for v in raw]
        merged = cli_val + [v for v in cfg_val if v not in cli_val]
        setattr(args, key, [pathlib.Path(v).expanduser() for v in merged])

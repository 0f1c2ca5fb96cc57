"""YAML/dict config loader for social-text.

Supports loading from a YAML file or a plain dict (for embedding in a
larger application config).

Example YAML:

    social_text:
      flags: [hashtag, mention]      # or a bitmask: 1 hashtag, 2 mention, 4 hyperlink
      colors:
        hashtag: "#1DA1F2"
        hyperlink:
          default: "#0B57D0"
          pressed: "#083A9A"
      patterns:
        mention: "@([A-Za-z0-9_]{1,15})"
        hyperlink: null              # null / "" = default pattern
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any

from .engine import SocialConfig
from .host import AnnotationHost
from .patterns import PatternSet
from .social import SocialText
from .styles import DEFAULT_COLORS, ColorStates
from .types import FLAG_ALL, FLAGS, KINDS

logger = logging.getLogger(__name__)


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "social_text" key or flat
    if "social_text" in data:
        data = data["social_text"] or {}

    return {
        "flags": parse_flags(data.get("flags", FLAG_ALL)),
        "colors": {
            kind: parse_colors(value)
            for kind, value in _by_kind(data.get("colors"), "colors").items()
        },
        "patterns": {
            kind: value or None
            for kind, value in _by_kind(data.get("patterns"), "patterns").items()
        },
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml
    with open(path) as f:
        cfg = load_config(yaml.safe_load(f))
    logger.info("Loaded config from %s (flags=%d)", path, cfg["flags"])
    return cfg


def parse_flags(value: Any) -> int:
    """Bitmask int, list of kind names, or {kind: bool} mapping → bitmask."""
    if isinstance(value, bool):
        raise ValueError(f"invalid flags: {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= FLAG_ALL:
            raise ValueError(f"flags out of range: {value}")
        return value
    if isinstance(value, str):
        value = [v.strip() for v in value.split(",") if v.strip()]
    if isinstance(value, dict):
        value = [kind for kind, on in value.items() if on]
    if isinstance(value, (list, tuple, set)):
        flags = 0
        for kind in value:
            if kind not in FLAGS:
                raise ValueError(f"unknown token kind: {kind!r}")
            flags |= FLAGS[kind]
        return flags
    raise ValueError(f"invalid flags: {value!r}")


def parse_colors(value: Any) -> ColorStates:
    """A single color, or a {"default": ..., "<state>": ...} mapping."""
    if isinstance(value, ColorStates):
        return value
    if isinstance(value, dict):
        states = dict(value)
        if "default" not in states:
            raise ValueError(f"color map needs a 'default' entry: {value!r}")
        default = states.pop("default")
        return ColorStates(default, states)
    return ColorStates.value_of(value)


def build_config(cfg: dict[str, Any]) -> SocialConfig:
    """SocialConfig from a normalized config dict."""
    colors = dict(DEFAULT_COLORS)
    colors.update(cfg.get("colors", {}))
    return SocialConfig(
        flags=cfg.get("flags", FLAG_ALL),
        patterns=PatternSet(cfg.get("patterns")),
        colors=colors,
    )


def create_social_text(
    host: AnnotationHost,
    config: dict[str, Any] | None = None,
    *,
    view: Any = None,
) -> SocialText:
    """Create a fully configured SocialText for a host."""
    # load_config is idempotent, so already-normalized dicts pass through
    return SocialText(host, build_config(load_config(config)), view=view)


def _by_kind(section: Any, name: str) -> dict[str, Any]:
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"'{name}' must be a mapping of kind → value")
    unknown = set(section) - set(KINDS)
    if unknown:
        raise ValueError(f"unknown token kind(s) in '{name}': {sorted(unknown)}")
    return section

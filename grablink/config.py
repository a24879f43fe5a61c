"""Process-wide configuration.

Read once at startup from a TOML file (``$GRABLINK_CONFIG`` or
``~/.config/grablink/config.toml``), then overridden by environment
variables.  A missing file just means defaults::

    [grablink]
    preferred_app = "safari"
    preferred_link_type = "from-context"   # or plain / markdown / org / html
    disabled_apps = ["edge"]

    [[grablink.context]]
    pattern = "\\\\.org$"
    link_type = "org"
"""

from __future__ import annotations

import logging
import os
import re
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from grablink.errors import ConfigError
from grablink.selector import DEFAULT_CONTEXT_RULES, FROM_CONTEXT, ContextRule

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/grablink/config.toml")


@dataclass
class Settings:
    preferred_app: str | None = None
    preferred_link_type: str = FROM_CONTEXT
    context_rules: tuple[ContextRule, ...] = DEFAULT_CONTEXT_RULES
    disabled_apps: list[str] = field(default_factory=list)
    context: str | None = None


def config_path(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    raw = env.get("GRABLINK_CONFIG")
    return Path(raw).expanduser() if raw else DEFAULT_CONFIG_PATH.expanduser()


def load_raw_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load the TOML file, or return an empty dict when it does not exist."""
    target = Path(path).expanduser() if path is not None else config_path()
    if not target.is_file():
        logger.debug("No config file at %s; using defaults", target)
        return {}

    try:
        with target.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid config file {target}: {exc}") from exc


def _parse_rules(raw_rules: Any) -> tuple[ContextRule, ...]:
    if not isinstance(raw_rules, list):
        raise ConfigError("'context' must be an array of tables")
    rules = []
    for item in raw_rules:
        try:
            pattern = str(item["pattern"])
            link_type = str(item["link_type"])
        except (KeyError, TypeError):
            raise ConfigError(
                f"Context rule needs 'pattern' and 'link_type', got {item!r}"
            ) from None
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ConfigError(f"Bad context pattern {pattern!r}: {exc}") from exc
        rules.append(ContextRule(pattern, link_type))
    return tuple(rules)


def load_settings(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Build :class:`Settings` from the config file and the environment."""
    env = os.environ if env is None else env
    if path is None:
        path = config_path(env)
    cfg = load_raw_config(path).get("grablink", {})

    settings = Settings()
    settings.preferred_app = env.get("GRABLINK_PREFERRED_APP") or cfg.get("preferred_app") or None
    settings.preferred_link_type = (
        env.get("GRABLINK_PREFERRED_LINK_TYPE") or cfg.get("preferred_link_type") or FROM_CONTEXT
    )
    if "context" in cfg:
        settings.context_rules = _parse_rules(cfg["context"])

    disabled = cfg.get("disabled_apps", [])
    if not isinstance(disabled, list):
        raise ConfigError("'disabled_apps' must be an array of application ids")
    settings.disabled_apps = [str(app) for app in disabled]

    settings.context = env.get("GRABLINK_CONTEXT") or None
    return settings

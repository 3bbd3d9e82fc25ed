"""
Configuration loader for gg.

Reads $XDG_CONFIG_HOME/gg/config.env (if present), then applies GG_*
environment overrides, validates the result and returns a GGConfig.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ggflow.lib import envparse
from ggflow.lib import validate
from ggflow.lib.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.env"
ENV_PREFIX = "GG_"
CONFIG_KEYS = ("SHOW_GIT", "REVERT_BACKUPS", "DEFAULT_REMOTE", "PR_DRAFT")


@dataclass
class GGConfig:
    """User configuration."""
    show_git: bool = False  # Log every git invocation
    revert_backups: bool = True  # Save .orig copies on revert
    default_remote: str = "origin"
    pr_draft: bool = False  # Open pull requests as drafts


def config_dir(environ: dict[str, str] | None = None) -> Path:
    """gg's directory under $XDG_CONFIG_HOME (default ~/.config)."""
    environ = os.environ if environ is None else environ
    base = environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return Path(base) / "gg"


def read_raw_config(environ: dict[str, str] | None = None) -> tuple[dict[str, str], str]:
    """Merge the config file with GG_* overrides. Returns (values, source description)."""
    environ = os.environ if environ is None else environ
    path = config_dir(environ) / CONFIG_FILENAME
    values: dict[str, str] = {}
    sources = []
    if path.exists():
        try:
            values = envparse.load_env(path)
        except ValueError as e:
            raise ConfigError(str(e)) from None
        sources.append(str(path))
        logger.debug(f"Loaded config from {path}")
    for key in CONFIG_KEYS:
        env_key = ENV_PREFIX + key
        if env_key in environ:
            values[key] = environ[env_key]
            if "environment" not in sources:
                sources.append("environment")
    return values, " + ".join(sources)


def load_config(environ: dict[str, str] | None = None) -> GGConfig:
    """
    Load and validate configuration.

    Raises:
        ConfigError: if the file can't be parsed or a value is invalid
    """
    values, source = read_raw_config(environ)
    validate.validate(values, "config", source)
    return GGConfig(
        show_git=envparse.parse_bool(values.get("SHOW_GIT", "false")),
        revert_backups=envparse.parse_bool(values.get("REVERT_BACKUPS", "true")),
        default_remote=values.get("DEFAULT_REMOTE", "origin"),
        pr_draft=envparse.parse_bool(values.get("PR_DRAFT", "false")),
    )

"""Configuration management for updo."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILE = Path(
    os.environ.get("UPDO_CONFIG", Path.home() / ".config" / "updo" / "updo.conf")
)

DEFAULT_TITLE = "Today"
DEFAULT_COMMIT_MESSAGE = "Update {path}"


@dataclass
class Config:
    """updo configuration."""

    default_title: str = DEFAULT_TITLE
    # {path} is replaced with the file's path relative to the repository root
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    git_binary: str = "git"


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config() -> Config:
    """Load configuration from updo.conf file."""
    config = Config()

    if not CONFIG_FILE.exists():
        return config

    for line in CONFIG_FILE.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "default_title":
                if value.strip():
                    config.default_title = value
                else:
                    logger.warning("Ignoring empty DEFAULT_TITLE in config")
            case "commit_message":
                config.commit_message = value
            case "git_binary":
                config.git_binary = value
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config

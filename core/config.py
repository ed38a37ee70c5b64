"""Configuration loader -- reads config.yaml + .env, validates with Pydantic.

Resolves ${ENV_VAR} references in YAML values from environment variables.
Every setting has a default, so a missing config file is not an error.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Default home directory for config.yaml and .env
DEFAULT_HOME = Path.home() / ".utilidesk"

_ENV_REF_RE = re.compile(r"\$\{(\w+)\}")


def _resolve_env_vars(value: Any) -> Any:
    """Recursively resolve ${ENV_VAR} references in config values."""
    if isinstance(value, str):
        def replacer(match: re.Match) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                logger.warning("Environment variable %s not set", var_name)
                return match.group(0)  # leave unresolved
            return env_value
        return _ENV_REF_RE.sub(replacer, value)
    elif isinstance(value, dict):
        return {k: _resolve_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_resolve_env_vars(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# Config models (Pydantic)
# ---------------------------------------------------------------------------

class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8321


class SitePage(BaseModel):
    path: str
    changefreq: str = "yearly"
    priority: float = 0.5


class SiteConfig(BaseModel):
    # Public origin used in robots.txt and sitemap.xml; empty means "use the request's origin"
    origin: str = ""
    pages: list[SitePage] = Field(default_factory=lambda: [
        SitePage(path="/", changefreq="yearly", priority=1.0),
        SitePage(path="/licenses", changefreq="yearly", priority=0.6),
    ])


class LicensesConfig(BaseModel):
    path: str = "static/licenses.json"


class LoggingConfig(BaseModel):
    level: str = "INFO"


class AppConfig(BaseModel):
    """Top-level application configuration."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)
    licenses: LicensesConfig = Field(default_factory=LicensesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def licenses_path(self) -> Path:
        """Inventory file location; relative paths are taken from the working directory."""
        return Path(self.licenses.path).expanduser()


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def get_home_dir() -> Path:
    """UtiliDesk home directory: $UTILIDESK_HOME, else ~/.utilidesk."""
    return Path(os.environ.get("UTILIDESK_HOME", str(DEFAULT_HOME))).expanduser()


def load_config(
    config_path: str | Path | None = None,
    env_path: str | Path | None = None,
) -> AppConfig:
    """Load configuration from YAML + .env files.

    1. Load .env into environment variables
    2. Load config.yaml and resolve ${ENV_VAR} references
    3. Apply UTILIDESK_HOST / UTILIDESK_PORT overrides
    4. Validate against Pydantic models
    """
    home = get_home_dir()

    if env_path is None:
        env_path = home / ".env"
    if config_path is None:
        config_path = home / "config.yaml"

    env_path = Path(env_path)
    config_path = Path(config_path)

    # Load .env
    if env_path.exists():
        load_dotenv(env_path)
        logger.info("Loaded environment from %s", env_path)
    else:
        logger.debug("No .env file at %s", env_path)

    # Load config.yaml
    raw_config: dict = {}
    if config_path.exists():
        with open(config_path) as f:
            raw_config = yaml.safe_load(f) or {}
        logger.info("Loaded config from %s", config_path)
    else:
        logger.warning("No config file at %s, using defaults", config_path)

    resolved = _resolve_env_vars(raw_config)

    server = dict(resolved.get("server") or {})
    if "UTILIDESK_HOST" in os.environ:
        server["host"] = os.environ["UTILIDESK_HOST"]
    if "UTILIDESK_PORT" in os.environ:
        server["port"] = os.environ["UTILIDESK_PORT"]
    if server:
        resolved["server"] = server

    return AppConfig(**resolved)

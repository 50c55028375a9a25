"""
Configuration loader for smartgit.

Reads an optional YAML file. If no config file exists, returns defaults.
Lookup order: $SMARTGIT_CONFIG, then <repo>/.smartgit.yaml.
"""

import json
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from enum import Enum
from pathlib import Path
from typing import Optional

import jsonschema
import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SMARTGIT_CONFIG"
TRACE_ENV_VAR = "SMARTGIT_TRACE"
REPO_CONFIG_NAME = ".smartgit.yaml"
SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "config.schema.json"


class DotfilePolicy(Enum):
    ASK = "ask"
    INCLUDE = "include"
    EXCLUDE = "exclude"


class ConfigError(Exception):
    """Config file exists but its contents are invalid."""

    def __init__(self, source: Optional[Path], message: str, key: str = "(root)"):
        self.source = source
        self.key = key
        super().__init__(f"{source or 'config'}: {key}: {message}")


@dataclass(frozen=True)
class SmartGitConfig:
    """Settings from .smartgit.yaml (all optional)."""
    remote: str = "origin"
    max_output_bytes: int = 1 << 20
    show_calls: bool = False
    preview_message: str = "(no message)"
    dotfiles: DotfilePolicy = DotfilePolicy.ASK


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


@lru_cache(maxsize=1)
def _load_schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text())


def validate_config(data, source: Optional[Path] = None) -> None:
    """
    Check parsed YAML against the packaged config schema.

    Raises:
        ConfigError: naming the file and the dotted path of the offending key
    """
    if not isinstance(data, dict):
        raise ConfigError(source, "top level must be a mapping")
    try:
        jsonschema.validate(instance=data, schema=_load_schema())
    except jsonschema.ValidationError as e:
        key = ".".join(str(p) for p in e.absolute_path) or "(root)"
        raise ConfigError(source, e.message, key) from None


def find_config_file(repo_path: Optional[Path]) -> Optional[Path]:
    """Return the config file to use, or None for defaults."""
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser()
    if repo_path is not None:
        candidate = Path(repo_path) / REPO_CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


def load_config(repo_path: Optional[Path] = None) -> SmartGitConfig:
    """Load smartgit config and return SmartGitConfig.

    A missing file or unparseable YAML yields defaults (the latter with a
    warning). YAML that parses but violates the schema raises ConfigError.
    """
    data: dict = {}
    config_path = find_config_file(repo_path)

    if config_path is not None:
        if not config_path.exists():
            logger.warning(f"Config file {config_path} not found, using defaults")
        else:
            try:
                data = yaml.safe_load(config_path.read_text()) or {}
            except yaml.YAMLError as e:
                logger.warning(f"Failed to parse {config_path}: {e}")
                data = {}

    validate_config(data, config_path)

    defaults = SmartGitConfig()
    return SmartGitConfig(
        remote=data.get("remote", defaults.remote),
        max_output_bytes=data.get("max_output_bytes", defaults.max_output_bytes),
        show_calls=data.get("show_calls", defaults.show_calls) or _env_flag(TRACE_ENV_VAR),
        preview_message=data.get("preview_message", defaults.preview_message),
        dotfiles=DotfilePolicy(data.get("dotfiles", defaults.dotfiles.value)),
    )

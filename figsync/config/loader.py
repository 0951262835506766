"""Locate, read and validate figsync.yaml.

Files are tried in order: the ``--config`` path, ``./figsync.yaml``, then
``~/.figsync/config.yaml``. The first file with content wins; if none has
any, the built-in defaults apply. String values may reference environment
variables as ``${NAME}`` or ``${NAME:-fallback}``.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import FigsyncConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG = "figsync.yaml"
USER_CONFIG = Path(".figsync") / "config.yaml"

_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest priority first."""
    paths = [Path(PROJECT_CONFIG), Path.home() / USER_CONFIG]
    if cli_path:
        paths.insert(0, Path(cli_path))
    return paths


def load_config(cli_path: str | None = None) -> FigsyncConfig:
    """Return the resolved configuration. Bad files raise ValueError."""
    if cli_path and not Path(cli_path).is_file():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in config_search_paths(cli_path):
        if not path.is_file():
            continue
        raw = _read_mapping(path)
        if raw is None:
            continue
        logger.debug("using config %s", path)
        try:
            return FigsyncConfig.model_validate(expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e

    return FigsyncConfig()


def _read_mapping(path: Path) -> dict[str, Any] | None:
    """Parse *path* as YAML. An empty file yields None."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping, got {type(raw).__name__}")
    return raw


def expand_env_vars(value: Any) -> Any:
    """Substitute ``${NAME}`` / ``${NAME:-fallback}`` in every nested string.

    An unset or empty variable takes the fallback, or the empty string.
    """
    if isinstance(value, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1)) or m.group(2) or "", value)
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


# Default YAML template for `figsync config init`
DEFAULT_CONFIG_TEMPLATE = """\
# figsync.yaml

# Figma API
figma:
  token_env: "FIGMA_API_TOKEN"   # env var holding a personal access token
  base_url: "https://api.figma.com"
  timeout: 60

# Screenshot export
export:
  scale: 2                       # 1 | 2 | 3 | 4
  format: "png"                  # png | jpg | svg | pdf
  screenshot_dir: "figma-screenshots"   # relative to each document
  embed_image_link: false        # add ![...](path) after the screenshot marker

# Specification extraction
specs:
  extract_size: true
  extract_colors: true
  extract_typography: true
  extract_spacing: false

# Document scanning
scan:
  directory: "."
  pattern: "**/*.mdx"
  exclude: [node_modules, .git, .github, dist, build]

# Logging
log_level: "info"                # debug | info | warn | error
log_format: "text"               # text | json
"""

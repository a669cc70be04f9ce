"""Locate and load warden.yaml.

Lookup order is an explicit path, then ``./warden.yaml``, then
``~/.warden/config.yaml``; the first file with content wins. A relative
``policy.path`` is taken relative to the directory of the file that set it,
so a user-global config can point at a policy next to it.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import WardenConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG = Path("warden.yaml")
USER_CONFIG = Path(".warden") / "config.yaml"

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def config_candidates(cli_path: str | None = None) -> list[Path]:
    candidates = [Path(cli_path)] if cli_path else []
    candidates += [PROJECT_CONFIG, Path.home() / USER_CONFIG]
    return candidates


def load_config(cli_path: str | None = None) -> WardenConfig:
    """Return the first config found, or defaults.

    Raises ValueError for unreadable YAML or values the models reject.
    """
    for path in config_candidates(cli_path):
        if not path.is_file():
            continue
        raw = _read_mapping(path)
        if raw is None:
            continue
        raw = _expand_env_vars(raw)
        _anchor_policy_path(raw, path.parent)
        try:
            config = WardenConfig.model_validate(raw)
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("Loaded config from %s", path)
        return config
    return WardenConfig()


def _read_mapping(path: Path) -> dict[str, Any] | None:
    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping, got {type(raw).__name__}")
    return raw


def _anchor_policy_path(raw: dict[str, Any], base: Path) -> None:
    policy = raw.get("policy")
    path = policy.get("path") if isinstance(policy, dict) else None
    if not isinstance(path, str) or not path:
        return
    target = Path(path).expanduser()
    policy["path"] = str(target if target.is_absolute() else base / target)


def _expand_env_vars(obj: Any) -> Any:
    """Substitute ``${VAR}`` in every string; unset variables become empty."""
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    return obj


# Written by `warden config init`
DEFAULT_CONFIG_TEMPLATE = """\
# warden.yaml

# Policy
policy:
  path: "policy.yaml"          # relative paths are resolved against this file

# CLI display
cli:
  show_wildcards_as: "*"

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""

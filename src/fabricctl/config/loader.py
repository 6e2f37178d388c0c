# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/config/loader.py

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from fabricctl.errors import ConfigurationError
from .models import FabricConfig

log = logging.getLogger("fabricctl")


def default_home() -> Path:
    """
    Resolve the state directory:

    1. FABRICCTL_HOME environment variable
    2. ~/.fabricctl
    """
    env = os.environ.get("FABRICCTL_HOME")
    if env:
        return Path(env).expanduser()
    return Path.home() / ".fabricctl"


def _find_config_file(home: Path) -> Path | None:
    env = os.environ.get("FABRICCTL_CONFIG")
    if env:
        p = Path(env).expanduser()
        if p.is_file():
            return p
        log.warning("FABRICCTL_CONFIG=%s does not exist - using defaults", env)
        return None

    p = home / "config.yaml"
    if p.is_file():
        return p
    return None


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    raw = path.read_text()
    expanded = os.path.expandvars(raw)
    data = yaml.safe_load(expanded) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a mapping at the top level")
    return data


def load_config(home: str | Path | None = None) -> FabricConfig:
    """
    Load and validate the operator config.

    A missing file is not an error; every field has a default. ``${ENV_VAR}``
    placeholders inside the file are resolved at load time.
    """
    home = Path(home) if home is not None else default_home()
    path = _find_config_file(home)
    if path is None:
        log.debug("No config.yaml under %s - using defaults", home)
        return FabricConfig()

    log.debug("Loading config from %s", path)
    try:
        return FabricConfig.model_validate(_load_yaml(path))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"{path}: invalid YAML: {exc}") from exc
    except ValidationError as exc:
        raise ConfigurationError(f"{path}: {exc}") from exc

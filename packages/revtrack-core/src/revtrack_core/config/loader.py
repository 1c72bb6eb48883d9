"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import RevtrackConfig


def load_config(cli_path: str | None = None) -> RevtrackConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./revtrack.yaml"),
        Path.home() / ".revtrack" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                if not isinstance(raw, dict):
                    raise ValueError(
                        f"Invalid config in {path}: expected a mapping at the top level, "
                        f"got {type(raw).__name__}"
                    )
                raw = _expand_env_vars(raw)
                return RevtrackConfig.model_validate(raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return RevtrackConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `revtrack config init`
DEFAULT_CONFIG_TEMPLATE = """\
# revtrack.yaml

# Staleness checks
watch:
  policy: "auto"               # auto | default | coarse
  poll_interval: 1.0           # seconds between checks in `revtrack watch`
  include: ["*.py"]            # basename globs tracked by `revtrack track`
  ignore_patterns: [".git", "node_modules", "__pycache__", ".venv", "build", "dist", ".tox", ".revtrack"]

# Where tracker state is kept, relative to the project root
state:
  directory: ".revtrack"
  filename: "state.json"

# Files relocated after they were first tracked (nominal path: actual path)
# alternates:
#   "/opt/app/src/main.py": "${HOME}/relocated/src/main.py"

# Logging
log_level: "info"              # debug | info | warn | error
"""

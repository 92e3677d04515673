from pathlib import Path

import yaml
from pydantic import ValidationError

from folio.config.models import FolioConfig


class ConfigError(ValueError):
    """Config file exists but cannot be parsed or validated."""


def _extract_yaml(content: str) -> str:
    """Return the first ```yaml fenced block, or the whole text if there is none."""
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    return "\n".join(yaml_lines) if found_block else content


def parse_config(content: str) -> FolioConfig:
    """
    Validate config text.
    Raises ConfigError if the YAML or the schema is invalid.
    """
    try:
        data = yaml.safe_load(_extract_yaml(content))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in config file: {e}") from e

    # An empty file means all defaults
    if data is None:
        data = {}

    try:
        return FolioConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed:\n{e}") from e


def load_config(path: Path) -> FolioConfig:
    """
    Load and validate the config file.
    Raises FileNotFoundError if file missing.
    Raises ConfigError if YAML or schema invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found at: {path}")

    with open(path) as f:
        content = f.read()

    return parse_config(content)

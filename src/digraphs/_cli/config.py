"""Configuration loading from pyproject.toml."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ConfigError(Exception):
    """Error in digraphs configuration."""


class DigraphsConfig(BaseModel):
    """Configuration loaded from the ``[tool.digraphs]`` table of pyproject.toml.

    Attributes:
        edge_separator: Token separating source and target in an edge argument.
        directed: Whether graphs built from command-line edges are directed.
        allow_self_loops: Whether graphs built from command-line edges allow self-loops.
        project_root: Directory containing the pyproject.toml, if one was found.

    """

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    edge_separator: str = Field(default="->", min_length=1)
    directed: bool = True
    allow_self_loops: bool = True
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def load_config(pyproject_path: Path) -> DigraphsConfig:
    """Load and validate [tool.digraphs] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed DigraphsConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    tool_section = data.get("tool", {})
    if not isinstance(tool_section, dict):
        msg = "Invalid [tool] configuration: expected a table"
        raise ConfigError(msg)
    section = tool_section.get("digraphs", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.digraphs] configuration: expected a table"
        raise ConfigError(msg)
    if "project_root" in section:
        msg = "Invalid [tool.digraphs].project_root: this key is derived, not configurable"
        raise ConfigError(msg)

    try:
        return DigraphsConfig.model_validate({**section, "project_root": project_root})
    except ValidationError as e:
        msg = f"Invalid [tool.digraphs] configuration in {pyproject_path}: {e}"
        raise ConfigError(msg) from e


def get_config() -> DigraphsConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        DigraphsConfig (defaults if no pyproject.toml or no [tool.digraphs] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return DigraphsConfig()
    return load_config(pyproject_path)

"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from depq._graph import DEFAULT_MAX_DEPTH


class ConfigError(Exception):
    """Error in depq configuration."""


@dataclass(slots=True, frozen=True)
class DepqConfig:
    """Configuration loaded from the [tool.depq] table of pyproject.toml."""

    default_max_depth: int = DEFAULT_MAX_DEPTH


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


def _parse_default_max_depth(value: object) -> int:
    # bool is a subclass of int, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        msg = "Invalid [tool.depq].default-max-depth: expected integer"
        raise ConfigError(msg)
    if value < 1:
        msg = f"Invalid [tool.depq].default-max-depth: expected a positive integer, got {value}"
        raise ConfigError(msg)
    return value


def load_config(pyproject_path: Path) -> DepqConfig:
    """Load and validate [tool.depq] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed DepqConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    depq_section = data.get("tool", {}).get("depq", {})
    if not isinstance(depq_section, dict):
        msg = "Invalid [tool.depq] configuration: expected a table"
        raise ConfigError(msg)

    default_max_depth = DEFAULT_MAX_DEPTH
    if "default-max-depth" in depq_section:
        default_max_depth = _parse_default_max_depth(depq_section["default-max-depth"])

    return DepqConfig(default_max_depth=default_max_depth)


def get_config() -> DepqConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        DepqConfig (defaults if no pyproject.toml or no [tool.depq] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return DepqConfig()
    return load_config(pyproject_path)

"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Error in relsort configuration."""


@dataclass(slots=True, frozen=True)
class RelsortConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    manifest: Path | None = None
    output: Path | None = None
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


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.relsort].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def load_config(pyproject_path: Path) -> RelsortConfig:
    """Load and validate [tool.relsort] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed RelsortConfig

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

    section = data.get("tool", {}).get("relsort", {})
    if not section:
        return RelsortConfig(project_root=project_root)

    return RelsortConfig(
        manifest=_parse_path(section, "manifest", project_root),
        output=_parse_path(section, "output", project_root),
        project_root=project_root,
    )


def get_config() -> RelsortConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        RelsortConfig (may be empty if no pyproject.toml or no [tool.relsort] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return RelsortConfig()
    return load_config(pyproject_path)

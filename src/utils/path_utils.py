"""Path utilities for the fuzzy row grouper."""

from pathlib import Path
from typing import Union


def ensure_directory_exists(directory_path: Union[str, Path]) -> None:
    """Create directory if it doesn't exist.

    Args:
        directory_path: Path to the directory to create

    """
    Path(directory_path).mkdir(parents=True, exist_ok=True)


def get_config_path(filename: str = "settings.yaml") -> Path:
    """Get the path to a config file.

    Args:
        filename: Name of the config file (default: settings.yaml)

    Returns:
        Path to config/<filename> in the nearest ancestor of the working
        directory that has one, else the relative path config/<filename>

    """
    current = Path.cwd()

    # Look for config directory in current and parent directories
    for parent in [current] + list(current.parents):
        config_dir = parent / "config"
        if config_dir.exists() and (config_dir / filename).exists():
            return config_dir / filename

    # Fallback: assume we're in project root
    return Path("config") / filename

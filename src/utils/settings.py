"""
Settings management for the fuzzy row grouper.

Settings are an explicit, serializable object owned by the caller and passed
into the code that starts grouping runs. Nothing in the core reads global
configuration.
"""

from __future__ import annotations

import copy
import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from src.similarity.edit_distance import ENGINES
from src.utils.errors import SettingsError
from src.utils.logging_utils import LOG_LEVELS, get_logger
from src.utils.path_utils import ensure_directory_exists

__all__ = [
    "AppSettings",
    "GroupingSettings",
    "clamp_similarity",
    "load_settings",
    "save_settings",
    "validate_settings",
]

logger = get_logger(__name__)

DEFAULTS: Dict[str, Any] = {
    "grouping": {
        "column": 0,
        "similarity": 100,  # 100 = exact duplicates only
        "case_sensitive": True,
        "strict_partition": False,
        "engine": "python",
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}


def clamp_similarity(value: Union[int, float]) -> int:
    """Clamp a similarity threshold into the 0-100 range."""
    return max(0, min(100, int(value)))


@dataclass
class GroupingSettings:
    """Parameters of a grouping run."""

    column: Union[int, str] = 0
    similarity: int = 100
    case_sensitive: bool = True
    strict_partition: bool = False
    engine: str = "python"


@dataclass
class AppSettings:
    """Top-level application settings."""

    grouping: GroupingSettings = field(default_factory=GroupingSettings)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the nested layout used in settings.yaml."""
        return {
            "grouping": asdict(self.grouping),
            "logging": {"level": self.log_level, "file": self.log_file},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppSettings":
        """Create from a (possibly partial) nested settings dict.

        Raises:
            SettingsError: If a grouping value has a type or name that no
                grouping run could use

        """
        merged = _deep_merge(copy.deepcopy(DEFAULTS), data or {})
        for section in ("grouping", "logging"):
            if not isinstance(merged[section], dict):
                raise SettingsError(f"{section} must be a mapping, got {merged[section]!r}")
        grouping = merged["grouping"]
        _check_grouping(grouping)
        return cls(
            grouping=GroupingSettings(
                column=grouping["column"],
                similarity=grouping["similarity"],
                case_sensitive=bool(grouping["case_sensitive"]),
                strict_partition=bool(grouping["strict_partition"]),
                engine=str(grouping["engine"]),
            ),
            log_level=str(merged["logging"]["level"]),
            log_file=merged["logging"]["file"],
        )


def _check_grouping(grouping: Dict[str, Any]) -> None:
    similarity = grouping["similarity"]
    if (
        isinstance(similarity, bool)
        or not isinstance(similarity, (int, float))
        or not math.isfinite(similarity)
    ):
        raise SettingsError(f"grouping.similarity must be a number, got {similarity!r}")

    column = grouping["column"]
    if isinstance(column, bool) or not isinstance(column, (int, str)):
        raise SettingsError(f"grouping.column must be a header name or index, got {column!r}")

    if grouping["engine"] not in ENGINES:
        raise SettingsError(
            f"grouping.engine must be one of {', '.join(ENGINES)}, got {grouping['engine']!r}"
        )


def _deep_merge(base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in update.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def load_settings(path: Union[str, Path]) -> AppSettings:
    """Load settings from a YAML file merged over defaults.

    Args:
        path: Path to settings YAML file

    Returns:
        AppSettings (defaults if the file does not exist)

    Raises:
        SettingsError: If the file exists but is not valid YAML or not a mapping

    """
    try:
        with open(path, encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Settings file not found: {path}. Using defaults.")
        return AppSettings()
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in settings file {path}: {e}") from e

    if not isinstance(user_config, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping")

    logger.debug(f"Settings loaded from {path}")
    return AppSettings.from_dict(user_config)


def save_settings(settings: AppSettings, path: Union[str, Path]) -> None:
    """Persist settings as YAML.

    Args:
        settings: Settings to save
        path: Destination file; parent directories are created

    """
    path = Path(path)
    ensure_directory_exists(path.parent)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(settings.to_dict(), f, sort_keys=False)
    logger.info(f"Settings saved to {path}")


def validate_settings(settings: AppSettings) -> List[str]:
    """Returns list of validation warnings.

    Args:
        settings: Settings to validate

    Returns:
        List of validation warning messages.
    """
    warnings = []
    grouping = settings.grouping

    similarity = grouping.similarity
    if isinstance(similarity, bool) or not isinstance(similarity, int) or not 0 <= similarity <= 100:
        warnings.append(f"grouping.similarity must be int 0-100, got {similarity}")

    if grouping.engine not in ENGINES:
        warnings.append(f"grouping.engine must be one of {', '.join(ENGINES)}, got {grouping.engine}")

    if isinstance(grouping.column, int) and grouping.column < 0:
        warnings.append(f"grouping.column index must be >= 0, got {grouping.column}")

    if settings.log_level.upper() not in LOG_LEVELS:
        warnings.append(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {settings.log_level}")

    return warnings

from dataclasses import dataclass, field, is_dataclass
from pathlib import Path
import sys
import tomllib
from typing import Any, ClassVar, TypeVar

from loguru import logger

# --- Constants ---
APP_NAME = "interactivechart"
# Use a platform-agnostic user config directory
if sys.platform == "win32":
    CONFIG_DIR = Path.home() / "AppData" / "Roaming" / APP_NAME
else:
    CONFIG_DIR = Path.home() / ".config" / APP_NAME

CONFIG_FILE = CONFIG_DIR / "config.toml"

DEFAULT_CONFIG_TEXT = """\
# InteractiveChart Configuration File
# Uncomment and edit values to override the defaults.

# [general]
# log_level_console = "INFO"
# log_level_file = "DEBUG"

# [drag]
# hit_test = "threshold"      # or "weighted"
# max_primary_delta = 15.0    # multiplied by 36 (seconds) on "timed"
# max_secondary_delta = 15.0
# primary_weight = 0.5
# secondary_weight = 0.5
# pick_up_on_move = false

# [chart]
# dataset = "simple"          # or "timed"
# axis_step = 100.0
# marker_size = 30
# smooth_line = true
"""

# --- Dataclass Models for Settings ---
T = TypeVar("T")


@dataclass
class GeneralSettings:
    """General application settings."""

    log_level_console: str = "INFO"
    log_level_file: str = "DEBUG"
    log_directory: str = str(CONFIG_DIR / "logs")


@dataclass
class DragSettings:
    """How pointer gestures pick and move points."""

    # "threshold" or "weighted"
    hit_test: str = "threshold"
    max_primary_delta: float = 15.0
    max_secondary_delta: float = 15.0
    primary_weight: float = 0.5
    secondary_weight: float = 0.5
    # Keep trying to grab a point on each move if the press missed.
    pick_up_on_move: bool = False


@dataclass
class ChartSettings:
    """Chart content and appearance."""

    # "simple" or "timed"
    dataset: str = "simple"
    axis_step: float = 100.0
    marker_size: int = 30
    smooth_line: bool = True


@dataclass
class Settings:
    """Root container for all application settings."""

    general: GeneralSettings = field(default_factory=GeneralSettings)
    drag: DragSettings = field(default_factory=DragSettings)
    chart: ChartSettings = field(default_factory=ChartSettings)

    _instance: ClassVar["Settings | None"] = None

    @classmethod
    def get_instance(cls) -> "Settings":
        """Returns the singleton instance of the Settings object."""
        if cls._instance is None:
            cls._instance = load_config()
        return cls._instance


def _coerce(default: Any, value: Any) -> Any:
    """Converts `value` to the type of `default`, or returns None if it does not fit."""
    expected = type(default)
    if isinstance(value, bool) and expected is not bool:
        return None
    if expected is float and isinstance(value, int):
        return float(value)
    if isinstance(value, expected):
        return value
    return None


def _update_dataclass(dc_instance: T, data: dict[str, Any]) -> T:
    """Recursively updates a dataclass instance from a dictionary."""
    for f in field_names(dc_instance):
        if f not in data:
            continue
        field_value = getattr(dc_instance, f)
        if is_dataclass(field_value):
            if isinstance(data[f], dict):
                _update_dataclass(field_value, data[f])
            else:
                logger.warning(f"Ignoring non-table value for config section '{f}'.")
        else:
            value = _coerce(field_value, data[f])
            if value is None:
                logger.warning(
                    f"Ignoring config value {f}={data[f]!r}; expected "
                    f"{type(field_value).__name__}. Keeping default {field_value!r}."
                )
            else:
                setattr(dc_instance, f, value)
    return dc_instance


def field_names(dc_instance: Any) -> list[str]:
    """Helper to get field names from a dataclass instance."""
    return [f.name for f in dc_instance.__dataclass_fields__.values()]


def load_config(path: Path = CONFIG_FILE) -> Settings:
    """Loads settings from a TOML file, merging them with defaults.

    If the config file does not exist, it creates one with default values.

    Args:
        path: The path to the configuration file.

    Returns:
        A populated Settings object.
    """
    settings_obj = Settings()
    logger.info(f"Loading configuration from '{path}'...")

    if not path.exists():
        logger.warning(f"Configuration file not found. Creating default at '{path}'.")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(DEFAULT_CONFIG_TEXT, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to create default config file: {e}")
        return settings_obj

    try:
        with path.open("rb") as f:
            user_config = tomllib.load(f)
        _update_dataclass(settings_obj, user_config)
        logger.success("Successfully loaded user configuration.")
    except tomllib.TOMLDecodeError as e:
        logger.error(f"Error decoding TOML from '{path}': {e}")
        logger.warning("Using default settings due to configuration error.")
        settings_obj = Settings()
    except OSError as e:
        logger.error(f"Could not read configuration file '{path}': {e}")
        logger.warning("Using default settings due to configuration error.")

    return settings_obj

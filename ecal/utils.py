import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from .errors import EventFileError, InvalidConfig
from .models import CalendarConfig, Settings

CONFIG_DIR = Path("config")
DEFAULT_SETTINGS = CONFIG_DIR / "settings.yaml"

logger = logging.getLogger(__name__)


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Loads display defaults from a YAML file.

    An explicitly given path must exist; a missing default file just
    means built-in defaults.
    """
    if path is None:
        path = DEFAULT_SETTINGS
        if not path.exists():
            logger.debug("No settings file at %s, using defaults", path)
            return Settings()
    elif not path.exists():
        raise FileNotFoundError(f"Settings file not found at {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise InvalidConfig(f"{path}: expected a mapping of settings")
    try:
        return Settings(**data)
    except ValidationError as e:
        raise InvalidConfig(f"{path}: {e}") from e


def build_config(settings: Settings, **overrides: Any) -> CalendarConfig:
    """Merges settings with explicit overrides; None overrides are ignored."""
    values: Dict[str, Any] = settings.model_dump(exclude={"events_file"})
    values.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return CalendarConfig(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'config'}: {err['msg']}" for err in e.errors()
        )
        raise InvalidConfig(problems) from e


def read_event_lines(path: Path) -> List[str]:
    """
    Reads the whole event file.

    Raises FileNotFoundError if it is missing and EventFileError if it is
    not valid UTF-8.
    """
    if not path.exists():
        raise FileNotFoundError(f"Event file not found at {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().splitlines()
    except UnicodeDecodeError as e:
        raise EventFileError(f"{path} is not valid UTF-8 (byte {e.start}: {e.reason})") from e

"""Configuration management for the grocer shopping list service."""
import os
from dataclasses import dataclass
from typing import Final, Optional
from pathlib import Path

from dotenv import load_dotenv

from grocer.utilities.constants import DEFAULT_AISLE_FILE, DEFAULT_PANTRY_FILE

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()


def _optional_path(value: Optional[str]) -> Optional[Path]:
    if value is None or not value.strip():
        return None
    return Path(value.strip())


def _default_config_file(base_path: Path, relative: str) -> Optional[Path]:
    candidate = base_path / relative
    return candidate if candidate.exists() else None


@dataclass(frozen=True)
class AppSettings:
    """Where recipes, the reference store and the aisle/pantry files live."""
    base_path: Path
    aisle_path: Optional[Path] = None
    pantry_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "AppSettings":
        base_path = Path(os.getenv('GROCER_BASE_PATH') or os.getcwd()).resolve()
        aisle_path = _optional_path(os.getenv('GROCER_AISLE_PATH'))
        if aisle_path is None:
            aisle_path = _default_config_file(base_path, DEFAULT_AISLE_FILE)
        pantry_path = _optional_path(os.getenv('GROCER_PANTRY_PATH'))
        if pantry_path is None:
            pantry_path = _default_config_file(base_path, DEFAULT_PANTRY_FILE)
        return cls(base_path=base_path, aisle_path=aisle_path, pantry_path=pantry_path)


def get_settings() -> AppSettings:
    """FastAPI dependency; settings are re-read per request so env changes apply."""
    return AppSettings.from_env()


__all__ = ['APP_HOST', 'APP_PORT', 'LOG_LEVEL', 'AppSettings', 'get_settings']

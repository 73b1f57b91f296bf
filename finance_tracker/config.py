"""
Configuration

Settings are read from environment variables (a local .env file is
loaded first).
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Load environment variables
load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Recommendation engine settings"""
    recommendation_limit: int = 5
    fuzzy_window: int = 200
    statement_timeout_ms: int = 0


MAX_FUZZY_WINDOW = 200


def _read_int(env: Mapping[str, str], name: str, default: int,
              maximum: Optional[int] = None) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise ConfigurationError(f"{name} must be >= 0, got {value}")
    if maximum is not None and value > maximum:
        raise ConfigurationError(f"{name} must be <= {maximum}, got {value}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from the environment

    Args:
        env: Mapping to read from (default: os.environ)

    Returns:
        Settings with defaults for unset variables
    """
    env = os.environ if env is None else env
    return Settings(
        recommendation_limit=_read_int(env, 'RECOMMENDATION_LIMIT', 5),
        fuzzy_window=_read_int(env, 'FUZZY_WINDOW', MAX_FUZZY_WINDOW, maximum=MAX_FUZZY_WINDOW),
        statement_timeout_ms=_read_int(env, 'DB_STATEMENT_TIMEOUT_MS', 0),
    )

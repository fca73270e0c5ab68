"""Runtime settings, read from PYFLOW_* environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import EnvVars


class Settings(BaseSettings):
    log_level: str = "WARNING"
    strict_cycles: bool = False
    git_author_fallback: bool = True

    model_config = SettingsConfigDict(env_prefix=EnvVars.PREFIX, extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings (cached; call ``cache_clear`` in tests)."""
    return Settings()

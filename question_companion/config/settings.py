"""
Configuration classes, singletons, and loaders for Question Companion.
"""
import copy
import threading
from pathlib import Path
from typing import Optional, List

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


# =============================================================================
# CONFIGURATION MODELS
# =============================================================================

class CopyConfig(BaseModel):
    reset_delay_ms: int = 2400  # how long the "copied" flag stays up
    clipboard_backend: str = "system"  # "system" or "memory"


class KeywordsConfig(BaseModel):
    catalog: List[str] = Field(default_factory=lambda: [
        "frontend", "backend", "product",
        "strategy", "process", "people",
    ])


class WebConfig(BaseModel):
    title: str = "Question Companion"
    session_ttl_minutes: int = 60


class LoggingConfig(BaseModel):
    level: str = "INFO"
    file: Optional[str] = "logs/companion.log"
    max_file_size: int = 10
    backup_count: int = 5


class Config(BaseModel):
    """Main configuration model"""
    copy_action: CopyConfig = Field(default_factory=CopyConfig, alias="copy")
    keywords: KeywordsConfig = Field(default_factory=KeywordsConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        populate_by_name = True


# =============================================================================
# ENVIRONMENT SETTINGS
# =============================================================================

class Settings(BaseSettings):
    """Environment-based settings"""
    config_path: str = Field(default="config.yaml", alias="COMPANION_CONFIG")
    clipboard_backend: Optional[str] = Field(default=None, alias="COMPANION_CLIPBOARD")
    log_level: Optional[str] = Field(default=None, alias="COMPANION_LOG_LEVEL")

    class Config:
        env_file = ".env"
        extra = "ignore"


# =============================================================================
# CONFIGURATION LOADER
# =============================================================================

def load_config(config_path: str = "config.yaml") -> Config:
    """Load configuration from YAML file"""
    path = Path(config_path)

    if path.exists():
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return Config(**data)

    # Check for example config
    example_path = Path("config.example.yaml")
    if example_path.exists():
        print(f"⚠️  No {config_path} found. Using config.example.yaml")
        with open(example_path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return Config(**data)

    return Config()


def get_settings() -> Settings:
    """Get environment settings"""
    return Settings()


# Global instances
_config: Optional[Config] = None
_settings: Optional[Settings] = None
_config_lock = threading.Lock()
_settings_lock = threading.Lock()


def get_config() -> Config:
    """Get global config instance, with env var overrides applied."""
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:
                settings = get_env_settings()
                _config = load_config(settings.config_path)
                _apply_env_overrides(_config, settings)
    return _config


def _apply_env_overrides(config: Config, settings: Settings) -> None:
    """Override config file values with env vars when set."""
    if settings.clipboard_backend:
        config.copy_action.clipboard_backend = settings.clipboard_backend
    if settings.log_level:
        config.logging.level = settings.log_level


def get_env_settings() -> Settings:
    """Get global settings instance"""
    global _settings
    if _settings is None:
        with _settings_lock:
            if _settings is None:
                _settings = get_settings()
    return _settings


def set_config(config: Config) -> None:
    """Replace the global config singleton (thread-safe)."""
    global _config
    with _config_lock:
        _config = config


def apply_overrides(base: Config, overrides: dict) -> Config:
    """
    Deep-copy *base* config and apply dotted-key overrides.

    Keys use dot notation matching the YAML layout, e.g.
    ``"copy.reset_delay_ms": 1000``.  String values are coerced to
    the target field's type (int / float / bool).  Unknown sections
    raise ``KeyError``.
    """
    data = copy.deepcopy(base.model_dump(by_alias=True))

    for dotted_key, value in overrides.items():
        parts = dotted_key.split(".")
        target = data
        for part in parts[:-1]:
            if part not in target or not isinstance(target[part], dict):
                raise KeyError(f"Unknown config section: {dotted_key}")
            target = target[part]
        field_name = parts[-1]
        if field_name not in target:
            raise KeyError(f"Unknown config key: {dotted_key}")

        # Type coercion: inspect the current value to decide target type
        current = target.get(field_name)
        if isinstance(value, str):
            if isinstance(current, bool):
                value = value.lower() in ("true", "1", "yes", "on")
            elif isinstance(current, int):
                value = int(value)
            elif isinstance(current, float):
                value = float(value)
            elif isinstance(current, list):
                value = [v.strip() for v in value.split(",") if v.strip()]

        target[field_name] = value

    return Config(**data)

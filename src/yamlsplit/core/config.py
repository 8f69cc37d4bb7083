from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Dict, Any
from pathlib import Path


class Settings(BaseSettings):
    # Input handling
    YAMLSPLIT_ENCODING: str = "auto"  # auto|utf-8|utf-16-be|utf-16-le|utf-32-be|utf-32-le
    YAMLSPLIT_READ_SIZE: int = Field(
        default=65536,
        gt=0,
        description="Buffer size used when reading the input file or stdin",
    )

    # Output
    YAMLSPLIT_OUTPUT_FORMAT: str = "delimited"  # delimited|jsonl

    # Observability
    LOG_FORMAT: str = "auto"  # json|plain|auto
    LOG_LEVEL: str = "warning"  # debug|info|warning|error

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @classmethod
    def load_config(cls, config_file: Optional[str] = None) -> "Settings":
        """Load settings with config file -> env -> CLI precedence."""
        config_data: Dict[str, Any] = {}

        # Find config file
        if config_file:
            config_path: Optional[Path] = Path(config_file)
        else:
            # Auto-discover .yamlsplit.{yaml,yml,toml}
            for ext in ["yaml", "yml", "toml"]:
                config_path = Path(f".yamlsplit.{ext}")
                if config_path.exists():
                    break
            else:
                config_path = None

        # Load config file if found
        if config_path and config_path.exists():
            if config_path.suffix in [".yaml", ".yml"]:
                import yaml

                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
            elif config_path.suffix == ".toml":
                import tomllib

                with open(config_path, "rb") as f:
                    config_data = tomllib.load(f)

        # Environment variables take precedence over the config file
        env_settings = cls()
        merged = {
            key: value
            for key, value in config_data.items()
            if key in cls.model_fields
            and key not in env_settings.model_fields_set
        }
        return cls(**merged)


# Default settings - will be replaced by load_config() during CLI startup
SETTINGS = Settings()

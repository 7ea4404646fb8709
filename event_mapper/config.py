"""
Event mapper configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import sys

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MapperConfig(BaseSettings):
    """
    Configuration management for the event mapper.
    """

    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOGGING_CONFIG_PATH: str = Field(
        default="logging.yml", description="YAML logging definition file path"
    )

    # Body handling
    EVENT_MAPPER_MEMOIZE_BODY: bool = Field(
        default=True, description="Parse the body once per extraction call"
    )
    EVENT_MAPPER_DECODE_BASE64_BODY: bool = Field(
        default=True, description="Base64-decode bodies flagged with isBase64Encoded"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = MapperConfig()
except Exception as e:
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise

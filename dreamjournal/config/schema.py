"""Configuration schema using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings

from dreamjournal.utils.helpers import expand_path


class Base(BaseModel):
    """Base model that accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JournalConfig(Base):
    """Journal storage and list configuration."""

    data_file: str = "dreams.json"  # Relative paths live in ~/.dreamjournal
    window_size: int = Field(default=7, ge=1, le=20)  # Records visible side by side


class InterfaceConfig(Base):
    """Terminal interface configuration."""

    tick_rate_ms: int = Field(default=250, ge=10)  # Maximum redraw latency
    commit_key: int = Field(default=1, ge=1, le=12)  # Function key that commits the experience text (F1)
    colors: bool = True
    escape_delay_ms: int = Field(default=25, ge=0)  # How long curses waits to tell Esc from a sequence


class LoggingConfig(Base):
    """Log sink configuration."""

    level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: str = "dreamjournal.log"
    rotation: str = "1 MB"


class Config(BaseSettings):
    """Root configuration for dreamjournal."""

    journal: JournalConfig = Field(default_factory=JournalConfig)
    interface: InterfaceConfig = Field(default_factory=InterfaceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def data_path(self) -> Path:
        """Get expanded path of the journal file."""
        return expand_path(self.journal.data_file)

    @property
    def log_path(self) -> Path:
        """Get expanded path of the log file."""
        return expand_path(self.logging.file)

    model_config = ConfigDict(env_prefix="DREAMJOURNAL_", env_nested_delimiter="__")

"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from racko.errors import ConfigurationError


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class GameConfig(BaseModel):
    """Game configuration.

    Frozen once built so the deck and every tray share the same card and
    slot counts for the whole session.
    """

    model_config = ConfigDict(frozen=True)

    card_count: int = Field(default=60, ge=1)
    slot_count: int = Field(default=10, ge=1)
    ai_turn_delay: float = Field(default=1.0, ge=0)  # Seconds, display only
    human_turn_delay: float = Field(default=1.0, ge=0)
    seed: int | None = None

    @model_validator(mode="after")
    def _check_counts(self) -> "GameConfig":
        if self.card_count < self.slot_count:
            raise ValueError(
                f"card_count ({self.card_count}) must be at least "
                f"slot_count ({self.slot_count})"
            )
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_trays: bool = False

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level


class GameLogConfig(BaseModel):
    """Configuration for the JSONL game log."""

    enabled: bool = False
    output_path: str = "logs"


class Config(BaseModel):
    """Root configuration."""

    game: GameConfig = GameConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogConfig = GameLogConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from a YAML file.

    A missing path or an empty file gives the defaults. Sections left out
    of the file keep their defaults too.

    Raises:
        ConfigurationError: If the file does not hold a YAML mapping
        pydantic.ValidationError: If a value is out of range
    """
    if path is None or not Path(path).is_file():
        return Config()

    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a mapping of config sections")
    return Config.model_validate(data)

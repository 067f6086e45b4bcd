"""Core configuration settings for quoterank."""

import math
import logging
from pathlib import Path
from typing import Optional, Dict, List
from dataclasses import dataclass, field
from enum import Enum

from quoterank.config.scoring import ScoringConfig, ScoringConstants, ScoringWeights
from quoterank.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

class LogLevel(Enum):
    """Supported logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

class OutputFormat(Enum):
    """Supported output formats."""
    JSON = "json"
    CSV = "csv"

@dataclass
class ScoringSettings:
    """Scoring weights, currency table and substitution constants."""
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    currency_rates: Dict[str, float] = field(default_factory=dict)
    constants: ScoringConstants = field(default_factory=ScoringConstants)

    def validate(self) -> None:
        """Validate scoring settings."""
        for name, value in self.weights.to_dict().items():
            if not math.isfinite(value) or value < 0:
                raise ConfigurationError(
                    f"weight '{name}' must be a non-negative number, got {value}",
                    config_field=f"scoring.weights.{name}"
                ).add_suggestion("Weights are relative; use 0 to ignore a criterion")

        for currency, rate in self.currency_rates.items():
            # 0 means "use default_currency_rate"
            if not math.isfinite(rate) or rate < 0:
                raise ConfigurationError(
                    f"currency rate for {currency} must be a non-negative finite number, got {rate}",
                    config_field=f"scoring.currency_rates.{currency}"
                )

        if self.constants.missing_item_penalty <= 0:
            raise ConfigurationError(
                "missing_item_penalty must be positive",
                config_field="scoring.constants.missing_item_penalty"
            ).add_suggestion("Use a value far above any realistic unit price")

        if self.constants.unknown_lead_time_days <= 0:
            raise ConfigurationError(
                "unknown_lead_time_days must be positive",
                config_field="scoring.constants.unknown_lead_time_days"
            )

        for name in ("default_defect_rate", "default_on_time_rate"):
            value = getattr(self.constants, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(
                    f"{name} must be within [0, 1], got {value}",
                    config_field=f"scoring.constants.{name}"
                )

    def to_scoring_config(self) -> ScoringConfig:
        return ScoringConfig(
            weights=self.weights,
            currency_rates=dict(self.currency_rates),
            constants=self.constants,
        )

@dataclass
class OutputSettings:
    """Output-related configuration."""
    format: OutputFormat = OutputFormat.JSON
    output_dir: Optional[Path] = None
    indent: int = 2
    include_raw: bool = False

    def validate(self) -> None:
        """Validate output settings."""
        if self.indent < 0:
            raise ConfigurationError(
                "indent must be non-negative",
                config_field="output.indent"
            )

@dataclass
class LoggingSettings:
    """Logging configuration."""
    level: LogLevel = LogLevel.INFO
    log_dir: Optional[Path] = None
    console_output: bool = True
    format_string: str = "{asctime} {levelname:<7} {name} - {message}"

    def validate(self) -> None:
        """Validate logging settings."""
        if self.log_dir and self.log_dir.exists() and not self.log_dir.is_dir():
            raise ConfigurationError(
                f"Log path is not a directory: {self.log_dir}",
                config_field="logging.log_dir"
            ).add_suggestion("Point --log-dir at a directory")

@dataclass
class Settings:
    """Main configuration settings for quoterank."""

    scoring: ScoringSettings = field(default_factory=ScoringSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    # Runtime settings
    input_files: List[Path] = field(default_factory=list)
    input_directory: Optional[Path] = None
    recursive: bool = False
    config_path: Optional[Path] = None

    # Debug/development settings
    debug_mode: bool = False
    dry_run: bool = False

    def validate(self) -> None:
        """Validate all configuration settings."""
        try:
            self.scoring.validate()
            self.output.validate()
            self.logging.validate()

            self._validate_input_sources()
            self._validate_output()

        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(
                f"Configuration validation failed: {str(e)}"
            ) from e

    def _validate_input_sources(self) -> None:
        """Validate input file/directory configuration."""
        has_files = bool(self.input_files)
        has_directory = self.input_directory is not None

        if not has_files and not has_directory:
            raise ConfigurationError(
                "Either input_files or input_directory must be specified",
                config_field="input_sources"
            ).add_suggestion("Provide --input-dir or specific request files")

        if has_files and has_directory:
            raise ConfigurationError(
                "Cannot specify both input_files and input_directory",
                config_field="input_sources"
            ).add_suggestion("Use either --input-dir OR specific file paths, not both")

        if has_directory and not self.input_directory.is_dir():
            raise ConfigurationError(
                f"Input directory does not exist: {self.input_directory}",
                config_field="input_directory"
            )

    def _validate_output(self) -> None:
        if not self.output.output_dir:
            raise ConfigurationError(
                "An output directory is required",
                config_field="output.output_dir"
            ).add_suggestion("Provide --output DIR")

    def to_dict(self) -> dict:
        """Convert settings to dictionary for debugging."""
        return {
            'scoring': {
                'weights': self.scoring.weights.to_dict(),
                'currency_rates': dict(self.scoring.currency_rates),
                'constants': self.scoring.constants.to_dict(),
            },
            'output': {
                'format': self.output.format.value,
                'output_dir': str(self.output.output_dir) if self.output.output_dir else None,
                'include_raw': self.output.include_raw,
            },
            'runtime': {
                'input_files': len(self.input_files),
                'input_directory': str(self.input_directory) if self.input_directory else None,
                'config_path': str(self.config_path) if self.config_path else None,
                'debug_mode': self.debug_mode,
                'dry_run': self.dry_run,
            }
        }

# Global settings instance
_settings: Optional[Settings] = None

def get_settings() -> Settings:
    """Get the current global settings instance."""
    if _settings is None:
        raise ConfigurationError(
            "Settings not initialized. Call set_settings() first."
        ).add_suggestion("Initialize settings in your application startup")
    return _settings

def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    settings.validate()
    _settings = settings
    logger.info("Configuration loaded and validated successfully")

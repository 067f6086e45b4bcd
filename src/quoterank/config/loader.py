"""Configuration loading from config documents, CLI and programmatic sources."""

import json
import logging
from pathlib import Path
from dataclasses import replace
from typing import Dict, Iterable, Optional

from quoterank.config.scoring import ScoringConfig
from quoterank.config.settings import (
    Settings, ScoringSettings, OutputSettings, LoggingSettings,
    LogLevel, OutputFormat
)
from quoterank.domain.exceptions import ConfigurationError, InvalidInputError
from quoterank.processing.validation import InputValidator

logger = logging.getLogger(__name__)


def parse_assignments(pairs: Optional[Iterable[str]], option: str) -> Dict[str, float]:
    """Turn ``["price=0.5", "leadTime=0.3"]`` into ``{"price": 0.5, "leadTime": 0.3}``."""
    values: Dict[str, float] = {}
    for pair in pairs or []:
        key, sep, raw = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigurationError(
                f"Expected KEY=VALUE for {option}, got {pair!r}",
                config_field=option
            )
        try:
            values[key] = float(raw)
        except ValueError as e:
            raise ConfigurationError(
                f"Value for {option} {key} is not a number: {raw!r}",
                config_field=option
            ) from e
    return values


class ConfigurationLoader:
    """Loads configuration from CLI args, an optional config document and system defaults."""

    def load_defaults(self) -> Settings:
        """Load default configuration settings."""
        return Settings(
            scoring=ScoringSettings(),
            output=OutputSettings(
                format=OutputFormat.JSON,
                output_dir=None,
                indent=2,
                include_raw=False,
            ),
            logging=LoggingSettings(
                level=LogLevel.INFO,
                log_dir=None,
                console_output=True,
            ),
            debug_mode=False,
            dry_run=False,
        )

    def load_config_document(self, path: Path, base: Optional[ScoringConfig] = None) -> ScoringConfig:
        """Read a JSON config document (``weights``, ``currencyRates``, ``constants``)."""
        try:
            with open(path, "r", encoding="utf-8") as fh:
                doc = json.load(fh)
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"Config file not found: {path}",
                config_field="config"
            ) from e
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Cannot read config file {path}: {e}",
                config_field="config"
            ).add_suggestion("The config file must be a JSON object") from e

        try:
            return InputValidator.parse_config(doc, base=base)
        except InvalidInputError as e:
            raise ConfigurationError(
                f"Invalid config file {path}: {e.message}",
                config_field=e.context.get("field_name", "config"),
            ) from e

    def load_from_cli_args(self, args) -> Settings:
        """Load configuration from CLI arguments.

        Precedence: defaults, then ``--config`` document, then ``--weight``/``--rate``.
        """
        try:
            settings = self.load_defaults()

            scoring_config = settings.scoring.to_scoring_config()
            config_path = getattr(args, 'config', None)
            if config_path:
                config_path = Path(config_path)
                scoring_config = self.load_config_document(config_path, base=scoring_config)
                logger.info("Loaded scoring config from %s", config_path)

            weights = parse_assignments(getattr(args, 'weight', None), "--weight")
            rates = parse_assignments(getattr(args, 'rate', None), "--rate")
            scoring_config = ScoringConfig.from_overrides(
                weights=weights or None,
                currency_rates=rates or None,
                base=scoring_config,
            )

            output_updates = {}
            if getattr(args, 'output', None):
                output_updates['output_dir'] = Path(args.output)
            if getattr(args, 'format', None):
                output_updates['format'] = OutputFormat(args.format)
            if getattr(args, 'include_raw', False):
                output_updates['include_raw'] = True

            logging_updates = {}
            if getattr(args, 'log_dir', None):
                logging_updates['log_dir'] = Path(args.log_dir)
            if getattr(args, 'debug', False):
                logging_updates['level'] = LogLevel.DEBUG

            input_files = []
            input_directory = None
            if getattr(args, 'input', None):
                input_files = [Path(f) for f in args.input]
            elif getattr(args, 'input_dir', None):
                input_directory = Path(args.input_dir)

            return replace(
                settings,
                scoring=ScoringSettings(
                    weights=scoring_config.weights,
                    currency_rates=dict(scoring_config.currency_rates),
                    constants=scoring_config.constants,
                ),
                output=replace(settings.output, **output_updates),
                logging=replace(settings.logging, **logging_updates),
                input_files=input_files,
                input_directory=input_directory,
                recursive=bool(getattr(args, 'recursive', False)),
                config_path=config_path or None,
                debug_mode=bool(getattr(args, 'debug', False)),
                dry_run=bool(getattr(args, 'dry_run', False)),
            )

        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(
                f"Failed to load configuration from CLI arguments: {str(e)}"
            ) from e

def configure_from_cli(args) -> Settings:
    """Main entry point to configure settings from CLI args."""
    loader = ConfigurationLoader()
    settings = loader.load_from_cli_args(args)
    settings.validate()
    return settings

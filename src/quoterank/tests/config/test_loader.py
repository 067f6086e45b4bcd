import json
import pytest
from pathlib import Path
from argparse import Namespace

from quoterank.config.loader import ConfigurationLoader, configure_from_cli, parse_assignments
from quoterank.config.settings import LogLevel, OutputFormat
from quoterank.config.scoring import ScoringWeights
from quoterank.domain.exceptions import ConfigurationError


def _args(**overrides) -> Namespace:
    values = dict(
        input=None, input_dir=None, recursive=False, output=None,
        config=None, weight=None, rate=None, format=None,
        include_raw=False, debug=False, dry_run=False, log_dir=None,
    )
    values.update(overrides)
    return Namespace(**values)


class TestParseAssignments:

    def test_parses_pairs(self):
        assert parse_assignments(["price=0.5", " leadTime =2"], "--weight") == {"price": 0.5, "leadTime": 2.0}

    def test_empty(self):
        assert parse_assignments(None, "--weight") == {}
        assert parse_assignments([], "--rate") == {}

    @pytest.mark.parametrize("pair", ["price", "=0.5", "price=cheap"])
    def test_bad_pairs(self, pair):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_assignments([pair], "--weight")
        assert exc_info.value.config_field == "--weight"


class TestConfigurationLoader:

    def test_load_defaults(self):
        """Test that load_defaults returns correct default settings."""
        settings = ConfigurationLoader().load_defaults()

        assert settings.scoring.weights == ScoringWeights()
        assert settings.scoring.currency_rates == {}
        assert settings.scoring.constants.missing_item_penalty == 1e9
        assert settings.output.format == OutputFormat.JSON
        assert settings.output.output_dir is None
        assert settings.output.include_raw is False
        assert settings.logging.level == LogLevel.INFO
        assert settings.logging.console_output is True
        assert settings.debug_mode is False
        assert settings.dry_run is False

    def test_load_from_cli_args_empty_args(self):
        settings = ConfigurationLoader().load_from_cli_args(Namespace())

        assert settings.scoring.weights == ScoringWeights()
        assert settings.input_files == []
        assert settings.input_directory is None

    def test_load_from_cli_args_runtime_settings(self, tmp_path: Path):
        args = _args(
            input=["a.json", "b.json"], output=str(tmp_path), format="csv",
            include_raw=True, debug=True, dry_run=True, log_dir=str(tmp_path / "logs"),
        )

        settings = ConfigurationLoader().load_from_cli_args(args)

        assert settings.input_files == [Path("a.json"), Path("b.json")]
        assert settings.output.output_dir == tmp_path
        assert settings.output.format == OutputFormat.CSV
        assert settings.output.include_raw is True
        assert settings.logging.level == LogLevel.DEBUG
        assert settings.logging.log_dir == tmp_path / "logs"
        assert settings.debug_mode is True
        assert settings.dry_run is True

    def test_weight_and_rate_flags(self):
        args = _args(weight=["price=0.7", "lead_time=0.1"], rate=["EUR=1.1"])

        settings = ConfigurationLoader().load_from_cli_args(args)

        assert settings.scoring.weights.price == 0.7
        assert settings.scoring.weights.lead_time == 0.1
        assert settings.scoring.weights.quality == 0.2
        assert settings.scoring.currency_rates == {"EUR": 1.1}

    def test_flags_override_config_document(self, tmp_path: Path):
        config_file = tmp_path / "scoring.json"
        config_file.write_text(json.dumps({
            "weights": {"price": 0.1, "quality": 0.6},
            "currencyRates": {"EUR": 1.05, "GBP": 1.25},
            "constants": {"unknown_lead_time_days": 120},
        }), encoding="utf-8")
        args = _args(config=str(config_file), weight=["price=0.9"], rate=["EUR=1.2"])

        settings = ConfigurationLoader().load_from_cli_args(args)

        assert settings.config_path == config_file
        assert settings.scoring.weights.price == 0.9
        assert settings.scoring.weights.quality == 0.6
        assert settings.scoring.currency_rates == {"EUR": 1.2, "GBP": 1.25}
        assert settings.scoring.constants.unknown_lead_time_days == 120

    def test_missing_config_document(self, tmp_path: Path):
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationLoader().load_from_cli_args(_args(config=str(tmp_path / "nope.json")))
        assert exc_info.value.config_field == "config"

    def test_invalid_config_document(self, tmp_path: Path):
        config_file = tmp_path / "scoring.json"
        config_file.write_text(json.dumps({"weights": {"price": -1}}), encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationLoader().load_config_document(config_file)
        assert exc_info.value.config_field == "weights.price"

    def test_unparseable_config_document(self, tmp_path: Path):
        config_file = tmp_path / "scoring.json"
        config_file.write_text("weights: price", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            ConfigurationLoader().load_config_document(config_file)


class TestConfigureFromCli:

    def test_validates_result(self, tmp_path: Path):
        request = tmp_path / "rfq.json"
        request.write_text("{}", encoding="utf-8")

        settings = configure_from_cli(_args(input=[str(request)], output=str(tmp_path / "out")))

        assert settings.input_files == [request]

    def test_requires_output(self, tmp_path: Path):
        with pytest.raises(ConfigurationError) as exc_info:
            configure_from_cli(_args(input_dir=str(tmp_path)))
        assert exc_info.value.config_field == "output.output_dir"

    def test_rejects_negative_cli_weight(self, tmp_path: Path):
        args = _args(input_dir=str(tmp_path), output=str(tmp_path), weight=["price=-1"])
        with pytest.raises(ConfigurationError) as exc_info:
            configure_from_cli(args)
        assert exc_info.value.config_field == "scoring.weights.price"

import math
import pytest
from pathlib import Path

from quoterank.config.settings import (
    Settings,
    ScoringSettings,
    OutputSettings,
    LoggingSettings,
    LogLevel,
    OutputFormat,
    get_settings,
    set_settings,
)
from quoterank.config.scoring import ScoringConfig, ScoringConstants, ScoringWeights
import quoterank.config.settings as settings_module
from quoterank.domain.exceptions import ConfigurationError


class TestEnums:

    def test_log_level_values(self):
        assert LogLevel.DEBUG.value == "DEBUG"
        assert LogLevel.INFO.value == "INFO"
        assert LogLevel.CRITICAL.value == "CRITICAL"

    def test_output_format_values(self):
        assert OutputFormat.JSON.value == "json"
        assert OutputFormat.CSV.value == "csv"
        assert OutputFormat("csv") is OutputFormat.CSV


class TestScoringSettings:
    """Test ScoringSettings dataclass and validation."""

    def test_default_values(self):
        settings = ScoringSettings()
        assert settings.weights == ScoringWeights()
        assert settings.currency_rates == {}
        assert settings.constants == ScoringConstants()
        settings.validate()

    def test_to_scoring_config(self):
        settings = ScoringSettings(currency_rates={"EUR": 1.1})
        cfg = settings.to_scoring_config()

        assert isinstance(cfg, ScoringConfig)
        assert dict(cfg.currency_rates) == {"EUR": 1.1}
        assert cfg.weights == settings.weights

    @pytest.mark.parametrize("weights, field_name", [
        (ScoringWeights(price=-0.1), "scoring.weights.price"),
        (ScoringWeights(lead_time=math.inf), "scoring.weights.leadTime"),
    ])
    def test_invalid_weights(self, weights, field_name):
        with pytest.raises(ConfigurationError) as exc_info:
            ScoringSettings(weights=weights).validate()
        assert exc_info.value.config_field == field_name

    def test_zero_weights_are_allowed(self):
        ScoringSettings(weights=ScoringWeights(0, 0, 0, 0)).validate()

    @pytest.mark.parametrize("rate", [-1.0, math.nan, math.inf])
    def test_invalid_currency_rate(self, rate):
        with pytest.raises(ConfigurationError, match="currency rate for EUR"):
            ScoringSettings(currency_rates={"EUR": rate}).validate()

    def test_zero_currency_rate_means_default(self):
        ScoringSettings(currency_rates={"EUR": 0.0}).validate()

    @pytest.mark.parametrize("constants, field_name", [
        (ScoringConstants(missing_item_penalty=0), "scoring.constants.missing_item_penalty"),
        (ScoringConstants(unknown_lead_time_days=-1), "scoring.constants.unknown_lead_time_days"),
        (ScoringConstants(default_defect_rate=1.5), "scoring.constants.default_defect_rate"),
        (ScoringConstants(default_on_time_rate=-0.1), "scoring.constants.default_on_time_rate"),
    ])
    def test_invalid_constants(self, constants, field_name):
        with pytest.raises(ConfigurationError) as exc_info:
            ScoringSettings(constants=constants).validate()
        assert exc_info.value.config_field == field_name


class TestOutputAndLoggingSettings:

    def test_output_defaults(self):
        settings = OutputSettings()
        assert settings.format == OutputFormat.JSON
        assert settings.output_dir is None
        assert settings.indent == 2
        assert settings.include_raw is False

    def test_negative_indent(self):
        with pytest.raises(ConfigurationError, match="indent must be non-negative"):
            OutputSettings(indent=-1).validate()

    def test_log_dir_must_be_directory(self, tmp_path: Path):
        not_a_dir = tmp_path / "file.log"
        not_a_dir.touch()
        with pytest.raises(ConfigurationError, match="not a directory"):
            LoggingSettings(log_dir=not_a_dir).validate()

    def test_missing_log_dir_is_fine(self, tmp_path: Path):
        LoggingSettings(log_dir=tmp_path / "later").validate()


class TestSettings:

    @pytest.fixture
    def valid(self, tmp_path: Path) -> Settings:
        return Settings(
            output=OutputSettings(output_dir=tmp_path / "out"),
            input_directory=tmp_path,
        )

    def test_valid_settings(self, valid):
        valid.validate()

    def test_requires_an_input_source(self, tmp_path: Path):
        with pytest.raises(ConfigurationError, match="Either input_files or input_directory"):
            Settings(output=OutputSettings(output_dir=tmp_path)).validate()

    def test_rejects_both_input_sources(self, valid, tmp_path: Path):
        valid.input_files = [tmp_path / "a.json"]
        with pytest.raises(ConfigurationError, match="Cannot specify both"):
            valid.validate()

    def test_input_directory_must_exist(self, valid, tmp_path: Path):
        valid.input_directory = tmp_path / "missing"
        with pytest.raises(ConfigurationError) as exc_info:
            valid.validate()
        assert exc_info.value.config_field == "input_directory"

    def test_requires_output_dir(self, tmp_path: Path):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(input_directory=tmp_path).validate()
        assert exc_info.value.config_field == "output.output_dir"
        assert "--output" in str(exc_info.value)

    def test_to_dict(self, valid, tmp_path: Path):
        d = valid.to_dict()
        assert d["scoring"]["weights"] == {"price": 0.4, "leadTime": 0.2, "quality": 0.2, "reliability": 0.2}
        assert d["output"]["format"] == "json"
        assert d["output"]["output_dir"] == str(tmp_path / "out")
        assert d["runtime"]["input_directory"] == str(tmp_path)
        assert d["runtime"]["dry_run"] is False


class TestGlobalSettings:

    @pytest.fixture(autouse=True)
    def reset_global(self, monkeypatch):
        monkeypatch.setattr(settings_module, "_settings", None)

    def test_get_before_set(self):
        with pytest.raises(ConfigurationError, match="Settings not initialized"):
            get_settings()

    def test_set_then_get(self, tmp_path: Path):
        settings = Settings(output=OutputSettings(output_dir=tmp_path), input_directory=tmp_path)
        set_settings(settings)
        assert get_settings() is settings

    def test_set_validates(self):
        with pytest.raises(ConfigurationError):
            set_settings(Settings())
        with pytest.raises(ConfigurationError):
            get_settings()

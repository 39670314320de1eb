"""Tests for config validation."""

import pytest

from resume_roast.config import load_config


class TestConfigValidation:
    def test_valid_defaults(self):
        """Default config passes validation without raising."""
        config = load_config(None)
        assert config.llm.timeout == 120
        assert config.limits.window_seconds == 60

    def test_invalid_max_retries(self, tmp_path):
        """max_retries above 10 raises ValueError."""
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  max_retries: 99\n")
        with pytest.raises(ValueError, match="max_retries"):
            load_config(yaml)

    def test_invalid_timeout(self, tmp_path):
        """timeout of 0 (below minimum of 1) raises ValueError."""
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  timeout: 0\n")
        with pytest.raises(ValueError, match="timeout"):
            load_config(yaml)

    def test_invalid_temperature(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("generation:\n  roast_temperature: 1.5\n")
        with pytest.raises(ValueError, match="roast_temperature"):
            load_config(yaml)

    def test_invalid_backend(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("limits:\n  backend: redis\n")
        with pytest.raises(ValueError, match="backend"):
            load_config(yaml)

    def test_invalid_endpoint_limit(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("limits:\n  generate: 0\n")
        with pytest.raises(ValueError, match="generate"):
            load_config(yaml)

"""Tests for tracker configuration."""

import pytest

from sizekit.core.config import TrackerConfig, TrackerConfigBuilder
from sizekit.exceptions import ConfigurationError


class TestTrackerConfig:
    """Tests for TrackerConfig."""

    def test_defaults(self) -> None:
        config = TrackerConfig()
        assert config.base_name == "base"
        assert config.field_suffix == "_information"
        assert config.probe_backend == "identify"
        assert config.probe_timeout == 10.0
        assert config.on_collision == "overwrite"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"base_name": ""},
            {"base_name": "ba:se"},
            {"field_suffix": ""},
            {"probe_backend": "exiftool"},
            {"probe_timeout": 0},
            {"probe_timeout": -5.0},
            {"on_collision": "merge"},
        ],
    )
    def test_validation(self, kwargs) -> None:
        with pytest.raises(ConfigurationError):
            TrackerConfig(**kwargs)

    def test_no_timeout_allowed(self) -> None:
        assert TrackerConfig(probe_timeout=None).probe_timeout is None


class TestTrackerConfigBuilder:
    """Tests for TrackerConfigBuilder."""

    def test_builder_pattern(self) -> None:
        config = (
            TrackerConfigBuilder()
            .with_base_name("original")
            .with_field_suffix("_meta")
            .with_probe_backend("oiio")
            .with_identify_command(["magick", "identify"])
            .with_probe_timeout(2.5)
            .with_collision_policy("error")
            .build()
        )

        assert config.base_name == "original"
        assert config.field_suffix == "_meta"
        assert config.probe_backend == "oiio"
        assert config.identify_command == ["magick", "identify"]
        assert config.probe_timeout == 2.5
        assert config.on_collision == "error"

    def test_builder_validates(self) -> None:
        with pytest.raises(ConfigurationError):
            TrackerConfigBuilder().with_probe_timeout(-1).build()


class TestFromEnv:
    """Tests for TrackerConfig.from_env."""

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("SIZEKIT_PROBE_BACKEND", "OIIO")
        monkeypatch.setenv("SIZEKIT_PROBE_TIMEOUT", "3")
        monkeypatch.setenv("SIZEKIT_ON_COLLISION", "error")

        config = TrackerConfig.from_env()

        assert config.probe_backend == "oiio"
        assert config.probe_timeout == 3.0
        assert config.on_collision == "error"

    def test_empty_environment(self, monkeypatch) -> None:
        for name in ("SIZEKIT_PROBE_BACKEND", "SIZEKIT_PROBE_TIMEOUT", "SIZEKIT_ON_COLLISION"):
            monkeypatch.delenv(name, raising=False)
        assert TrackerConfig.from_env() == TrackerConfig()

    def test_invalid_timeout(self, monkeypatch) -> None:
        monkeypatch.setenv("SIZEKIT_PROBE_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError):
            TrackerConfig.from_env()

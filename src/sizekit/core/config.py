"""Configuration classes using Builder pattern for tracker settings."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from sizekit import constants
from sizekit.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class TrackerConfig:
    """Configuration for capturing and reading image size records."""

    base_name: str = constants.BASE_VERSION_NAME
    field_suffix: str = constants.INFO_FIELD_SUFFIX
    probe_backend: str = constants.PROBE_BACKEND_IDENTIFY
    identify_command: Optional[list[str]] = None  # e.g. ["magick", "identify"]
    probe_timeout: Optional[float] = constants.DEFAULT_PROBE_TIMEOUT
    on_collision: str = constants.COLLISION_OVERWRITE

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.base_name:
            raise ConfigurationError("Base version name cannot be empty")
        if constants.SIZE_NAME_SEPARATOR in self.base_name or "\n" in self.base_name:
            raise ConfigurationError(f"Invalid base version name: {self.base_name!r}")
        if not self.field_suffix:
            raise ConfigurationError("Field suffix cannot be empty")
        if self.probe_backend not in constants.PROBE_BACKENDS:
            raise ConfigurationError(
                f"Unknown probe backend: {self.probe_backend}. "
                f"Supported: {', '.join(sorted(constants.PROBE_BACKENDS))}"
            )
        if self.probe_timeout is not None and self.probe_timeout <= 0:
            raise ConfigurationError("Probe timeout must be greater than 0")
        if self.on_collision not in constants.COLLISION_POLICIES:
            raise ConfigurationError(
                f"Unknown collision policy: {self.on_collision}. "
                f"Supported: {', '.join(sorted(constants.COLLISION_POLICIES))}"
            )

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        """Build a config from ``SIZEKIT_*`` environment variables."""
        builder = TrackerConfigBuilder()

        backend = os.environ.get("SIZEKIT_PROBE_BACKEND", "").strip().lower()
        if backend:
            builder.with_probe_backend(backend)

        timeout = os.environ.get("SIZEKIT_PROBE_TIMEOUT", "").strip()
        if timeout:
            try:
                builder.with_probe_timeout(float(timeout))
            except ValueError as e:
                raise ConfigurationError(f"Invalid SIZEKIT_PROBE_TIMEOUT: {timeout!r}") from e

        on_collision = os.environ.get("SIZEKIT_ON_COLLISION", "").strip().lower()
        if on_collision:
            builder.with_collision_policy(on_collision)

        config = builder.build()
        logger.debug("Loaded tracker config from environment: %s", config)
        return config


class TrackerConfigBuilder:
    """Builder for TrackerConfig."""

    def __init__(self) -> None:
        """Initialize builder."""
        self._base_name: str = constants.BASE_VERSION_NAME
        self._field_suffix: str = constants.INFO_FIELD_SUFFIX
        self._probe_backend: str = constants.PROBE_BACKEND_IDENTIFY
        self._identify_command: Optional[list[str]] = None
        self._probe_timeout: Optional[float] = constants.DEFAULT_PROBE_TIMEOUT
        self._on_collision: str = constants.COLLISION_OVERWRITE

    def with_base_name(self, name: str) -> "TrackerConfigBuilder":
        """Set the record name of the root version."""
        self._base_name = name
        return self

    def with_field_suffix(self, suffix: str) -> "TrackerConfigBuilder":
        """Set the suffix appended to the attachment name to form the field name."""
        self._field_suffix = suffix
        return self

    def with_probe_backend(self, backend: str) -> "TrackerConfigBuilder":
        """Set the probe backend ("identify" or "oiio")."""
        self._probe_backend = backend
        return self

    def with_identify_command(self, command: Optional[list[str]]) -> "TrackerConfigBuilder":
        """Set an explicit identify command prefix."""
        self._identify_command = list(command) if command else None
        return self

    def with_probe_timeout(self, timeout: Optional[float]) -> "TrackerConfigBuilder":
        """Set the per-file probe timeout in seconds (None waits forever)."""
        self._probe_timeout = timeout
        return self

    def with_collision_policy(self, policy: str) -> "TrackerConfigBuilder":
        """Set what happens when two versions share a name."""
        self._on_collision = policy
        return self

    def build(self) -> TrackerConfig:
        """Build TrackerConfig.

        Raises:
            ConfigurationError: If the collected settings are invalid.
        """
        return TrackerConfig(
            base_name=self._base_name,
            field_suffix=self._field_suffix,
            probe_backend=self._probe_backend,
            identify_command=self._identify_command,
            probe_timeout=self._probe_timeout,
            on_collision=self._on_collision,
        )

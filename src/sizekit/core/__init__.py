"""Core modules for encoding records and walking version trees."""

from sizekit.core.config import TrackerConfig, TrackerConfigBuilder

__all__ = ["TrackerConfig", "TrackerConfigBuilder"]

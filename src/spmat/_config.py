"""
spmat Config - Runtime Configuration System

Provides property-based configuration for rendering and import behavior.
Allows fine-grained control without modifying function signatures.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Any, List
import threading


# =============================================================================
# Configuration Classes
# =============================================================================

@dataclass
class DisplayConfig:
    """Configuration for textual rendering."""
    dense_threshold: int = 20       # Largest dimension rendered as a dense grid
    precision: int = 6              # Significant digits for floating values
    max_listed_entries: int = 200   # Triples listed before truncating


@dataclass
class IOConfig:
    """Configuration for Matrix-Market import."""
    duplicates: str = "last"        # Repeated coordinates: "last", "sum" or "error"


# =============================================================================
# Global Configuration Manager
# =============================================================================

class SpmatConfig:
    """
    Global configuration manager for spmat.

    Provides thread-local configuration with context manager support.
    Configuration can be set globally or locally within a context.

    Example:
        # Global configuration
        spmat.config.display = DisplayConfig(dense_threshold=10)

        # Local configuration (context manager)
        with spmat.config.local(display=DisplayConfig(dense_threshold=0)):
            print(matrix)   # always rendered as triples here
        # Back to global config
    """

    def __init__(self):
        self._global_display = DisplayConfig()
        self._global_io = IOConfig()

        # Thread-local storage for context overrides
        self._local = threading.local()

        # Callbacks for config changes
        self._callbacks: Dict[str, List[Callable]] = {
            "display": [],
            "io": [],
        }

    # -------------------------------------------------------------------------
    # Property Accessors (with thread-local override support)
    # -------------------------------------------------------------------------

    @property
    def display(self) -> DisplayConfig:
        """Get display configuration."""
        if getattr(self._local, "display", None) is not None:
            return self._local.display
        return self._global_display

    @display.setter
    def display(self, value: DisplayConfig):
        """Set global display configuration."""
        self._global_display = value
        self._notify("display", value)

    @property
    def io(self) -> IOConfig:
        """Get import configuration."""
        if getattr(self._local, "io", None) is not None:
            return self._local.io
        return self._global_io

    @io.setter
    def io(self, value: IOConfig):
        """Set global import configuration."""
        self._global_io = value
        self._notify("io", value)

    # -------------------------------------------------------------------------
    # Convenience Properties
    # -------------------------------------------------------------------------

    @property
    def dense_threshold(self) -> int:
        """Largest dimension rendered as a dense grid."""
        return self.display.dense_threshold

    @dense_threshold.setter
    def dense_threshold(self, value: int):
        self._global_display.dense_threshold = value

    # -------------------------------------------------------------------------
    # Context Manager Support
    # -------------------------------------------------------------------------

    def local(self, **kwargs) -> "_LocalConfigContext":
        """
        Create a local configuration context.

        Args:
            **kwargs: Configuration overrides (display, io)

        Returns:
            Context manager
        """
        unknown = set(kwargs) - set(self._callbacks)
        if unknown:
            raise ValueError(f"Unknown config sections: {sorted(unknown)}")
        return _LocalConfigContext(self, **kwargs)

    def _set_local(self, **kwargs):
        """Set thread-local configuration."""
        for key, value in kwargs.items():
            if value is not None:
                setattr(self._local, key, value)

    def _clear_local(self, keys: List[str]):
        """Clear thread-local configuration."""
        for key in keys:
            if hasattr(self._local, key):
                setattr(self._local, key, None)

    # -------------------------------------------------------------------------
    # Callback Registration
    # -------------------------------------------------------------------------

    def on_change(self, config_name: str, callback: Callable):
        """
        Register callback for configuration changes.

        Args:
            config_name: Name of config ("display" or "io")
            callback: Function to call when config changes
        """
        if config_name in self._callbacks:
            self._callbacks[config_name].append(callback)

    def _notify(self, config_name: str, value: Any):
        """Notify callbacks of configuration change."""
        for callback in self._callbacks.get(config_name, []):
            callback(value)

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset(self):
        """Reset all configurations to defaults."""
        self._global_display = DisplayConfig()
        self._global_io = IOConfig()

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "display": {
                "dense_threshold": self.display.dense_threshold,
                "precision": self.display.precision,
                "max_listed_entries": self.display.max_listed_entries,
            },
            "io": {
                "duplicates": self.io.duplicates,
            },
        }

    def __repr__(self) -> str:
        return f"SpmatConfig({self.to_dict()})"


class _LocalConfigContext:
    """Context manager for local configuration override."""

    def __init__(self, config: SpmatConfig, **kwargs):
        self._config = config
        self._kwargs = kwargs
        self._keys = list(kwargs.keys())

    def __enter__(self):
        self._config._set_local(**self._kwargs)
        return self._config

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._config._clear_local(self._keys)
        return False


# =============================================================================
# Global Instance
# =============================================================================

config = SpmatConfig()


# =============================================================================
# Convenience Functions
# =============================================================================

def get_config() -> SpmatConfig:
    """Get the global configuration instance."""
    return config


def set_display(
    dense_threshold: int = 20,
    precision: int = 6,
    max_listed_entries: int = 200,
):
    """
    Configure textual rendering.

    Args:
        dense_threshold: Largest dimension rendered as a dense grid
        precision: Significant digits for floating values
        max_listed_entries: Triples listed before truncating
    """
    config.display = DisplayConfig(
        dense_threshold=dense_threshold,
        precision=precision,
        max_listed_entries=max_listed_entries,
    )


__all__ = [
    "DisplayConfig",
    "IOConfig",
    "SpmatConfig",
    "config",
    "get_config",
    "set_display",
]

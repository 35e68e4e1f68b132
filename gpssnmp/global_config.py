"""
Global Configuration Module

This module provides a centralized configuration storage for the gpsd
connection and polling limits that can be accessed by all functions
throughout the application.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field


DEFAULT_SERVER = "localhost"
DEFAULT_PORT = "2947"


@dataclass
class PollSettings:
    """
    Data class representing the gpsd source and the poll limits.
    """
    # gpsd source
    server: str = DEFAULT_SERVER
    port: str = DEFAULT_PORT
    device: Optional[str] = None

    # Poll limits (seconds)
    timeout: float = 10.0
    wait_slice: float = 5.0

    # Signal to noise values at or below this are "no reading" placeholders
    snr_floor: float = 1.0

    @property
    def port_number(self) -> int:
        return int(self.port)


@dataclass
class GlobalConfig:
    """
    Global configuration container for the entire application.
    """
    poll_settings: PollSettings = field(default_factory=PollSettings)

    # Verbosity requested with -D
    debug_level: int = 0

    def get_poll_settings(self) -> PollSettings:
        return self.poll_settings

    def update_poll_settings(self, settings: Dict[str, Any]) -> None:
        """
        Update poll settings.

        Only keys that name an existing PollSettings field are applied.

        Args:
            settings: Dictionary containing the settings to update
        """
        for key, value in settings.items():
            if hasattr(self.poll_settings, key):
                setattr(self.poll_settings, key, value)

    def reset(self) -> None:
        """Restore every setting to its default."""
        self.poll_settings = PollSettings()
        self.debug_level = 0


# Create a singleton instance of GlobalConfig that can be imported and used globally
global_config = GlobalConfig()


def get_global_config() -> GlobalConfig:
    """
    Get the global configuration instance.

    Returns:
        GlobalConfig instance
    """
    return global_config


def get_poll_settings() -> PollSettings:
    """Convenience function to get the poll settings."""
    return global_config.get_poll_settings()


def update_poll_settings(settings: Dict[str, Any]) -> None:
    """
    Convenience function to update poll settings.

    Args:
        settings: Dictionary containing the settings to update
    """
    global_config.update_poll_settings(settings)

"""Configuration loading for chromedriver-installer."""

from chromedriver_installer.config.loader import ConfigError, load_config
from chromedriver_installer.config.models import InstallerConfig

__all__ = ["ConfigError", "InstallerConfig", "load_config"]

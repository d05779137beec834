"""Config settings – 12-factor env-based configuration."""
from verigate.config.settings.base import Settings, VerigateSettings
from verigate.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsLoader", "VerigateSettings"]

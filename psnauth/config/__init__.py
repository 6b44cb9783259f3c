"""Configuration module for psnauth."""

from psnauth.config.loader import get_config_path, load_config, save_config
from psnauth.config.schema import Config

__all__ = ["Config", "get_config_path", "load_config", "save_config"]

"""Configuration module."""

from easyrest.config.settings import EasyRestSettings

__all__ = ["EasyRestSettings"]

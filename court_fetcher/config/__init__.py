"""Configuration module"""
from court_fetcher.config.settings import Settings, settings

__all__ = ["Settings", "settings"]

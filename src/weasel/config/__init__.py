"""Configuration module for weasel."""

from .settings import (
    DetectionSettings,
    HttpSettings,
    ImgurSettings,
    ObservabilitySettings,
    Settings,
    get_settings,
)

__all__ = [
    "DetectionSettings",
    "HttpSettings",
    "ImgurSettings",
    "ObservabilitySettings",
    "Settings",
    "get_settings",
]

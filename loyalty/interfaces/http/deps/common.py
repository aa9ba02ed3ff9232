"""Settings and clock providers."""

from loyalty.core.clock import Clock, SystemClock
from loyalty.core.config import Settings, get_settings

_system_clock = SystemClock()


def get_app_settings() -> Settings:
    return get_settings()


def get_clock() -> Clock:
    return _system_clock


__all__ = ["get_app_settings", "get_clock"]

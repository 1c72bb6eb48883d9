from .loader import load_config
from .models import (
    RevtrackConfig,
    StateConfig,
    WatchConfig,
)

__all__ = [
    "RevtrackConfig",
    "StateConfig",
    "WatchConfig",
    "load_config",
]

from .config import Settings, settings
from .runtime_config import RuntimeConfig, runtime_config

__all__ = ["Settings", "settings", "RuntimeConfig", "runtime_config"]

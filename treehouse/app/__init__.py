"""App layer - configuration and the command-line host shell."""

from treehouse.app.config import TreehouseConfig, get_config, reload_config, set_config

__all__ = [
    "TreehouseConfig",
    "get_config",
    "reload_config",
    "set_config",
]

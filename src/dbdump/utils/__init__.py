"""Utility functions for dbdump."""

from dbdump.utils.config import ConfigSettings, find_config_file, load_config
from dbdump.utils.diagnostics import Diagnostics, quiet_diagnostics

__all__ = [
    "ConfigSettings",
    "Diagnostics",
    "find_config_file",
    "load_config",
    "quiet_diagnostics",
]

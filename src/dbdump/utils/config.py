"""Settings file support for dbdump.

Defaults for the CLI can be kept in a ``dbdump.toml`` file in the directory
dbdump runs from, under a ``[dbdump]`` table:

    [dbdump]
    url = "mysql://backup@db.internal:3306"
    schema_name = "shop"
    batch_size = 500
    jobs = 4
"""

import tomllib
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError
from rich.console import Console

console = Console(stderr=True)

CONFIG_FILE_NAME = "dbdump.toml"
CONFIG_SECTION = "dbdump"


class ConfigSettings(BaseModel):
    """Values read from the ``[dbdump]`` table.

    A field left as None was not set in the file, so the CLI falls back to
    its own default. Keys dbdump does not know are ignored.
    """

    url: Optional[str] = None
    schema_name: Optional[str] = None
    new_schema_name: Optional[str] = None
    output_file: Optional[str] = None
    catalog_type: Optional[str] = None
    no_data: Optional[bool] = None
    single_row_inserts: Optional[bool] = None
    skip_unknown_types: Optional[bool] = None
    create_schema: Optional[bool] = None
    disable_fk_checks: Optional[bool] = None
    include_routines: Optional[bool] = None
    include_triggers: Optional[bool] = None
    batch_size: Optional[int] = None
    jobs: Optional[int] = None
    pool_size: Optional[int] = None
    ordering: Optional[str] = None
    view_references: Optional[str] = None
    log_level: Optional[str] = None


def find_config_file(start_path: Optional[Path] = None) -> Optional[Path]:
    """Return the dbdump.toml in a directory, if there is one.

    Args:
        start_path: Directory to look in. Defaults to the working directory.
    """
    directory = start_path if start_path is not None else Path.cwd()
    candidate = directory / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


def _fallback(message: str) -> ConfigSettings:
    console.print(f"[yellow]Warning:[/yellow] {message}")
    console.print("[yellow]Using default settings[/yellow]")
    return ConfigSettings()


def load_config(config_path: Optional[Path] = None) -> ConfigSettings:
    """Read settings from a dbdump.toml file.

    Without an explicit path the working directory is searched. A missing
    file silently yields empty settings. A file that cannot be read, is not
    valid TOML, or holds values of the wrong type yields empty settings after
    a warning on stderr, so a broken file never stops a dump.

    Args:
        config_path: File to read instead of searching.

    Returns:
        ConfigSettings, with None for everything the file does not set.
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            return ConfigSettings()

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        return _fallback(f"Failed to parse {config_path}: {e}")
    except OSError as e:
        return _fallback(f"Could not read {config_path}: {e}")

    section = toml_data.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        return _fallback(f"'{CONFIG_SECTION}' must be a table in {config_path}")

    try:
        return ConfigSettings(**section)
    except ValidationError as e:
        return _fallback(f"Invalid configuration in {config_path}: {e}")

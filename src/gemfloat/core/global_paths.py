"""Per-user directories for gemfloat, resolved through platformdirs."""

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

APP_NAME = "gemfloat"


class GlobalPath:
    """Locations of the config and log directories."""

    @classmethod
    def data(cls) -> str:
        return user_data_dir(APP_NAME)

    @classmethod
    def log(cls) -> str:
        """Directory holding the rotated log files."""
        return str(Path(cls.data()) / "log")

    @classmethod
    def config(cls) -> str:
        """Directory searched for the global ``gemfloat.json``."""
        return os.environ.get("GEMFLOAT_CONFIG_DIR") or user_config_dir(APP_NAME)

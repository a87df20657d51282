import os
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from platformdirs import user_config_dir


logger = logging.getLogger(__name__)


CONFIG_DIR = Path(user_config_dir("geoclip"))
CONFIG_FILE = CONFIG_DIR / "config.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def getflag(name, default=False):
    default = "true" if default else "false"
    return os.environ.get(name, default).lower() in ("true", "1")


@dataclass
class Config:
    """Settings of the command line front end."""

    loglevel: str = "INFO"
    boundary: bool = False
    indent: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                logger.warning(f"Ignoring unknown config key '{key}'")
        config = cls(**{k: v for k, v in data.items() if k in known})
        config.loglevel = str(config.loglevel).upper()
        if config.loglevel not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {config.loglevel}")
        if config.indent is not None:
            config.indent = int(config.indent)
        config.boundary = bool(config.boundary)
        return config


def load_config(path: Optional[Path] = None) -> Config:
    """
    Loads the configuration from a YAML file, then applies environment
    overrides (GEOCLIP_BOUNDARY, GEOCLIP_LOGLEVEL).

    A missing file yields the defaults.

    Raises:
        ValueError: If the file does not contain a mapping, or a value is
                    invalid.
    """
    path = Path(path) if path is not None else CONFIG_FILE
    data: Dict[str, Any] = {}
    if path.exists():
        logger.debug(f"Loading config from {path}")
        with open(path, "r") as f:
            loaded = yaml.safe_load(f)
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        data = loaded or {}
    else:
        logger.debug(f"No config file at {path}, using defaults")

    if "GEOCLIP_BOUNDARY" in os.environ:
        data["boundary"] = getflag("GEOCLIP_BOUNDARY")
    if "GEOCLIP_LOGLEVEL" in os.environ:
        data["loglevel"] = os.environ["GEOCLIP_LOGLEVEL"]
    return Config.from_dict(data)

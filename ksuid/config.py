import json
import os
import threading
from pathlib import Path

from ksuid.core.identifier import Variant
from ksuid.internal.logging import LogLevel, StructuredLogger, get_logger

CONFIG_ENV = "KSUID_CONFIG"


class GeneratorConfig:
    __slots__ = ("variant",)

    def __init__(self, variant="standard"):
        self.variant = Variant.from_name(variant)


class LoggingConfig:
    __slots__ = ("level",)

    def __init__(self, level="INFO"):
        LogLevel.from_name(level)
        self.level = level


class Config:
    __slots__ = ("generator", "logging")

    def __init__(self, generator=None, logging=None):
        self.generator = generator or GeneratorConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            GeneratorConfig(**d.get("generator", {})),
            LoggingConfig(**d.get("logging", {})),
        )


_config = None
_config_lock = threading.Lock()


def load_config(path=None):
    if path is None:
        path = os.environ.get(CONFIG_ENV)

    if not path:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        get_logger().debug("Config file missing, using defaults", path=str(config_path))
        return Config()

    with open(config_path) as file:
        return Config.from_dict(json.load(file))


def configure(config=None):
    """Install config as the active one and apply its logging level."""
    global _config
    config = config or load_config()
    with _config_lock:
        _config = config
    StructuredLogger.configure(min_level=LogLevel.from_name(config.logging.level))
    return config


def get_config():
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:
                _config = Config()
    return _config

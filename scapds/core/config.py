"""
Scapds Configuration

Handles loading and managing settings from scapds.config.py.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional

from scapds.core.errors import ConfigError


CONFIG_FILENAME = "scapds.config.py"
FALLBACK_PATH_MAX = 1024


def _platform_path_max() -> int:
    """Maximum path length reported by the platform, 1024 when it will not say."""
    try:
        value = os.pathconf("/", "PC_PATH_MAX")
    except (AttributeError, OSError, ValueError):
        return FALLBACK_PATH_MAX
    return value if value and value > 0 else FALLBACK_PATH_MAX


def _find_config_file() -> Optional[str]:
    """
    Locate scapds.config.py in the current working directory.

    Only checks the current working directory (no upward traversal for security).
    """
    candidate = os.path.join(os.getcwd(), CONFIG_FILENAME)
    if os.path.exists(candidate):
        return candidate
    return None


def _import_module_by_path(module_path: str) -> Any:
    """Import a Python module from a file path."""
    import importlib.util
    spec = importlib.util.spec_from_file_location("scapds_config", module_path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _dev_env() -> bool:
    return os.getenv("env", "prod").startswith("dev")


@dataclass
class Config:
    """
    Configuration container for scapds.

    Loads settings from scapds.config.py or uses defaults.

    Attributes:
        config_path: Path of the loaded config file, None when running on defaults
        debug: Enable debug mode (verbose logging)
        log_level: Logging level (trace, debug, info, warning, error)
        max_path_length: Longest directory path that will be created
        directory_mode: Permission bits for created output directories
        output_encoding: Encoding of written component files
        pretty_print: Indent written component files
        restrict_to_target: Refuse output paths outside the decompose directory
        default_target_dir: Directory used when decompose is given an empty one
    """

    config_path: Optional[str] = field(default=None)
    debug: bool = field(default=False)
    log_level: str = field(default="info")
    max_path_length: int = field(default=FALLBACK_PATH_MAX)
    directory_mode: int = field(default=0o700)
    output_encoding: str = field(default="utf-8")
    pretty_print: bool = field(default=False)
    restrict_to_target: bool = field(default=True)
    default_target_dir: str = field(default=".")

    def __init__(self, config_path: Optional[str] = None, **overrides: Any):
        """
        Initialize configuration.

        Args:
            config_path: Optional explicit config file. If None, scapds.config.py
                         in the working directory is used when present.
            **overrides: Values that take precedence over the config file.
        """
        if config_path is None:
            config_path = _find_config_file()
        elif not os.path.exists(config_path):
            raise ConfigError(
                f"Config file not found: {config_path}",
                hint=f"Create '{CONFIG_FILENAME}' or pass an existing path",
            )

        config_module = None
        if config_path is not None:
            try:
                config_module = _import_module_by_path(config_path)
            except Exception as e:
                raise ConfigError(
                    f"Failed to load configuration: {e}",
                    hint=f"Check {config_path} for syntax errors",
                )

        self.config_path = config_path
        self.debug = getattr(config_module, "debug", _dev_env())
        self.log_level = "debug" if self.debug else getattr(config_module, "log_level", "info")
        self.log_level = os.getenv("SCAPDS_LOG_LEVEL", self.log_level)
        self.max_path_length = getattr(config_module, "max_path_length", _platform_path_max())
        self.directory_mode = getattr(config_module, "directory_mode", 0o700)
        self.output_encoding = getattr(config_module, "output_encoding", "utf-8")
        self.pretty_print = getattr(config_module, "pretty_print", False)
        self.restrict_to_target = getattr(config_module, "restrict_to_target", True)
        self.default_target_dir = getattr(config_module, "default_target_dir", ".")

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise ConfigError(f"Unknown configuration key: {key}")
            setattr(self, key, value)
        self._validate()

    def _validate(self):
        if not isinstance(self.max_path_length, int) or self.max_path_length <= 0:
            raise ConfigError(
                f"max_path_length must be a positive integer, got {self.max_path_length!r}"
            )
        if not isinstance(self.directory_mode, int):
            raise ConfigError(
                f"directory_mode must be an integer, got {self.directory_mode!r}",
                hint="Use an octal literal such as 0o700",
            )

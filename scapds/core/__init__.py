"""
Scapds Core Module

Contains configuration, logging and error handling infrastructure.
"""

from scapds.core.config import Config
from scapds.core.logging import ScapdsLogger, get_logger, set_log_level, log
from scapds.core.errors import (
    Severity,
    SourceLocation,
    ScapdsError,
    FatalError,
    ReadError,
    DataStreamNotFoundError,
    MissingChecklistsError,
    ConfigError,
    InvalidReferenceError,
    ComponentNotFoundError,
    ComponentRefNotFoundError,
    EmptyComponentError,
    CyclicReferenceError,
    FileError,
    PathTooLongError,
    PathTraversalError,
)

__all__ = [
    "Config",
    "ScapdsLogger",
    "get_logger",
    "set_log_level",
    "log",
    "Severity",
    "SourceLocation",
    "ScapdsError",
    "FatalError",
    "ReadError",
    "DataStreamNotFoundError",
    "MissingChecklistsError",
    "ConfigError",
    "InvalidReferenceError",
    "ComponentNotFoundError",
    "ComponentRefNotFoundError",
    "EmptyComponentError",
    "CyclicReferenceError",
    "FileError",
    "PathTooLongError",
    "PathTraversalError",
]

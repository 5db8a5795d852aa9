"""
Scapds - split and assemble SCAP source data-stream collections

A source data-stream collection bundles XCCDF checklists, OVAL checks, CPE
dictionaries and other components into one XML document. Checklists reach
their dependencies through catalogs on their component-refs.

Usage:
    from scapds import decompose, compose

    # Write every component reachable from the first data-stream's checklists
    result = decompose("ssg-rhel7-ds.xml", target_dir="out")
    for error in result.errors:
        print(error)

    # Build a collection around one checklist
    collection = compose("ssg-rhel7-xccdf.xml", "scap_org.open-scap_datastream_rhel7")
    collection.write("ssg-rhel7-ds.xml")
"""

from __future__ import annotations

__author__ = "scapds contributors"
__description__ = "Decompose and compose SCAP source data-stream collections"
__version__ = "0.1.0"

from scapds.core.config import Config
from scapds.core.logging import get_logger, set_log_level, log
from scapds.core.errors import (
    Severity,
    ScapdsError,
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
from scapds.model import Collection, DataStream, ComponentRef, Component, Reference, ReferenceKind
from scapds.components.file_manager import FileManager
from scapds.components.reference_resolver import ReferenceResolver, find_component, find_component_ref
from scapds.decomposer import Decomposer, DecomposeResult, decompose
from scapds.composer import Composer, classify_component, compose


__all__ = [
    # Operations
    "decompose",
    "compose",
    "Decomposer",
    "DecomposeResult",
    "Composer",
    "classify_component",

    # Model
    "Collection",
    "DataStream",
    "ComponentRef",
    "Component",
    "Reference",
    "ReferenceKind",

    # Resolution and output
    "ReferenceResolver",
    "find_component",
    "find_component_ref",
    "FileManager",

    # Configuration and logging
    "Config",
    "get_logger",
    "set_log_level",
    "log",

    # Errors
    "Severity",
    "ScapdsError",
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

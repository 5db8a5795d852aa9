"""
Scapds Components Module

Contains output file management and reference resolution.
"""

from scapds.components.file_manager import FileManager, TargetPath
from scapds.components.reference_resolver import ReferenceResolver, find_component, find_component_ref

__all__ = ["FileManager", "TargetPath", "ReferenceResolver", "find_component", "find_component_ref"]

"""
Scapds Error Definitions
Exception classes carrying a severity and the source line of the offending element.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Severity(Enum):
    """How far an error reaches."""
    FATAL = "fatal"
    RECOVERABLE = "recoverable"


@dataclass
class SourceLocation:
    """Represents a location in the source document for error reporting."""
    line: Optional[int] = None
    filename: Optional[str] = None

    def __str__(self) -> str:
        if self.filename and self.line:
            return f"{self.filename}:{self.line}"
        if self.filename:
            return self.filename
        return f"line {self.line}"

    @classmethod
    def of(cls, element, filename: Optional[str] = None) -> Optional["SourceLocation"]:
        """Location of an lxml element, or None if it was not parsed from a source."""
        line = getattr(element, "sourceline", None)
        if line is None and filename is None:
            return None
        return cls(line=line, filename=filename)


class ScapdsError(Exception):
    """Base exception for all scapds errors."""

    severity = Severity.RECOVERABLE

    def __init__(
            self,
            message: str,
            location: Optional[SourceLocation] = None,
            hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    @property
    def fatal(self) -> bool:
        return self.severity is Severity.FATAL

    def _format_message(self) -> str:
        parts = []
        if self.location:
            parts.append(f"[{self.location}] ")
        parts.append(self.message)
        if self.hint:
            parts.append(f"\n  Hint: {self.hint}")
        return "".join(parts)


class FatalError(ScapdsError):
    """Aborts the whole operation."""
    severity = Severity.FATAL


class ReadError(FatalError):
    """The source document could not be read or parsed."""

    def __init__(self, message: str, source: Optional[str] = None, hint: Optional[str] = None):
        self.source = source
        super().__init__(message, hint=hint)


class DataStreamNotFoundError(FatalError):
    """No data-stream matched the requested id, or the collection has none."""

    def __init__(self, datastream_id: Optional[str] = None, location: Optional[SourceLocation] = None):
        self.datastream_id = datastream_id
        if datastream_id is None:
            message = "Could not find any datastream inside the file"
        else:
            message = f"Could not find any datastream of id '{datastream_id}'"
        super().__init__(message, location=location)


class MissingChecklistsError(FatalError):
    """The selected data-stream has no checklists container."""
    pass


class ConfigError(FatalError):
    """Error in configuration loading or validation."""
    pass


class InvalidReferenceError(ScapdsError):
    """Missing or malformed id, href, name or uri attribute."""

    def __init__(
            self,
            message: str,
            attribute: Optional[str] = None,
            value: Optional[str] = None,
            location: Optional[SourceLocation] = None,
    ):
        self.attribute = attribute
        self.value = value
        super().__init__(message, location=location)


class ComponentNotFoundError(ScapdsError):
    """A component-ref points at a component id that does not exist."""

    def __init__(self, component_id: str, location: Optional[SourceLocation] = None):
        self.component_id = component_id
        super().__init__(
            f"Component of given id '{component_id}' was not found in the document.",
            location=location,
        )


class ComponentRefNotFoundError(ScapdsError):
    """A catalog uri points at a component-ref id that does not exist in the data-stream."""

    def __init__(self, ref_id: str, location: Optional[SourceLocation] = None):
        self.ref_id = ref_id
        super().__init__(
            f"component-ref with given id '{ref_id}' wasn't found in the document!",
            location=location,
        )


class EmptyComponentError(ScapdsError):
    """A component has no element content to extract."""

    def __init__(self, component_id: str, location: Optional[SourceLocation] = None):
        self.component_id = component_id
        super().__init__(
            f"Found component (id='{component_id}') but it has no element contents, nothing to dump, skipping...",
            location=location,
        )


class CyclicReferenceError(ScapdsError):
    """A catalog chain leads back to a component-ref that is still being expanded."""

    def __init__(
            self,
            ref_id: str,
            ref_chain: Optional[list[str]] = None,
            location: Optional[SourceLocation] = None,
    ):
        self.ref_id = ref_id
        self.ref_chain = ref_chain or []
        hint = None
        if self.ref_chain:
            hint = f"Reference chain: {' -> '.join(self.ref_chain + [ref_id])}"
        super().__init__(
            f"Cyclic reference to component-ref '{ref_id}', not expanding it again",
            location=location,
            hint=hint,
        )


class FileError(ScapdsError):
    """Error in file operations."""

    def __init__(
            self,
            message: str,
            file_path: Optional[str] = None,
            location: Optional[SourceLocation] = None,
            hint: Optional[str] = None,
    ):
        self.file_path = file_path
        super().__init__(message, location, hint)


class PathTooLongError(FileError):
    """An output directory path exceeds the platform maximum."""

    def __init__(self, path: str, limit: int):
        self.limit = limit
        super().__init__(
            f"Path is longer than {limit} characters, not creating it",
            file_path=path,
        )


class PathTraversalError(FileError):
    """An output path escapes the decompose target directory."""

    def __init__(self, attempted_path: str, allowed_root: str):
        super().__init__(
            "Output path escapes the target directory",
            file_path=attempted_path,
            hint=f"Output is restricted to: {allowed_root}",
        )

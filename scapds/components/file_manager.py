"""
File Manager for scapds
Derives output paths from reference names, creates directories, and writes
component documents, refusing paths that escape the decompose directory.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
from lxml import etree
from scapds.core.logging import get_logger
from scapds.core.errors import FileError, PathTooLongError, PathTraversalError

if TYPE_CHECKING:
    from scapds.core.config import Config


@dataclass(frozen=True)
class TargetPath:
    """
    Where a reference's content goes.

    Attributes:
        directory: Directory holding the file; nested catalog output is rooted here
        file_path: Full path of the file to write
    """
    directory: str
    file_path: str


class FileManager:
    """
    Output file manager for decomposition.
    Usage:
        fm = FileManager(config, root="out")
        target = fm.resolve_target("out", "sub/dir/file-oval.xml")
        fm.write_document(tree, target.file_path)
    """

    def __init__(self, config: "Config" = None, root: Optional[str] = None):
        """
        Initialize the file manager.
        Args:
            config: Optional Config instance. If not provided, will be loaded.
            root: Directory all output must stay inside when restrict_to_target is set
        """
        self._config = config
        self.root = root
        self.logger = get_logger("scapds.file")

    @property
    def config(self) -> "Config":
        """Lazy-load config if not provided."""
        if self._config is None:
            from scapds.core.config import Config
            self._config = Config()
        return self._config

    def resolve_target(self, target_dir: str, relative_name: str) -> TargetPath:
        """
        Map a reference name onto the filesystem and make sure its directory exists.
        Args:
            target_dir: Base directory
            relative_name: Relative path from an href or catalog name, '/' separated
        Returns:
            The directory and file path for the name
        Raises:
            PathTraversalError: If the path leaves the root directory
            PathTooLongError: If the directory path exceeds max_path_length
            FileError: If the name has no file part or a directory cannot be created
        """
        # Leading "./" keeps absolute names under target_dir.
        reldir, basename = os.path.split("./" + relative_name)
        if not basename:
            raise FileError(f"Reference name '{relative_name}' does not name a file", file_path=relative_name)
        directory = os.path.normpath(os.path.join(target_dir, reldir))
        file_path = os.path.join(directory, basename)
        self._check_inside_root(file_path)
        self.ensure_directory(directory)
        return TargetPath(directory=directory, file_path=file_path)

    def _check_inside_root(self, path: str):
        if self.root is None or not self.config.restrict_to_target:
            return
        root = os.path.abspath(self.root)
        full_path = os.path.abspath(path)
        try:
            if os.path.commonpath([root, full_path]) != root:
                raise PathTraversalError(full_path, root)
        except ValueError:
            raise PathTraversalError(full_path, root)

    def ensure_directory(self, path: str):
        """
        Create ``path`` and any missing parents, like ``mkdir -p``.
        Existing directories are left alone.
        Raises:
            PathTooLongError: If the path exceeds max_path_length
            FileError: If a directory cannot be created
        """
        limit = self.config.max_path_length
        if len(path) > limit:
            raise PathTooLongError(path, limit)

        missing = []
        head = path
        while head and not os.path.isdir(head):
            missing.append(head)
            head = os.path.dirname(head)

        for directory in reversed(missing):
            try:
                os.mkdir(directory, self.config.directory_mode)
                self.logger.file("Created directory", directory)
            except FileExistsError:
                if not os.path.isdir(directory):
                    raise FileError("Path exists and is not a directory", file_path=directory)
            except OSError as e:
                raise FileError(f"Error creating directory: {e}", file_path=directory)

    def write_document(self, tree: etree._ElementTree, path: str):
        """
        Write a standalone document with an XML declaration.
        Raises:
            FileError: If the file cannot be written
        """
        self.logger.file("Writing", path)
        try:
            tree.write(
                path,
                encoding=self.config.output_encoding,
                xml_declaration=True,
                pretty_print=self.config.pretty_print,
            )
        except OSError as e:
            raise FileError(f"Error writing file: {e}", file_path=path)

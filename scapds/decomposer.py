"""
Decomposer for scapds
Splits a data-stream collection into standalone component files laid out
along the catalog references of its checklists.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING
from scapds.components.file_manager import FileManager
from scapds.components.reference_resolver import ReferenceResolver
from scapds.core.errors import (
    CyclicReferenceError,
    DataStreamNotFoundError,
    FatalError,
    InvalidReferenceError,
    MissingChecklistsError,
    ScapdsError,
)
from scapds.core.logging import ScapdsLogger, get_logger, set_log_level
from scapds.model.collection import Collection, ComponentRef, DataStream, Source

if TYPE_CHECKING:
    from scapds.core.config import Config


@dataclass
class DecomposeResult:
    """
    Outcome of a decompose run that was not aborted.

    Attributes:
        datastream_id: Id of the selected data-stream (None if it has none)
        target_dir: Directory the files were written under
        written: Paths of written files, in write order
        errors: Recoverable errors, in the order they occurred
    """
    datastream_id: Optional[str]
    target_dir: str
    written: List[str] = field(default_factory=list)
    errors: List[ScapdsError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class Extraction:
    """
    Recursive extraction of one data-stream's component-refs.

    Keeps the ids of component-refs being expanded on the current path so a
    catalog chain that loops back is reported instead of followed.
    """

    def __init__(
            self,
            collection: Collection,
            datastream: DataStream,
            file_manager: FileManager,
            result: DecomposeResult,
            logger: ScapdsLogger,
    ):
        self.collection = collection
        self.datastream = datastream
        self.file_manager = file_manager
        self.resolver = ReferenceResolver(collection)
        self.result = result
        self.logger = logger
        self._active: List[str] = []

    def report(self, error: ScapdsError):
        self.result.errors.append(error)
        self.logger.report(error)

    def dump_component_ref(self, ref: ComponentRef, target_dir: str):
        """Extract a checklist entry point, named after its href."""
        if ref.href is None:
            self.report(InvalidReferenceError(
                "No or invalid xlink:href attribute on given component-ref.",
                attribute="href",
                value=ref.raw_href,
                location=self.collection.location(ref.element),
            ))
            return
        self.dump_component_ref_as(ref, target_dir, ref.href.identifier)

    def dump_component_ref_as(self, ref: ComponentRef, target_dir: str, output_name: str):
        """
        Write the component behind ``ref`` to ``target_dir``/``output_name``,
        then follow its catalog with the written file's directory as the new base.
        """
        try:
            self.resolver.check_component_ref(ref)
        except InvalidReferenceError as e:
            self.report(e)
            return

        if ref.id in self._active:
            self.report(CyclicReferenceError(
                ref.id,
                ref_chain=list(self._active),
                location=self.collection.location(ref.element),
            ))
            return

        self._active.append(ref.id)
        try:
            self._dump(ref, target_dir, output_name)
        finally:
            self._active.pop()

    def _dump(self, ref: ComponentRef, target_dir: str, output_name: str):
        self.logger.resolve("Dumping component-ref", ref_id=ref.id, output_name=output_name)
        try:
            target = self.file_manager.resolve_target(target_dir, output_name)
            component = self.resolver.resolve_href(ref)
            document = self.collection.clone_component(component)
            self.file_manager.write_document(document, target.file_path)
        except ScapdsError as e:
            self.report(e)
            return
        self.result.written.append(target.file_path)

        if ref.catalog is None:
            return
        for entry in ref.catalog.entries:
            try:
                nested_ref = self.resolver.resolve_entry(self.datastream, entry)
            except ScapdsError as e:
                self.report(e)
                continue
            self.dump_component_ref_as(nested_ref, target.directory, entry.name)


class Decomposer:
    """
    Collection decomposer.
    Usage:
        decomposer = Decomposer()
        result = decomposer.decompose("ssg-rhel7-ds.xml", target_dir="out")
        for error in result.errors:
            print(error)
    """

    def __init__(self, config: "Config" = None):
        """
        Initialize the decomposer.
        Args:
            config: Optional Config instance
        """
        self._config = config
        self.logger = get_logger("scapds.decompose")

    @property
    def config(self) -> "Config":
        """Lazy-load config if not provided."""
        if self._config is None:
            from scapds.core.config import Config
            self._config = Config()
        return self._config

    def decompose(
            self,
            source: Source,
            datastream_id: Optional[str] = None,
            target_dir: str = "",
    ) -> DecomposeResult:
        """
        Write every component reachable from the selected data-stream's checklists.
        Args:
            source: Path or binary file object of the collection
            datastream_id: Data-stream to use; the first one when None
            target_dir: Output directory; empty means the configured default
        Returns:
            Written files and recoverable errors
        Raises:
            ReadError: If the source cannot be read or parsed
            DataStreamNotFoundError: If no data-stream matches
            MissingChecklistsError: If the data-stream has no checklists
        """
        target_dir = target_dir or self.config.default_target_dir
        set_log_level(self.config.log_level)
        self.logger.build("Starting decompose", source=str(source), datastream=datastream_id, target_dir=target_dir)
        try:
            collection, datastream = self._select(source, datastream_id)
        except FatalError as e:
            self.logger.report(e)
            raise

        result = DecomposeResult(datastream_id=datastream.id, target_dir=target_dir)
        extraction = Extraction(
            collection,
            datastream,
            FileManager(self.config, root=target_dir),
            result,
            self.logger,
        )
        for ref in datastream.checklists.refs:
            extraction.dump_component_ref(ref, target_dir)

        self.logger.build("Decompose complete", files_written=len(result.written), errors=len(result.errors))
        return result

    def _select(self, source: Source, datastream_id: Optional[str]):
        collection = Collection.parse(source)
        datastream = collection.datastream(datastream_id)
        if datastream is None:
            raise DataStreamNotFoundError(datastream_id)
        if datastream.checklists is None:
            raise MissingChecklistsError(
                "No checklists element found in the matching datastream.",
                location=collection.location(datastream.element),
            )
        return collection, datastream


def decompose(
        source: Source,
        datastream_id: Optional[str] = None,
        target_dir: str = "",
        config: "Config" = None,
) -> DecomposeResult:
    """Decompose ``source`` into ``target_dir`` with a one-off Decomposer."""
    return Decomposer(config).decompose(source, datastream_id, target_dir)

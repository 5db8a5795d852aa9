"""
Composer for scapds
Builds a data-stream collection from component files, sorting each file into
a container by its name.
"""
from __future__ import annotations
import os
from typing import Optional
from lxml import etree
from scapds.core.errors import ReadError
from scapds.core.logging import get_logger
from scapds.model import namespaces as ns
from scapds.model.collection import Collection, Component, ComponentRef, DataStream
from scapds.model.references import Reference

# Checked in order; the CPE suffixes come first because they also end in "-oval.xml".
# They carry no leading separator so "_cpe-dictionary.xml" names match too.
CONTAINER_SUFFIXES = (
    ("cpe-oval.xml", ns.DICTIONARIES),
    ("cpe-dictionary.xml", ns.DICTIONARIES),
    ("-xccdf.xml", ns.CHECKLISTS),
    ("-oval.xml", ns.CHECKS),
)


def classify_component(filepath: str) -> str:
    """Container a component file belongs in, judged by its name."""
    for suffix, container in CONTAINER_SUFFIXES:
        if filepath.endswith(suffix):
            return container
    return ns.EXTENDED_COMPONENTS


class Composer:
    """
    Collection composer.
    Usage:
        composer = Composer()
        collection = composer.compose("ssg-rhel7-xccdf.xml", "scap_org.open-scap_datastream_rhel7")
        collection.write("ssg-rhel7-ds.xml")
    """

    def __init__(self):
        self.logger = get_logger("scapds.compose")

    def add_component_with_ref(self, datastream: DataStream, filepath: str, ref_id: str) -> ComponentRef:
        """
        Register ``filepath`` in the container its name calls for.
        The component-ref gets ``#<filepath>`` as href and an empty catalog.
        """
        container = classify_component(filepath)
        self.logger.debug("Adding component-ref", ref_id=ref_id, container=container)
        return datastream.add_component_ref(container, ref_id, Reference.to_component(filepath))

    def add_component(self, collection: Collection, filepath: str, component_id: str) -> Component:
        """
        Embed the content of ``filepath`` as a component.
        Raises:
            ReadError: If the file cannot be read or parsed
        """
        parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
        try:
            content = etree.parse(os.fspath(filepath), parser).getroot()
        except (OSError, etree.XMLSyntaxError) as e:
            raise ReadError(
                f"Could not read/parse XML of component file at path '{filepath}'.",
                source=filepath,
                hint=str(e),
            )
        self.logger.file("Embedding", filepath, component_id=component_id)
        return collection.add_component(component_id, content)

    def compose(
            self,
            entry_component_file: str,
            target_datastream_name: Optional[str] = None,
            embed: bool = False,
    ) -> Collection:
        """
        Build a collection with one data-stream whose only entry point is
        ``entry_component_file``.

        The entry's catalog is left empty; dependencies of the entry point
        are not discovered.

        Args:
            entry_component_file: Path of the entry component file
            target_datastream_name: Id of the created data-stream
            embed: Also read the file and store it as the referenced component
        Returns:
            The in-memory collection; serializing it is up to the caller
        """
        self.logger.build("Starting compose", entry=entry_component_file, datastream=target_datastream_name)
        collection = Collection.new()
        datastream = collection.add_datastream(target_datastream_name)
        ref = self.add_component_with_ref(datastream, entry_component_file, entry_component_file)
        if embed:
            try:
                self.add_component(collection, entry_component_file, ref.href.identifier)
            except ReadError as e:
                self.logger.report(e)
                raise
        self.logger.build("Compose complete", refs=len(list(datastream.iter_component_refs())))
        return collection


def compose(
        entry_component_file: str,
        target_datastream_name: Optional[str] = None,
        embed: bool = False,
) -> Collection:
    """Compose a collection around ``entry_component_file`` with a one-off Composer."""
    return Composer().compose(entry_component_file, target_datastream_name, embed=embed)
